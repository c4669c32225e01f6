"""Domain exceptions for gatekeeper.

Defines domain-level exceptions that represent caller or data errors.
A denied role or permission check is never an exception; only the
explicit require_* helpers raise AuthorizationException. Presentation
layer maps these to HTTP responses in exception handlers.
"""

from typing import Any


class GatekeeperException(Exception):
    """Base exception for all gatekeeper errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentException(GatekeeperException):
    """Raised when a caller passes an argument the core cannot accept.

    Covers ability() options (validate_all not a bool, unknown return_type)
    and attach/detach targets that are neither an id, an entity with an id,
    nor a mapping with an "id" key.
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        """Initialize with message and optional argument name.

        Args:
            message: Description of what was wrong.
            argument: Optional name of the offending argument or option.
        """
        details = {"argument": argument} if argument else {}
        super().__init__(message, "INVALID_ARGUMENT", details)


class AuthorizationException(GatekeeperException):
    """Raised by require_* helpers when the principal fails the check."""

    def __init__(
        self,
        principal_id: str | None = None,
        requirement: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional principal, requirement, and message.

        Args:
            principal_id: Principal that was checked.
            requirement: Short description of what was required (e.g. 'role:admin').
            message: Human-readable message; default used when requirement omitted.
        """
        if requirement:
            message = f"Permission denied: {requirement}"
        details: dict[str, Any] = {}
        if principal_id:
            details["principal_id"] = principal_id
        if requirement:
            details["requirement"] = requirement
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(GatekeeperException):
    """Raised by the assignment store when an attach/detach endpoint does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'permission').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConfigurationException(GatekeeperException):
    """Raised when a relation name, entity type or backend is not configured."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        details = {"setting": setting} if setting else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)
