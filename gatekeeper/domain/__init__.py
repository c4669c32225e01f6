"""Domain layer: value objects and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from gatekeeper.domain.exceptions import (
    AuthorizationException,
    ConfigurationException,
    GatekeeperException,
    InvalidArgumentException,
    ResourceNotFoundException,
)
from gatekeeper.domain.value_objects import (
    EntityRef,
    IdRef,
    RecordRef,
    TargetRef,
    normalize_target,
)

__all__ = [
    # Exceptions
    "GatekeeperException",
    "InvalidArgumentException",
    "AuthorizationException",
    "ResourceNotFoundException",
    "ConfigurationException",
    # Value objects
    "IdRef",
    "EntityRef",
    "RecordRef",
    "TargetRef",
    "normalize_target",
]
