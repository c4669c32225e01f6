"""Authorization service: role, permission and ability checks over cached resolvers.

Role names match exactly (case-sensitive). Permission names are matched
against the query as a shell-style wildcard pattern, so ``posts.*``
covers ``posts.create``. A denied check returns False; only the
require_* helpers raise.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from fnmatch import fnmatchcase
from typing import Any

from gatekeeper.application.dtos.ability import (
    AbilityOptions,
    AbilityReport,
    AbilityResult,
)
from gatekeeper.application.interfaces.services import IPermissionResolver, IRoleResolver
from gatekeeper.core.constants import NAME_LIST_SEP, RETURN_TYPE_ARRAY, RETURN_TYPE_BOOLEAN
from gatekeeper.domain.exceptions import AuthorizationException
from gatekeeper.domain.value_objects.core import target_id
from gatekeeper.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

NameOrNames = str | Sequence[str]


def split_names(value: NameOrNames) -> list[str]:
    """Normalize a comma-separated string or a sequence of names to a list.

    Strings are split on ',' as-is; surrounding whitespace is kept.
    """
    if isinstance(value, str):
        return value.split(NAME_LIST_SEP)
    return list(value)


async def check_names(
    names: Iterable[str],
    require_all: bool,
    check: Callable[[str], Awaitable[bool]],
) -> bool:
    """Evaluate check per name with any/all short-circuiting.

    Returns True on the first match when not require_all, False on the first
    miss when require_all; otherwise require_all itself (so an empty list is
    False for "any" and vacuously True for "all").
    """
    for name in names:
        matched = await check(name)
        if matched and not require_all:
            return True
        if not matched and require_all:
            return False
    return require_all


class AuthorizationService:
    """Evaluation engine: has_role, can/has_permission, ability."""

    def __init__(
        self,
        role_resolver: IRoleResolver,
        permission_resolver: IPermissionResolver,
    ) -> None:
        self.role_resolver = role_resolver
        self.permission_resolver = permission_resolver

    async def get_role_names(self, principal: Any) -> set[str]:
        """Return names of the principal's roles (cached)."""
        principal_id = target_id(principal, "principal")
        return {role.name for role in await self.role_resolver.resolve_roles(principal_id)}

    async def get_permission_names(self, principal: Any) -> list[str]:
        """Return permission names across all of the principal's roles (cached per role)."""
        principal_id = target_id(principal, "principal")
        names: list[str] = []
        for role in await self.role_resolver.resolve_roles(principal_id):
            names.extend(
                p.name for p in await self.permission_resolver.resolve_permissions(role.id)
            )
        return names

    @traced("gatekeeper.has_role")
    async def has_role(
        self, principal: Any, name: NameOrNames, require_all: bool = False
    ) -> bool:
        """Return True if the principal has the role (or any/all of the roles).

        Args:
            principal: Principal id, entity with ``id``, or mapping with ``"id"``.
            name: Role name, or a sequence of role names.
            require_all: With a sequence, require every name instead of any.
        """
        role_names = await self.get_role_names(principal)

        async def check(role_name: str) -> bool:
            return role_name in role_names

        if isinstance(name, str):
            return await check(name)
        return await check_names(name, require_all, check)

    @traced("gatekeeper.can")
    async def can(
        self, principal: Any, permission: NameOrNames, require_all: bool = False
    ) -> bool:
        """Return True if any of the principal's roles grants the permission.

        Each query name is a wildcard pattern matched against granted
        permission names (fnmatchcase: '*' spans any characters, case-sensitive).
        """
        granted = await self.get_permission_names(principal)

        async def check(pattern: str) -> bool:
            return any(fnmatchcase(granted_name, pattern) for granted_name in granted)

        if isinstance(permission, str):
            return await check(permission)
        return await check_names(permission, require_all, check)

    has_permission = can

    @traced("gatekeeper.role_has_permission")
    async def role_has_permission(
        self, role: Any, name: NameOrNames, require_all: bool = False
    ) -> bool:
        """Return True if the role itself grants the permission (exact name match)."""
        role_id = target_id(role, "role")
        granted = {p.name for p in await self.permission_resolver.resolve_permissions(role_id)}

        async def check(permission_name: str) -> bool:
            return permission_name in granted

        if isinstance(name, str):
            return await check(name)
        return await check_names(name, require_all, check)

    @traced("gatekeeper.ability")
    async def ability(
        self,
        principal: Any,
        roles: NameOrNames,
        permissions: NameOrNames,
        options: Mapping[str, Any] | AbilityOptions | None = None,
    ) -> AbilityResult:
        """Check roles and permissions together.

        Each name is checked on its own. With validate_all the result is True
        only if no check failed; otherwise True if any check passed.

        Args:
            principal: Principal id, entity with ``id``, or mapping with ``"id"``.
            roles: Role names as a list or comma-separated string.
            permissions: Permission patterns as a list or comma-separated string.
            options: validate_all (bool, default False) and return_type
                ('boolean' | 'array' | 'both', default 'boolean').

        Returns:
            bool for 'boolean'; {'roles': {...}, 'permissions': {...}} for
            'array'; (bool, that mapping) for 'both'.

        Raises:
            InvalidArgumentException: If options are invalid (before any check runs).
        """
        opts = options if isinstance(options, AbilityOptions) else AbilityOptions.from_mapping(options)
        principal_id = target_id(principal, "principal")
        checked_roles = {
            role: await self.has_role(principal_id, role) for role in split_names(roles)
        }
        checked_permissions = {
            permission: await self.can(principal_id, permission)
            for permission in split_names(permissions)
        }
        results = [*checked_roles.values(), *checked_permissions.values()]
        if opts.validate_all:
            allowed = False not in results
        else:
            allowed = True in results
        add_span_attributes(**{"gatekeeper.ability.allowed": allowed})
        logger.debug(
            "ability principal=%s validate_all=%s allowed=%s", principal_id, opts.validate_all, allowed
        )
        if opts.return_type == RETURN_TYPE_BOOLEAN:
            return allowed
        report: AbilityReport = {"roles": checked_roles, "permissions": checked_permissions}
        if opts.return_type == RETURN_TYPE_ARRAY:
            return report
        return allowed, report

    async def require_role(
        self, principal: Any, name: NameOrNames, require_all: bool = False
    ) -> None:
        """Raise AuthorizationException if has_role() is False."""
        principal_id = target_id(principal, "principal")
        if not await self.has_role(principal_id, name, require_all):
            raise AuthorizationException(principal_id, f"role:{_describe(name)}")

    async def require_permission(
        self, principal: Any, permission: NameOrNames, require_all: bool = False
    ) -> None:
        """Raise AuthorizationException if can() is False."""
        principal_id = target_id(principal, "principal")
        if not await self.can(principal_id, permission, require_all):
            raise AuthorizationException(principal_id, f"permission:{_describe(permission)}")

    async def require_ability(
        self,
        principal: Any,
        roles: NameOrNames,
        permissions: NameOrNames,
        validate_all: bool = False,
    ) -> None:
        """Raise AuthorizationException if ability() evaluates to False."""
        principal_id = target_id(principal, "principal")
        allowed = await self.ability(
            principal_id, roles, permissions, AbilityOptions.from_mapping({"validate_all": validate_all})
        )
        if not allowed:
            raise AuthorizationException(
                principal_id, f"ability:{_describe(roles)}|{_describe(permissions)}"
            )


def _describe(value: NameOrNames) -> str:
    return value if isinstance(value, str) else NAME_LIST_SEP.join(value)
