"""Unit tests for AssignmentService (mutations, invalidation, lifecycle hooks)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from gatekeeper.application.dtos.permission import PermissionResult
from gatekeeper.application.dtos.role import RoleResult
from gatekeeper.application.services.assignment_service import AssignmentService
from gatekeeper.domain.exceptions import (
    ConfigurationException,
    InvalidArgumentException,
    ResourceNotFoundException,
)


@pytest.fixture
def store() -> AsyncMock:
    store = AsyncMock()
    store.supports_soft_delete = MagicMock(return_value=False)
    return store


@pytest.fixture
def cache() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def svc(store: AsyncMock, cache: AsyncMock, settings) -> AssignmentService:
    return AssignmentService(store, cache, settings)


class TestRoleAssignment:
    async def test_attach_role_accepts_any_target_shape(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.attach_role("p1", SimpleNamespace(id="r1"))
        await svc.attach_role({"id": "p1"}, {"id": "r2"})
        await svc.attach_role(SimpleNamespace(id="p1"), "r3")
        assert store.attach.await_args_list == [
            call("role_user", "p1", "r1"),
            call("role_user", "p1", "r2"),
            call("role_user", "p1", "r3"),
        ]
        assert cache.invalidate.await_args_list == [call("role_user")] * 3

    async def test_detach_role(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.detach_role("p1", 5)
        store.detach.assert_awaited_once_with("role_user", "p1", "5")
        cache.invalidate.assert_awaited_once_with("role_user")

    async def test_invalidated_tags_are_recorded_as_pending(
        self, store: AsyncMock, cache: AsyncMock, settings
    ) -> None:
        pending: set[str] = set()
        svc = AssignmentService(store, cache, settings, pending)
        await svc.attach_role("p1", "r1")
        await svc.save_permissions("r1", ["x1"])
        assert pending == {"role_user", "permission_role"}

    async def test_plural_invalidates_once(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.attach_roles("p1", ["r1", "r2", "r3"])
        assert store.attach.await_count == 3
        cache.invalidate.assert_awaited_once_with("role_user")

    async def test_detach_roles_without_argument_detaches_current(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        store.fetch_roles.return_value = [RoleResult("r1", "admin"), RoleResult("r2", "editor")]
        await svc.detach_roles("p1")
        store.fetch_roles.assert_awaited_once_with("p1")
        assert store.detach.await_args_list == [
            call("role_user", "p1", "r1"),
            call("role_user", "p1", "r2"),
        ]
        cache.invalidate.assert_awaited_once_with("role_user")

    async def test_detach_roles_with_empty_list_detaches_current(
        self, svc: AssignmentService, store: AsyncMock
    ) -> None:
        store.fetch_roles.return_value = [RoleResult("r1", "admin")]
        await svc.detach_roles("p1", [])
        store.detach.assert_awaited_once_with("role_user", "p1", "r1")

    async def test_invalid_target_rejected_before_store_call(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        with pytest.raises(InvalidArgumentException):
            await svc.attach_roles("p1", ["r1", 1.5])
        store.attach.assert_not_awaited()
        cache.invalidate.assert_not_awaited()

    async def test_store_error_propagates_without_invalidation(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        store.attach.side_effect = ResourceNotFoundException("role", "missing")
        with pytest.raises(ResourceNotFoundException):
            await svc.attach_role("p1", "missing")
        cache.invalidate.assert_not_awaited()


class TestPermissionGrants:
    async def test_attach_and_detach_permission(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.attach_permission("r1", "x1")
        await svc.detach_permission("r1", {"id": "x1"})
        store.attach.assert_awaited_once_with("permission_role", "r1", "x1")
        store.detach.assert_awaited_once_with("permission_role", "r1", "x1")
        assert cache.invalidate.await_args_list == [call("permission_role")] * 2

    async def test_attach_permissions(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.attach_permissions("r1", ["x1", "x2"])
        assert store.attach.await_count == 2
        cache.invalidate.assert_awaited_once_with("permission_role")

    async def test_detach_permissions_without_argument(
        self, svc: AssignmentService, store: AsyncMock
    ) -> None:
        store.fetch_permissions.return_value = [PermissionResult("x1", "posts.create")]
        await svc.detach_permissions("r1", None)
        store.detach.assert_awaited_once_with("permission_role", "r1", "x1")

    async def test_save_permissions_syncs(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.save_permissions("r1", ["x1", SimpleNamespace(id="x2")])
        store.sync.assert_awaited_once_with("permission_role", "r1", ["x1", "x2"])
        store.detach_all.assert_not_awaited()
        cache.invalidate.assert_awaited_once_with("permission_role")

    async def test_save_permissions_empty_detaches_all(
        self, svc: AssignmentService, store: AsyncMock, cache: AsyncMock
    ) -> None:
        await svc.save_permissions("r1", [])
        store.detach_all.assert_awaited_once_with("permission_role", "r1")
        store.sync.assert_not_awaited()
        cache.invalidate.assert_awaited_once_with("permission_role")


class TestLifecycleHooks:
    async def test_before_delete_cascades_hard_deleted_types(
        self, svc: AssignmentService, store: AsyncMock
    ) -> None:
        await svc.before_delete("role", "r1")
        store.delete_cascade.assert_awaited_once_with("role", "r1")

    async def test_before_delete_skips_soft_deleted_types(
        self, svc: AssignmentService, store: AsyncMock
    ) -> None:
        store.supports_soft_delete.return_value = True
        await svc.before_delete("principal", "p1")
        store.delete_cascade.assert_not_awaited()

    async def test_on_save_principal(
        self, svc: AssignmentService, cache: AsyncMock
    ) -> None:
        assert await svc.on_save("principal", "p1", True) is True
        cache.invalidate.assert_awaited_once_with("role_user")

    async def test_on_save_role_invalidates_both_tags(
        self, svc: AssignmentService, cache: AsyncMock
    ) -> None:
        assert await svc.on_save("role", "r1", True) is True
        assert cache.invalidate.await_args_list == [call("permission_role"), call("role_user")]

    async def test_failed_write_skips_invalidation(
        self, svc: AssignmentService, cache: AsyncMock
    ) -> None:
        assert await svc.on_save("role", "r1", False) is False
        assert await svc.on_delete("principal", "p1", False) is False
        assert await svc.on_restore("principal", "p1", False) is False
        cache.invalidate.assert_not_awaited()

    async def test_on_delete(self, svc: AssignmentService, cache: AsyncMock) -> None:
        assert await svc.on_delete("principal", "p1", True) is True
        cache.invalidate.assert_awaited_once_with("role_user")

    async def test_on_restore_role_invalidates_on_success(
        self, svc: AssignmentService, cache: AsyncMock
    ) -> None:
        assert await svc.on_restore("role", "r1", True) is True
        assert cache.invalidate.await_count == 2
        cache.invalidate.reset_mock()
        assert await svc.on_restore("role", "r1", False) is False
        cache.invalidate.assert_not_awaited()

    async def test_on_restore_role_inverted(
        self, store: AsyncMock, cache: AsyncMock, make_settings
    ) -> None:
        """Legacy mode: a role invalidates only when restore reports failure."""
        svc = AssignmentService(store, cache, make_settings(role_restore_inverted=True))
        assert await svc.on_restore("role", "r1", True) is True
        cache.invalidate.assert_not_awaited()
        assert await svc.on_restore("role", "r1", False) is False
        assert cache.invalidate.await_count == 2

    async def test_on_restore_principal_ignores_inversion(
        self, store: AsyncMock, cache: AsyncMock, make_settings
    ) -> None:
        svc = AssignmentService(store, cache, make_settings(role_restore_inverted=True))
        await svc.on_restore("principal", "p1", True)
        cache.invalidate.assert_awaited_once_with("role_user")

    async def test_unknown_entity_type(self, svc: AssignmentService) -> None:
        with pytest.raises(ConfigurationException):
            await svc.on_save("invoice", "i1", True)
