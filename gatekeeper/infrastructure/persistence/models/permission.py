"""Permission, RolePermission, and UserRole ORM models (RBAC).

The two link tables have no identity beyond the pair: the composite
primary key is the pair itself, so a duplicate grant cannot exist.
"""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gatekeeper.infrastructure.persistence.database import Base
from gatekeeper.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Permission(CuidMixin, TimestampMixin, Base):
    """Permission. Table: permission. Unique name (e.g. posts.create)."""

    __tablename__ = "permission"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class RolePermission(Base):
    """Many-to-many role-permission. Table: permission_role."""

    __tablename__ = "permission_role"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True
    )
    permission_id: Mapped[str] = mapped_column(
        String, ForeignKey("permission.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("ix_permission_role_permission", "permission_id"),)


class UserRole(Base):
    """Many-to-many principal-role. Table: role_user."""

    __tablename__ = "role_user"

    principal_id: Mapped[str] = mapped_column(
        String, ForeignKey("principal.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("role.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("ix_role_user_role", "role_id"),)
