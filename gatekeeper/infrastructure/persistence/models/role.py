"""Role ORM model. Hard delete: deleting a role cascades its relation rows."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gatekeeper.infrastructure.persistence.database import Base
from gatekeeper.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Role(CuidMixin, TimestampMixin, Base):
    """Role. Table: role. Unique name (case-sensitive)."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
