"""Principal ORM model. Soft-deletable: deleted principals keep their roles."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from gatekeeper.infrastructure.persistence.database import Base
from gatekeeper.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class Principal(CuidMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Principal (user being authorized). Table: principal."""

    __tablename__ = "principal"

    name: Mapped[str] = mapped_column(String, nullable=False)
