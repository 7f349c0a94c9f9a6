"""Base model for resource tables.

Every resource table carries the shared resource columns:
    - id: UUID primary key
    - owner_id: owning user
    - labels: JSON object (JSONB on PostgreSQL)
    - created_at / updated_at: timezone-aware timestamps
    - created_by_id / updated_by_id: acting users

Timestamps are written by the application (injected Clock); the server
defaults only cover rows inserted outside the application.

Note: SQLAlchemy's generic Uuid and JSON types keep the models usable on
both PostgreSQL and SQLite.
"""

from datetime import datetime
from typing import Any
from uuid import UUID as PythonUUID

from sqlalchemy import JSON, DateTime, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

LabelsType = JSON().with_variant(JSONB(), "postgresql")


class BaseModel(DeclarativeBase):
    """Declarative base for all tables."""

    __abstract__ = True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class ResourceModel(BaseModel):
    """Abstract base providing the shared resource columns."""

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        nullable=False,
    )

    owner_id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Owning user",
    )

    labels: Mapped[dict[str, Any]] = mapped_column(
        LabelsType,
        nullable=False,
        default=dict,
        comment="User-defined string key/value metadata",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    created_by_id: Mapped[PythonUUID | None] = mapped_column(
        Uuid,
        nullable=True,
        comment="User that created the row",
    )

    updated_by_id: Mapped[PythonUUID | None] = mapped_column(
        Uuid,
        nullable=True,
        comment="User that last modified the row",
    )
