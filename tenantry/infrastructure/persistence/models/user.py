"""User database model. ``owner_id`` always equals ``id``."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from tenantry.infrastructure.persistence.base import ResourceModel


class UserModel(ResourceModel):
    """Registered user."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Unique email address",
    )

    username: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        unique=True,
    )

    display_name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    roles: Mapped[list[Any]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Role names (root, admin, user)",
    )
