"""API key database model.

Only the display prefix and the SHA3-256 hex digest of the key are stored.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from tenantry.infrastructure.persistence.base import ResourceModel


class ApiKeyModel(ResourceModel):
    """API key record."""

    __tablename__ = "api_keys"

    key_prefix: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        comment="Leading characters of the key, for identification",
    )

    key_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="SHA3-256 hex digest of the key",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        index=True,
    )

    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
