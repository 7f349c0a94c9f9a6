"""Space database model.

Indexes:
    - uq_spaces_owner_name: one name per owner
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tenantry.infrastructure.persistence.base import ResourceModel


class SpaceModel(ResourceModel):
    """Space owned by a user."""

    __tablename__ = "spaces"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    embedder_id: Mapped[UUID] = mapped_column(
        ForeignKey("embedders.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Embedder used by the space (immutable)",
    )

    public_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Readable by every authenticated user",
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_spaces_owner_name"),
    )
