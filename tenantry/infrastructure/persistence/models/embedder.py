"""Embedder database model.

Indexes:
    - uq_embedders_connection: unique (endpoint_url, api_path, model_identifier)
"""

from typing import Any

from sqlalchemy import JSON, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tenantry.infrastructure.persistence.base import ResourceModel


class EmbedderModel(ResourceModel):
    """Embedding endpoint."""

    __tablename__ = "embedders"

    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    provider_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    endpoint_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    api_path: Mapped[str] = mapped_column(String(255), nullable=False)
    model_identifier: Mapped[str] = mapped_column(String(255), nullable=False)
    dimensionality: Mapped[int] = mapped_column(Integer, nullable=False)
    max_sequence_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    supported_modalities: Mapped[list[Any]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    credentials: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Secret sent to the endpoint",
    )
    version: Mapped[str | None] = mapped_column(String(100), nullable=True)
    monitoring_endpoint: Mapped[str | None] = mapped_column(
        String(1024),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "endpoint_url",
            "api_path",
            "model_identifier",
            name="uq_embedders_connection",
        ),
    )
