"""Embedder commands."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tenantry.domain.enums import EmbedderProviderType, Modality


@dataclass(frozen=True, kw_only=True)
class CreateEmbedder:
    """Register an embedding endpoint.

    ``endpoint_url``, ``api_path`` and ``model_identifier`` together must be
    unique.
    """

    display_name: str
    provider_type: EmbedderProviderType
    endpoint_url: str
    model_identifier: str
    dimensionality: int
    credentials: str = field(repr=False)
    owner_id: Any = None
    api_path: str | None = None
    description: str | None = None
    max_sequence_length: int | None = None
    supported_modalities: Sequence[Modality] | None = None
    labels: Mapping[str, str] = field(default_factory=dict)
    version: str | None = None
    monitoring_endpoint: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateEmbedder:
    """Update an embedder. Fields left as None are unchanged."""

    embedder_id: Any
    display_name: str | None = None
    description: str | None = None
    endpoint_url: str | None = None
    api_path: str | None = None
    model_identifier: str | None = None
    dimensionality: int | None = None
    max_sequence_length: int | None = None
    supported_modalities: Sequence[Modality] | None = None
    credentials: str | None = field(default=None, repr=False)
    replace_labels: Mapping[str, str] | None = None
    merge_labels: Mapping[str, str] | None = None
    version: str | None = None
    monitoring_endpoint: str | None = None
