"""Embedder entity.

An embedder describes a remote embedding model endpoint. The combination of
endpoint URL, API path and model identifier is unique.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from tenantry.domain.entities.resource import Resource
from tenantry.domain.enums import EmbedderProviderType, Modality, ResourceType

DEFAULT_API_PATH = "/v1/embeddings"


@dataclass(kw_only=True)
class Embedder(Resource):
    """Embedding model endpoint.

    Attributes:
        display_name: Human-readable name.
        provider_type: Protocol the endpoint speaks.
        endpoint_url: Base URL of the endpoint.
        model_identifier: Model name sent to the endpoint.
        dimensionality: Length of produced vectors (> 0).
        credentials: Secret sent to the endpoint. Never logged.
        api_path: Path appended to the endpoint URL.
        description: Free text.
        max_sequence_length: Longest accepted input, if bounded.
        supported_modalities: Accepted input modalities.
        version: Model version tag.
        monitoring_endpoint: Health/metrics URL.
    """

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.EMBEDDER

    display_name: str
    provider_type: EmbedderProviderType
    endpoint_url: str
    model_identifier: str
    dimensionality: int
    credentials: str = field(repr=False)
    api_path: str = DEFAULT_API_PATH
    description: str | None = None
    max_sequence_length: int | None = None
    supported_modalities: list[Modality] = field(
        default_factory=lambda: [Modality.TEXT]
    )
    version: str | None = None
    monitoring_endpoint: str | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.display_name or not self.display_name.strip():
            raise ValueError("Embedder display name cannot be empty")
        if self.dimensionality <= 0:
            raise ValueError("Embedder dimensionality must be positive")
        if not self.supported_modalities:
            raise ValueError("Embedder must support at least one modality")

    @property
    def connection_key(self) -> tuple[str, str, str]:
        """Fields that identify the endpoint uniquely."""
        return (self.endpoint_url, self.api_path, self.model_identifier)
