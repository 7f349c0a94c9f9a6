"""Enumerations carried by resource fields."""

from enum import Enum


class ApiKeyStatus(str, Enum):
    """Lifecycle status of an API key. Inactive keys never authenticate."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class EmbedderProviderType(str, Enum):
    """Protocol spoken by an embedder endpoint."""

    OPENAI = "openai"
    VLLM = "vllm"
    TEI = "tei"


class Modality(str, Enum):
    """Input modality an embedder accepts."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
