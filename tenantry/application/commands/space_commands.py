"""Space commands.

Identifiers are accepted raw (UUID, string or 16 bytes) and validated by the
service, so malformed ids surface as ValidationError results.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, kw_only=True)
class CreateSpace:
    """Create a space.

    Attributes:
        name: Space name, unique per owner.
        owner_id: Owner to create the space for; defaults to the actor.
        embedder_id: Embedder for the space; defaults to the configured one.
        labels: Initial labels.
        public_read: Readable by every authenticated actor.
    """

    name: str
    owner_id: Any = None
    embedder_id: Any = None
    labels: Mapping[str, str] = field(default_factory=dict)
    public_read: bool = False


@dataclass(frozen=True, kw_only=True)
class UpdateSpace:
    """Update a space. Fields left as None are unchanged.

    The embedder of a space cannot change.
    """

    space_id: Any
    name: str | None = None
    replace_labels: Mapping[str, str] | None = None
    merge_labels: Mapping[str, str] | None = None
    public_read: bool | None = None
