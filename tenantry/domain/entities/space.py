"""Space entity.

A space is a named collection bound to one embedder. Names are unique per
owner; the embedder is fixed at creation.
"""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from tenantry.domain.entities.resource import Resource
from tenantry.domain.enums import ResourceType


@dataclass(kw_only=True)
class Space(Resource):
    """Space owned by a user.

    Attributes:
        name: Display name, unique per owner.
        embedder_id: Embedder used for the space's content.
        public_read: Readable by every authenticated actor.
    """

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.SPACE

    name: str
    embedder_id: UUID
    public_read: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.name or not self.name.strip():
            raise ValueError("Space name cannot be empty")

    @property
    def is_public(self) -> bool:
        return self.public_read
