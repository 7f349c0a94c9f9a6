"""User entity. A user owns itself."""

from dataclasses import dataclass, field
from typing import ClassVar

from tenantry.domain.entities.resource import Resource
from tenantry.domain.enums import ResourceType


@dataclass(kw_only=True)
class User(Resource):
    """Registered user.

    Attributes:
        email: Unique email address.
        username: Optional handle.
        display_name: Optional display name.
        roles: Stored role names (see ``tenantry.domain.roles``).
    """

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.USER

    email: str
    username: str | None = None
    display_name: str | None = None
    roles: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.owner_id != self.id:
            raise ValueError("A user must own itself")
        if not self.email or "@" not in self.email:
            raise ValueError(f"Invalid email: {self.email!r}")
