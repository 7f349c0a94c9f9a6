"""ActorResolver protocol.

Produces the Actor for an inbound credential. Implemented by the API key
authenticator; transport adapters may provide others (sessions, tokens).
"""

from typing import Protocol

from tenantry.domain.entities.actor import Actor


class ActorResolver(Protocol):
    """Turns a presented credential into an Actor."""

    async def resolve(self, credential: str | None) -> Actor | None:
        """Resolve a credential.

        Returns:
            The authenticated actor, or None for unauthenticated callers.
        """
        ...
