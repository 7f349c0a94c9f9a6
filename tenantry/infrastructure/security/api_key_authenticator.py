"""API key authentication.

Resolves a presented API key into an Actor:

    1. Reject keys without the configured prefix
    2. Look up the key by its hash
    3. Reject inactive or expired keys
    4. Load the owning user and build its role
    5. Record the use

Any rejection yields None (unauthenticated); reasons are logged, never
returned to the caller.
"""

from tenantry.core.result import Failure
from tenantry.domain.entities import Actor, ApiKey, User
from tenantry.domain.enums import ResourceType
from tenantry.domain.protocols import Clock, LoggerProtocol, ResourceStore
from tenantry.domain.roles import resolve_roles
from tenantry.infrastructure.security.secret_codec import SecretCodec

API_KEY_HEADER = "x-api-key"


class ApiKeyAuthenticator:
    """ActorResolver backed by stored API keys."""

    def __init__(
        self,
        *,
        store: ResourceStore,
        codec: SecretCodec,
        clock: Clock,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._codec = codec
        self._clock = clock
        self._logger = logger

    async def resolve(self, credential: str | None) -> Actor | None:
        """Resolve a raw API key.

        Raises:
            ResourceStoreError: Store failure while looking up the key.
        """
        if not credential:
            return None

        hashed = self._codec.hash_secret(credential.strip())
        # Prefix check happens before any store access.
        if isinstance(hashed, Failure):
            self._logger.info("api_key_rejected", reason="malformed")
            return None

        raw_secret = credential.strip()
        matches = await self._store.load_by_attributes(
            ResourceType.APIKEY, key_hash=hashed.value
        )
        api_key = next(
            (
                key
                for key in matches
                if isinstance(key, ApiKey)
                and self._codec.verify(raw_secret, key.key_hash)
            ),
            None,
        )
        if api_key is None:
            self._logger.info("api_key_rejected", reason="unknown")
            return None

        now = self._clock.now()
        if not api_key.is_usable(now):
            self._logger.info(
                "api_key_rejected",
                reason="inactive_or_expired",
                key_prefix=api_key.key_prefix,
            )
            return None

        user = await self._store.load_by_id(ResourceType.USER, api_key.owner_id)
        if not isinstance(user, User):
            self._logger.warning(
                "api_key_owner_missing",
                key_prefix=api_key.key_prefix,
                owner_id=str(api_key.owner_id),
            )
            return None

        role = resolve_roles(user.roles)
        if isinstance(role, Failure):
            self._logger.warning(
                "api_key_owner_role_invalid",
                user_id=str(user.id),
                reason=role.error.message,
            )
            return None

        api_key.record_use(now)
        await self._store.upsert(ResourceType.APIKEY, api_key)
        self._logger.debug(
            "api_key_authenticated",
            user_id=str(user.id),
            key_prefix=api_key.key_prefix,
        )
        return Actor(id=user.id, role=role.value, email=user.email)
