"""System initialization.

Bootstraps the first actor: a root user and one API key for it. Runs without
an authenticated actor, since none can exist before it. Once the root user
exists, initialization reports that and mints nothing.
"""

from dataclasses import dataclass, field
from uuid import UUID

from uuid_extensions import uuid7

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import DomainError, InternalError
from tenantry.core.result import Failure, Result, Success
from tenantry.domain.entities import ApiKey, User
from tenantry.domain.enums import ApiKeyStatus, ResourceType, UserRole
from tenantry.domain.protocols import (
    Clock,
    LoggerProtocol,
    ResourceConflictError,
    ResourceStore,
    ResourceStoreError,
)
from tenantry.infrastructure.security.secret_codec import SecretCodec

ROOT_DISPLAY_NAME = "System Root User"
ROOT_KEY_LABELS = {"purpose": "admin"}


@dataclass(frozen=True, slots=True, kw_only=True)
class SystemInitResult:
    """Outcome of system initialization.

    Attributes:
        user_id: Id of the root user.
        already_initialized: True when the root user existed before the call.
        raw_secret: Root API key, present only on the call that created it.
    """

    user_id: UUID
    already_initialized: bool
    raw_secret: str | None = field(default=None, repr=False)


class SystemService:
    """Creates the root user and its first API key, once."""

    def __init__(
        self,
        *,
        store: ResourceStore,
        codec: SecretCodec,
        clock: Clock,
        logger: LoggerProtocol,
        root_username: str = UserRole.ROOT.value,
        root_email: str = "root@example.com",
    ) -> None:
        self._store = store
        self._codec = codec
        self._clock = clock
        self._logger = logger
        self._root_username = root_username
        self._root_email = root_email

    async def initialize(self) -> Result[SystemInitResult, DomainError]:
        """Initialize the system.

        Returns:
            Success(SystemInitResult) carrying the raw root key when this
            call created it, or Failure(InternalError) on a store failure.
        """
        try:
            existing = await self._find_root()
            if existing is None:
                try:
                    return Success(value=await self._create_root())
                except ResourceConflictError:
                    # Another initializer created the root first.
                    existing = await self._find_root()
        except ResourceStoreError as e:
            return self._failed(e)

        if existing is None:
            return self._failed(None)
        self._logger.info("system_already_initialized", user_id=str(existing.id))
        return Success(
            value=SystemInitResult(user_id=existing.id, already_initialized=True)
        )

    async def _find_root(self) -> User | None:
        matches = await self._store.load_by_attributes(
            ResourceType.USER, username=self._root_username
        )
        return next((u for u in matches if isinstance(u, User)), None)

    async def _create_root(self) -> SystemInitResult:
        now = self._clock.now()
        root_id = uuid7()
        root = User(
            id=root_id,
            owner_id=root_id,
            email=self._root_email,
            username=self._root_username,
            display_name=ROOT_DISPLAY_NAME,
            roles=[UserRole.ROOT.value],
            created_at=now,
            updated_at=now,
            created_by_id=root_id,
            updated_by_id=root_id,
        )
        await self._store.upsert(ResourceType.USER, root)

        credential = self._codec.generate()
        api_key = ApiKey(
            id=uuid7(),
            owner_id=root_id,
            key_prefix=credential.display_prefix,
            key_hash=credential.secret_hash,
            status=ApiKeyStatus.ACTIVE,
            labels=dict(ROOT_KEY_LABELS),
            created_at=now,
            updated_at=now,
            created_by_id=root_id,
            updated_by_id=root_id,
        )
        await self._store.upsert(ResourceType.APIKEY, api_key)

        self._logger.info(
            "system_initialized",
            user_id=str(root_id),
            key_prefix=api_key.key_prefix,
        )
        return SystemInitResult(
            user_id=root_id,
            already_initialized=False,
            raw_secret=credential.raw_secret,
        )

    def _failed(self, error: Exception | None) -> Failure[InternalError]:
        self._logger.error("system_initialization_failed", error=error)
        return Failure(
            error=InternalError(
                code=ErrorCode.STORE_OPERATION_FAILED,
                message="Failed to initialize system",
            )
        )
