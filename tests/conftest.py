"""Shared pytest fixtures.

Provides:
- Deterministic clock and entropy (FixedClock, FixedRandomSource)
- A mock logger whose ``bind`` returns itself, so service log calls can
  be asserted on the fixture directly
- Actors for each standard role
- An in-memory store and fully wired services around it
"""

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from tenantry.core.config import Settings
from tenantry.core.container import ServiceRegistry, build_services
from tenantry.domain.entities import Actor, ApiKey, Embedder, Space, User
from tenantry.domain.enums import ApiKeyStatus, EmbedderProviderType
from tenantry.domain.roles import ADMIN_ROLE, ROOT_ROLE, USER_ROLE
from tenantry.infrastructure.persistence import InMemoryResourceStore

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class FixedClock:
    """Clock frozen at a settable instant."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> None:
        self._now = self._now + delta


class FixedRandomSource:
    """Entropy that is predictable but different on every call."""

    def __init__(self) -> None:
        self.calls = 0

    def token_bytes(self, num_bytes: int) -> bytes:
        self.calls += 1
        return bytes((self.calls + i) % 256 for i in range(num_bytes))


def new_id() -> UUID:
    return cast(UUID, uuid7())


def make_user(
    user_id: UUID | None = None,
    email: str = "user@example.com",
    roles: list[str] | None = None,
    **overrides,
) -> User:
    user_id = user_id or new_id()
    fields = {
        "id": user_id,
        "owner_id": user_id,
        "email": email,
        "roles": roles if roles is not None else ["user"],
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    fields.update(overrides)
    return User(**fields)


def make_space(owner_id: UUID, name: str = "notes", **overrides) -> Space:
    fields = {
        "id": new_id(),
        "owner_id": owner_id,
        "name": name,
        "embedder_id": new_id(),
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
        "created_by_id": owner_id,
        "updated_by_id": owner_id,
    }
    fields.update(overrides)
    return Space(**fields)


def make_api_key(owner_id: UUID, key_hash: str | None = None, **overrides) -> ApiKey:
    fields = {
        "id": new_id(),
        "owner_id": owner_id,
        "key_prefix": "gm_abcde",
        "key_hash": key_hash or uuid7().hex * 2,
        "status": ApiKeyStatus.ACTIVE,
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    fields.update(overrides)
    return ApiKey(**fields)


def make_embedder(owner_id: UUID, **overrides) -> Embedder:
    fields = {
        "id": new_id(),
        "owner_id": owner_id,
        "display_name": "MiniLM",
        "provider_type": EmbedderProviderType.OPENAI,
        "endpoint_url": "https://embed.example.com",
        "model_identifier": "all-minilm-l6-v2",
        "dimensionality": 384,
        "credentials": "sk-test",
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    fields.update(overrides)
    return Embedder(**fields)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def random_source() -> FixedRandomSource:
    return FixedRandomSource()


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger mock; bound loggers are the same mock."""
    logger = MagicMock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def user_actor() -> Actor:
    return Actor(id=new_id(), role=USER_ROLE, email="alice@example.com")


@pytest.fixture
def other_actor() -> Actor:
    return Actor(id=new_id(), role=USER_ROLE, email="bob@example.com")


@pytest.fixture
def admin_actor() -> Actor:
    return Actor(id=new_id(), role=ADMIN_ROLE, email="admin@example.com")


@pytest.fixture
def root_actor() -> Actor:
    return Actor(id=new_id(), role=ROOT_ROLE, email="root@example.com")


@pytest.fixture
def default_embedder_id() -> UUID:
    return new_id()


@pytest.fixture
def settings(default_embedder_id: UUID) -> Settings:
    return Settings(
        _env_file=None,
        environment="testing",
        default_page_size=10,
        default_embedder_id=default_embedder_id,
    )


@pytest.fixture
def store() -> InMemoryResourceStore:
    return InMemoryResourceStore()


@pytest.fixture
def services(
    store: InMemoryResourceStore,
    settings: Settings,
    clock: FixedClock,
    random_source: FixedRandomSource,
    mock_logger: MagicMock,
) -> ServiceRegistry:
    """Every service wired around the in-memory store."""
    return build_services(
        store,
        settings=settings,
        clock=clock,
        random_source=random_source,
        logger=mock_logger,
    )
