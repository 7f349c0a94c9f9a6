"""Dependency wiring (composition root).

Application-scoped singletons are ``@lru_cache()`` functions. Services are
built per unit of work around a ResourceStore, since the SQL store is bound
to one session.

Usage:
    async with service_session() as services:
        result = await services.spaces.authorize_and_get(actor, space_id)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from tenantry.core.config import Settings, get_settings

if TYPE_CHECKING:
    from tenantry.application.services import (
        ApiKeyService,
        EmbedderService,
        SpaceService,
        SystemService,
        UserService,
    )
    from tenantry.domain.protocols import (
        Clock,
        LoggerProtocol,
        RandomSource,
        ResourceStore,
    )
    from tenantry.infrastructure.persistence import Database
    from tenantry.infrastructure.security import ApiKeyAuthenticator


@dataclass(frozen=True, slots=True, kw_only=True)
class ServiceRegistry:
    """Services sharing one store."""

    users: "UserService"
    spaces: "SpaceService"
    api_keys: "ApiKeyService"
    embedders: "EmbedderService"
    system: "SystemService"
    authenticator: "ApiKeyAuthenticator"


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger.

    Human-readable output in development, JSON elsewhere.
    """
    from tenantry.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(use_json=settings.use_json_logs, level=settings.log_level)


@lru_cache()
def get_database() -> "Database":
    from tenantry.infrastructure.persistence import Database

    settings = get_settings()
    return Database(database_url=settings.database_url, echo=settings.db_echo)


def build_services(
    store: "ResourceStore",
    *,
    settings: Settings | None = None,
    clock: "Clock | None" = None,
    random_source: "RandomSource | None" = None,
    logger: "LoggerProtocol | None" = None,
) -> ServiceRegistry:
    """Wire every service around ``store``.

    Args:
        store: Persistence for all resource types.
        settings: Defaults to ``get_settings()``.
        clock: Defaults to the system clock.
        random_source: Defaults to the OS CSPRNG.
        logger: Defaults to ``get_logger()``.
    """
    from tenantry.application.services import (
        ApiKeyService,
        AuthorizationGuard,
        EmbedderService,
        OwnershipResolver,
        QueryEngine,
        SpaceService,
        SystemService,
        UserService,
    )
    from tenantry.infrastructure.security import ApiKeyAuthenticator, SecretCodec
    from tenantry.infrastructure.system import SystemClock, SystemRandomSource

    settings = settings or get_settings()
    clock = clock or SystemClock()
    random_source = random_source or SystemRandomSource()
    logger = logger or get_logger()

    guard = AuthorizationGuard(ownership_resolver=OwnershipResolver(), logger=logger)
    query_engine = QueryEngine.from_settings(settings)
    codec = SecretCodec.from_settings(settings, random_source)
    shared = {
        "store": store,
        "guard": guard,
        "query_engine": query_engine,
        "clock": clock,
        "logger": logger,
    }

    return ServiceRegistry(
        users=UserService(**shared),
        spaces=SpaceService(
            **shared, default_embedder_id=settings.default_embedder_id
        ),
        api_keys=ApiKeyService(**shared, codec=codec),
        embedders=EmbedderService(
            **shared, default_api_path=settings.default_embedder_api_path
        ),
        system=SystemService(
            store=store,
            codec=codec,
            clock=clock,
            logger=logger,
            root_username=settings.root_username,
            root_email=settings.root_email,
        ),
        authenticator=ApiKeyAuthenticator(
            store=store, codec=codec, clock=clock, logger=logger
        ),
    )


@asynccontextmanager
async def service_session() -> AsyncGenerator[ServiceRegistry, None]:
    """Services over one database session.

    Commits when the block exits cleanly, rolls back otherwise.
    """
    from tenantry.infrastructure.persistence import SqlAlchemyResourceStore

    async with get_database().get_session() as session:
        yield build_services(SqlAlchemyResourceStore(session))
