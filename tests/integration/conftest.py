"""Integration fixtures: a fresh SQLite database per test."""

import pytest_asyncio

from tenantry.infrastructure.persistence import Database


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Database with all tables created, disposed after the test."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'tenantry.db'}")
    await database.create_all()
    yield database
    await database.drop_all()
    await database.close()
