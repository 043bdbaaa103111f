"""Tests for dependency injection utilities."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

import catalogkit.core.api.dependencies as deps
from catalogkit import Database, ProductManager
from catalogkit.api import get_product_manager
from catalogkit.core.api.dependencies import get_database, get_session, set_database


@pytest.fixture
def reset_database() -> Iterator[None]:
    original = deps._database
    yield
    deps._database = original


@pytest.mark.usefixtures("reset_database")
def test_get_database_uninitialized() -> None:
    set_database(None)

    with pytest.raises(RuntimeError, match="Database not initialized"):
        get_database()


@pytest.mark.usefixtures("reset_database")
def test_set_and_get_database() -> None:
    db = Database("sqlite+aiosqlite:///:memory:")

    set_database(db)

    assert get_database() is db


async def test_get_product_manager(database: Database) -> None:
    async for session in get_session(database):
        manager = await get_product_manager(session)
        assert isinstance(manager, ProductManager)
        assert manager.repo.s is session
        break
