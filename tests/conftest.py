from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pokesync import app as app_module
from pokesync.adapters.sqlalchemy import create_all_tables, start_mappers
from pokesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyPokemonUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.pokemon import FakeUnitOfWorkFactory

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("POKESYNC_SCHEDULER_ENABLED", "false")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # One shared connection so worker threads see the same in-memory database.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyPokemonUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyPokemonUnitOfWork:
        return SqlAlchemyPokemonUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def fake_unit_of_work() -> FakeUnitOfWorkFactory:
    return FakeUnitOfWorkFactory()


@pytest.fixture(autouse=True)
def reset_shared_orchestrator() -> Iterator[None]:
    app_module.set_sync_orchestrator(None)
    yield
    app_module.set_sync_orchestrator(None)
