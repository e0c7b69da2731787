from __future__ import annotations

import pytest

from pokesync import app as app_module
from pokesync.adapters.sqlalchemy.unit_of_work import SqlAlchemyPokemonUnitOfWork
from pokesync.domain.errors import InvalidArgument
from pokesync.domain.synchronization import SyncOrchestrator
from tests.helpers.pokemon import (
    FakePokemonRepository,
    FakePokemonSource,
    FakeUnitOfWorkFactory,
    make_pokemon,
)


def _fail_if_store_started() -> None:
    raise AssertionError("store must not be touched")


def test_build_sync_orchestrator_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POKESYNC_PAGE_SIZE", "50")
    monkeypatch.setenv("POKESYNC_MAX_CONCURRENCY", "4")

    orchestrator = app_module.build_sync_orchestrator()

    assert orchestrator.page_size == 50
    assert orchestrator.max_concurrency == 4


def test_explicit_page_size_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POKESYNC_PAGE_SIZE", "50")

    orchestrator = app_module.build_sync_orchestrator(page_size=7)

    assert orchestrator.page_size == 7


def test_shared_orchestrator_is_reused() -> None:
    first = app_module.get_sync_orchestrator()

    assert app_module.get_sync_orchestrator() is first


def test_sync_pokemon_runs_given_orchestrator(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_module, "ensure_store_started", lambda: None)
    store = FakeUnitOfWorkFactory()
    source = FakePokemonSource(catalog=[])
    orchestrator = SyncOrchestrator(source_factory=lambda: source, unit_of_work_factory=store)

    result = app_module.sync_pokemon(orchestrator=orchestrator)

    assert result.stored == 0
    assert source.entered == source.exited == 1


def test_sync_pokemon_page_size_reuses_shared_orchestrator(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(app_module, "ensure_store_started", lambda: None)
    source = FakePokemonSource(catalog=[])
    shared = SyncOrchestrator(
        source_factory=lambda: source,
        unit_of_work_factory=FakeUnitOfWorkFactory(),
        page_size=1500,
    )
    app_module.set_sync_orchestrator(shared)

    app_module.sync_pokemon(page_size=30)

    assert app_module.get_sync_orchestrator() is shared
    assert shared.page_size == 1500
    assert source.requested_limits == [30]


def test_rank_pokemon_validates_before_touching_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_module, "ensure_store_started", _fail_if_store_started)

    with pytest.raises(InvalidArgument):
        app_module.rank_pokemon("height", 0)
    with pytest.raises(InvalidArgument):
        app_module.rank_pokemon("speed", 3)


def test_rank_pokemon_uses_given_store() -> None:
    store = FakeUnitOfWorkFactory(
        FakePokemonRepository([make_pokemon("onix", 95, height=88), make_pokemon("abra", 63)])
    )

    result = app_module.rank_pokemon("height", 1, unit_of_work_factory=store)

    assert [item.name for item in result] == ["onix"]


def test_rank_pokemon_defaults_to_sqlalchemy_store(
    sqlite_unit_of_work: object,
) -> None:
    _ = sqlite_unit_of_work
    with SqlAlchemyPokemonUnitOfWork() as uow:
        uow.repositories.pokemon.upsert_all([make_pokemon("onix", 95, height=88)])
        uow.commit()

    result = app_module.rank_pokemon("height", 3)

    assert [item.poke_api_id for item in result] == [95]


def test_build_scheduler_uses_configured_cron(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POKESYNC_SYNC_CRON", "30 3 * * *")

    scheduler = app_module.build_scheduler()

    assert scheduler.cron == "30 3 * * *"
