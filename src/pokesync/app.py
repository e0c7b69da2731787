"""Application orchestration entry points."""

from __future__ import annotations

import threading
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from pokesync.adapters.pokeapi import PokeApiClient, looks_like_detail_payload
from pokesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyPokemonUnitOfWork,
    is_started,
    startup,
)
from pokesync.config import get_pokeapi_config, get_sync_config
from pokesync.domain.ranking import parse_ranking_attribute, require_positive_count, top_pokemon
from pokesync.domain.synchronization import SyncOrchestrator
from pokesync.scheduler import SyncScheduler

if TYPE_CHECKING:
    from pokesync.domain.model import Pokemon, RankingAttribute
    from pokesync.domain.ports.fetching import PokemonSourceFactory
    from pokesync.domain.ports.unit_of_work import UnitOfWorkFactory
    from pokesync.domain.synchronization import SyncCycleResult


log = getLogger(__name__)

_shared_lock = threading.Lock()
_store_lock = threading.Lock()
_shared_orchestrator: SyncOrchestrator | None = None


def ensure_store_started() -> None:
    """Initialise the SQLAlchemy store once per process."""

    with _store_lock:
        if not is_started():
            startup()


def build_sync_orchestrator(
    *,
    source_factory: PokemonSourceFactory | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    page_size: int | None = None,
    max_concurrency: int | None = None,
) -> SyncOrchestrator:
    """Wire a sync orchestrator against PokeAPI and the SQLAlchemy store."""

    sync_config = get_sync_config()
    effective_source = source_factory
    effective_page_size = page_size
    if effective_source is None or effective_page_size is None:
        pokeapi_config = get_pokeapi_config(cache_predicate=looks_like_detail_payload)
        effective_source = effective_source or partial(PokeApiClient, config=pokeapi_config)
        effective_page_size = effective_page_size or pokeapi_config.page_size

    log.debug("Building sync orchestrator: page_size=%s", effective_page_size)
    return SyncOrchestrator(
        source_factory=effective_source,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyPokemonUnitOfWork,
        page_size=effective_page_size,
        max_concurrency=max_concurrency or sync_config.max_concurrency,
    )


def get_sync_orchestrator() -> SyncOrchestrator:
    """Return the process-wide orchestrator shared by the API and the scheduler."""

    global _shared_orchestrator  # noqa: PLW0603
    with _shared_lock:
        if _shared_orchestrator is None:
            _shared_orchestrator = build_sync_orchestrator()
        return _shared_orchestrator


def set_sync_orchestrator(orchestrator: SyncOrchestrator | None) -> None:
    """Replace the shared orchestrator; ``None`` rebuilds it on next use."""

    global _shared_orchestrator  # noqa: PLW0603
    with _shared_lock:
        _shared_orchestrator = orchestrator


def sync_pokemon(
    *,
    orchestrator: SyncOrchestrator | None = None,
    page_size: int | None = None,
) -> SyncCycleResult:
    """Run one synchronization cycle using the configured adapters."""

    ensure_store_started()
    if orchestrator is None:
        orchestrator = get_sync_orchestrator()
    return orchestrator.run_sync_cycle(page_size=page_size)


def rank_pokemon(
    attribute: RankingAttribute | str,
    n: int,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[Pokemon]:
    """Return the top ``n`` Pokémon by ``attribute`` from the store."""

    ranking_attribute = parse_ranking_attribute(attribute)
    require_positive_count(n)
    if unit_of_work_factory is None:
        ensure_store_started()
        unit_of_work_factory = SqlAlchemyPokemonUnitOfWork
    return top_pokemon(
        unit_of_work_factory=unit_of_work_factory,
        attribute=ranking_attribute,
        n=n,
    )


def build_scheduler(orchestrator: SyncOrchestrator | None = None) -> SyncScheduler:
    """Build the cron scheduler that triggers the shared orchestrator."""

    sync_config = get_sync_config()
    trigger = partial(sync_pokemon, orchestrator=orchestrator)
    return SyncScheduler(trigger, cron=sync_config.schedule_cron)
