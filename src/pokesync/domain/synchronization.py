"""Synchronization of the upstream catalog into the store.

A cycle lists the catalog once, resolves every entry concurrently, and hands
the successful records to the store in a single unit of work. Only two things
fail a cycle: the catalog listing and the final write. Everything in between
is isolated per entry.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from pokesync.domain.errors import (
    StoreUnavailable,
    StoreWriteFailed,
    SyncAlreadyRunning,
    SyncFailed,
    UpstreamUnavailable,
)
from pokesync.domain.model import ResolutionFailure, ResolutionSuccess

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import timedelta

    from pokesync.domain.model import CatalogEntryRef, DetailResolution, Pokemon
    from pokesync.domain.ports.fetching import DetailResolver, PokemonSourceFactory
    from pokesync.domain.ports.unit_of_work import UnitOfWorkFactory

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 1500
DEFAULT_MAX_CONCURRENCY = 16


class SyncState(StrEnum):
    IDLE = "idle"
    LISTING = "listing"
    RESOLVING = "resolving"
    PERSISTING = "persisting"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SyncCycleResult:
    """Outcome of one completed sync cycle."""

    listed: int
    stored: int
    failures: tuple[ResolutionFailure, ...]
    started_at: datetime
    finished_at: datetime

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def duration(self) -> timedelta:
        return self.finished_at - self.started_at


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SyncOrchestrator:
    """Runs sync cycles one at a time.

    ``run_sync_cycle`` is the single entry point for scheduled and manual
    triggers. A second call while a cycle is in flight is rejected with
    ``SyncAlreadyRunning`` rather than queued.
    """

    def __init__(
        self,
        *,
        source_factory: PokemonSourceFactory,
        unit_of_work_factory: UnitOfWorkFactory,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        now_provider: Callable[[], datetime] = _utcnow,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self._source_factory = source_factory
        self._unit_of_work_factory = unit_of_work_factory
        self.page_size = page_size
        self.max_concurrency = max_concurrency
        self._now = now_provider
        self._guard = threading.Lock()
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._guard.locked()

    def run_sync_cycle(self, *, page_size: int | None = None) -> SyncCycleResult:
        """Run one list, resolve, persist cycle and return its summary.

        ``page_size`` overrides the configured catalog limit for this run only.
        """

        limit = self.page_size if page_size is None else page_size
        if limit < 1:
            raise ValueError(f"page_size must be >= 1, got {limit}")
        if not self._guard.acquire(blocking=False):
            log.warning("Sync cycle requested while another one is running; rejecting")
            raise SyncAlreadyRunning("A sync cycle is already in progress")
        try:
            return self._run_cycle(limit)
        finally:
            self._set_state(SyncState.IDLE)
            self._guard.release()

    def _run_cycle(self, limit: int) -> SyncCycleResult:
        started_at = self._now()
        log.info(
            "Starting sync cycle: page_size=%s, max_concurrency=%s",
            limit,
            self.max_concurrency,
        )

        try:
            listed, resolutions = asyncio.run(self._list_and_resolve(limit))
        except UpstreamUnavailable as exc:
            self._set_state(SyncState.FAILED)
            log.error("Sync cycle aborted, catalog unavailable: %s", exc)  # noqa: TRY400
            raise SyncFailed("Catalog listing failed; store left untouched") from exc

        records, failures = collect_resolutions(resolutions)

        self._set_state(SyncState.PERSISTING)
        try:
            stored = self._persist(records)
        except (StoreUnavailable, StoreWriteFailed) as exc:
            self._set_state(SyncState.FAILED)
            log.error("Sync cycle aborted, store write failed: %s", exc)  # noqa: TRY400
            raise SyncFailed("Persisting the synchronized snapshot failed") from exc

        result = SyncCycleResult(
            listed=listed,
            stored=stored,
            failures=tuple(failures),
            started_at=started_at,
            finished_at=self._now(),
        )
        log.info(
            "Finished sync cycle: listed=%s, stored=%s, failed=%s, duration=%.1fs",
            result.listed,
            result.stored,
            result.failed,
            result.duration.total_seconds(),
        )
        return result

    async def _list_and_resolve(self, limit: int) -> tuple[int, list[DetailResolution]]:
        self._set_state(SyncState.LISTING)
        async with self._source_factory() as source:
            refs = list(await source.fetch_catalog(limit=limit))
            log.info("Catalog listed %s entries", len(refs))

            self._set_state(SyncState.RESOLVING)
            resolutions = await resolve_all(source, refs, max_concurrency=self.max_concurrency)
        return len(refs), resolutions

    def _persist(self, records: Sequence[Pokemon]) -> int:
        with self._unit_of_work_factory() as uow:
            stored = uow.repositories.pokemon.upsert_all(records)
            uow.commit()
        return stored

    def _set_state(self, state: SyncState) -> None:
        if state is not self._state:
            log.debug("Sync state %s -> %s", self._state, state)
        self._state = state


async def resolve_all(
    resolver: DetailResolver,
    refs: Iterable[CatalogEntryRef],
    *,
    max_concurrency: int,
) -> list[DetailResolution]:
    """Resolve every ref with at most ``max_concurrency`` calls in flight.

    Results keep the order of ``refs``. An exception escaping the resolver is
    turned into a failure for that entry so the remaining entries still run.
    """

    semaphore = asyncio.Semaphore(max_concurrency)

    async def resolve_one(ref: CatalogEntryRef) -> DetailResolution:
        async with semaphore:
            try:
                return await resolver.resolve_detail(ref)
            except Exception as exc:  # noqa: BLE001
                log.warning("Unexpected error resolving %s: %r", ref.name, exc)
                return ResolutionFailure(ref=ref, reason=f"unexpected error: {exc!r}")

    return list(await asyncio.gather(*(resolve_one(ref) for ref in refs)))


def collect_resolutions(
    resolutions: Iterable[DetailResolution],
) -> tuple[list[Pokemon], list[ResolutionFailure]]:
    """Split resolutions into records to persist and dropped failures.

    Two catalog entries resolving to the same ``poke_api_id`` collapse into
    one record; the later one wins.
    """

    by_poke_api_id: dict[int, Pokemon] = {}
    failures: list[ResolutionFailure] = []
    for resolution in resolutions:
        if isinstance(resolution, ResolutionSuccess):
            pokemon = resolution.pokemon
            if pokemon.poke_api_id in by_poke_api_id:
                log.warning(
                    "Duplicate poke_api_id %s in catalog (%s); keeping the latest",
                    pokemon.poke_api_id,
                    resolution.ref.name,
                )
            by_poke_api_id[pokemon.poke_api_id] = pokemon
        else:
            failures.append(resolution)
    if failures:
        log.warning(
            "Dropped %s catalog entries that failed to resolve: %s",
            len(failures),
            ", ".join(failure.ref.name for failure in failures[:10])
            + (" ..." if len(failures) > 10 else ""),
        )
    return list(by_poke_api_id.values()), failures
