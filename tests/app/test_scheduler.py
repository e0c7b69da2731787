from __future__ import annotations

import logging

import pytest
from apscheduler.triggers.cron import CronTrigger
from fastapi.testclient import TestClient

from pokesync.api import create_app
from pokesync.config import ConfigurationError
from pokesync.domain.errors import SyncAlreadyRunning, SyncFailed
from pokesync.domain.synchronization import SyncOrchestrator
from pokesync.scheduler import SYNC_JOB_ID, SyncScheduler
from tests.helpers.pokemon import FakePokemonSource, FakeUnitOfWorkFactory


class _Trigger:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls = 0
        self.error = error

    def __call__(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return "done"


def test_start_registers_single_cron_job() -> None:
    scheduler = SyncScheduler(_Trigger(), cron="0 */12 * * *")  # type: ignore[arg-type]

    scheduler.start()
    try:
        jobs = scheduler.jobs()
        assert scheduler.running
        assert [job.id for job in jobs] == [SYNC_JOB_ID]
        job = jobs[0]
        assert isinstance(job.trigger, CronTrigger)
        assert job.max_instances == 1
        assert job.coalesce is True
        assert scheduler.next_run_time is not None
        assert scheduler.next_run_time.hour in {0, 12}
    finally:
        scheduler.shutdown(wait=False)

    assert not scheduler.running


def test_start_twice_keeps_one_job() -> None:
    scheduler = SyncScheduler(_Trigger())  # type: ignore[arg-type]

    scheduler.start()
    scheduler.start()
    try:
        assert len(scheduler.jobs()) == 1
    finally:
        scheduler.shutdown(wait=False)


def test_invalid_cron_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Invalid sync schedule"):
        SyncScheduler(_Trigger(), cron="every noon")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "error",
    [SyncFailed("catalog down"), SyncAlreadyRunning("busy"), RuntimeError("boom")],
)
def test_failing_tick_is_logged_not_raised(
    error: Exception,
    caplog: pytest.LogCaptureFixture,
) -> None:
    trigger = _Trigger(error)
    scheduler = SyncScheduler(trigger)  # type: ignore[arg-type]

    with caplog.at_level(logging.WARNING, logger="pokesync.scheduler"):
        assert scheduler.run_tick() is None

    assert trigger.calls == 1
    assert any("scheduled sync" in record.getMessage().lower() for record in caplog.records)


def test_trigger_now_propagates_failures() -> None:
    scheduler = SyncScheduler(_Trigger(SyncFailed("catalog down")))  # type: ignore[arg-type]

    with pytest.raises(SyncFailed):
        scheduler.trigger_now()


def test_tick_runs_the_same_cycle_as_manual_trigger() -> None:
    store = FakeUnitOfWorkFactory()
    source = FakePokemonSource(catalog=[])
    orchestrator = SyncOrchestrator(source_factory=lambda: source, unit_of_work_factory=store)
    scheduler = SyncScheduler(orchestrator.run_sync_cycle)

    scheduled = scheduler.run_tick()
    manual = scheduler.trigger_now()

    assert scheduled is not None
    assert manual.listed == scheduled.listed == 0
    assert source.requested_limits == [1500, 1500]


def test_app_lifespan_starts_and_stops_scheduler() -> None:
    store = FakeUnitOfWorkFactory()
    orchestrator = SyncOrchestrator(
        source_factory=lambda: FakePokemonSource(catalog=[]),
        unit_of_work_factory=store,
    )
    app = create_app(
        orchestrator=orchestrator,
        unit_of_work_factory=store,
        initialise_store=False,
        scheduler_enabled=True,
    )

    with TestClient(app):
        scheduler = app.state.scheduler
        assert isinstance(scheduler, SyncScheduler)
        assert scheduler.running

    assert not scheduler.running
