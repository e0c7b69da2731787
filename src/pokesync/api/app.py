"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from pokesync import __version__
from pokesync.adapters.sqlalchemy.unit_of_work import SqlAlchemyPokemonUnitOfWork
from pokesync.api.errors import register_exception_handlers
from pokesync.api.routes import router as pokemon_router
from pokesync.api.schemas import HealthResponse
from pokesync.app import build_scheduler, ensure_store_started
from pokesync.config import get_sync_config

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pokesync.domain.ports.unit_of_work import UnitOfWorkFactory
    from pokesync.domain.synchronization import SyncOrchestrator

log = logging.getLogger(__name__)


def create_app(
    *,
    orchestrator: SyncOrchestrator | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    initialise_store: bool = True,
    scheduler_enabled: bool | None = None,
) -> FastAPI:
    """Build the API.

    Without overrides the app serves the SQLAlchemy store, syncs through the
    process-wide orchestrator, and runs the cron scheduler unless it is
    disabled through ``POKESYNC_SCHEDULER_ENABLED``.
    """

    run_scheduler = (
        get_sync_config().scheduler_enabled if scheduler_enabled is None else scheduler_enabled
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if initialise_store:
            ensure_store_started()
        scheduler = build_scheduler(orchestrator) if run_scheduler else None
        if scheduler is not None:
            scheduler.start()
        app.state.scheduler = scheduler
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown()
            log.info("API stopped")

    app = FastAPI(title="pokesync", version=__version__, lifespan=lifespan)
    app.state.orchestrator = orchestrator
    app.state.unit_of_work_factory = unit_of_work_factory or SqlAlchemyPokemonUnitOfWork
    app.state.scheduler = None

    register_exception_handlers(app)
    app.include_router(pokemon_router)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse()

    return app
