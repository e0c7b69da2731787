"""SQLAlchemy adapter package for pokesync."""

from __future__ import annotations

from .mappings import (
    RANKING_COLUMNS,
    create_all_tables,
    mapper_registry,
    pokemon_table,
    start_mappers,
)
from .repositories import SqlAlchemyPokemonRepository
from .unit_of_work import (
    SqlAlchemyPokemonUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "RANKING_COLUMNS",
    "SqlAlchemyPokemonRepository",
    "SqlAlchemyPokemonUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "pokemon_table",
    "shutdown",
    "start_mappers",
    "startup",
]
