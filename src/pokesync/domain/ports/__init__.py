"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CatalogFetcher, DetailResolver, PokemonSource, PokemonSourceFactory
from .persistence import PokemonRepository
from .unit_of_work import (
    PokemonRepositories,
    PokemonUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "CatalogFetcher",
    "DetailResolver",
    "PokemonRepositories",
    "PokemonRepository",
    "PokemonSource",
    "PokemonSourceFactory",
    "PokemonUnitOfWork",
    "RepositoryCollection",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
