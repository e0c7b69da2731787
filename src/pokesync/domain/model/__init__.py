"""Domain model for synchronized Pokémon data."""

from __future__ import annotations

from .catalog import CatalogEntryRef, DetailResolution, ResolutionFailure, ResolutionSuccess
from .pokemon import Pokemon, RankingAttribute, new_id

__all__ = [
    "CatalogEntryRef",
    "DetailResolution",
    "Pokemon",
    "RankingAttribute",
    "ResolutionFailure",
    "ResolutionSuccess",
    "new_id",
]
