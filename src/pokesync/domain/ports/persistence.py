"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pokesync.domain.model import Pokemon, RankingAttribute


@runtime_checkable
class PokemonRepository(Protocol):
    """Persistence contract for synchronized Pokémon."""

    def upsert_all(self, records: Sequence[Pokemon]) -> int:
        """Insert or update ``records`` keyed by ``poke_api_id``; return the row count."""
        ...

    def find_top_by_attribute(self, attribute: RankingAttribute, n: int) -> list[Pokemon]:
        """Return at most ``n`` records in descending ``attribute`` order."""
        ...

    def get_by_poke_api_id(self, poke_api_id: int) -> Pokemon | None: ...

    def count(self) -> int: ...
