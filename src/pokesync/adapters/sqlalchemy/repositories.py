"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING, Final

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from pokesync.adapters.sqlalchemy.mappings import RANKING_COLUMNS, pokemon_table
from pokesync.domain.errors import StoreWriteFailed
from pokesync.domain.model import Pokemon
from pokesync.domain.ranking import require_positive_count

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.orm import Session

    from pokesync.domain.model import RankingAttribute

# Stays well below SQLite's bound-parameter limit.
_LOOKUP_CHUNK_SIZE: Final[int] = 500


class SqlAlchemyPokemonRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_all(self, records: Sequence[Pokemon]) -> int:
        """Match ``records`` on ``poke_api_id``; refresh known rows, add new ones.

        Changes are flushed but not committed; the unit of work owns the
        transaction. Any database error surfaces as ``StoreWriteFailed``.
        """

        incoming = {record.poke_api_id: record for record in records}
        if not incoming:
            return 0
        try:
            existing = self._load_existing(incoming)
            for poke_api_id, record in incoming.items():
                current = existing.get(poke_api_id)
                if current is None:
                    self.session.add(record)
                else:
                    current.refresh_from(record)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise StoreWriteFailed(f"Upserting {len(incoming)} pokemon failed: {exc}") from exc
        return len(incoming)

    def find_top_by_attribute(self, attribute: RankingAttribute, n: int) -> list[Pokemon]:
        require_positive_count(n)
        column = RANKING_COLUMNS[attribute]
        stmt = (
            select(Pokemon)
            .order_by(column.desc().nulls_last(), pokemon_table.c.poke_api_id.asc())
            .limit(n)
        )
        return list(self.session.execute(stmt).scalars().all())

    def get_by_poke_api_id(self, poke_api_id: int) -> Pokemon | None:
        stmt = select(Pokemon).where(pokemon_table.c.poke_api_id == poke_api_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def count(self) -> int:
        stmt = select(func.count()).select_from(pokemon_table)
        return int(self.session.execute(stmt).scalar_one())

    def _load_existing(self, poke_api_ids: Iterable[int]) -> dict[int, Pokemon]:
        found: dict[int, Pokemon] = {}
        for chunk in batched(poke_api_ids, _LOOKUP_CHUNK_SIZE):
            stmt = select(Pokemon).where(pokemon_table.c.poke_api_id.in_(chunk))
            for pokemon in self.session.execute(stmt).scalars():
                found[pokemon.poke_api_id] = pokemon
        return found


if TYPE_CHECKING:
    from typing import cast

    from pokesync.domain.ports.persistence import PokemonRepository

    _session_stub = cast("Session", object())
    _repo_check: PokemonRepository = SqlAlchemyPokemonRepository(_session_stub)
