from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select

from pokesync.adapters.sqlalchemy import SqlAlchemyPokemonRepository, pokemon_table
from pokesync.domain.errors import InvalidArgument, StoreWriteFailed
from pokesync.domain.model import RankingAttribute
from tests.helpers.pokemon import make_pokemon

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


@pytest.fixture
def repository(sqlite_session: Session) -> SqlAlchemyPokemonRepository:
    return SqlAlchemyPokemonRepository(sqlite_session)


@pytest.fixture
def populated(
    sqlite_session: Session,
    repository: SqlAlchemyPokemonRepository,
) -> SqlAlchemyPokemonRepository:
    repository.upsert_all(
        [
            make_pokemon("pikachu", 25, height=4, weight=60, base_experience=112),
            make_pokemon("charizard", 6, height=17, weight=905, base_experience=240),
            make_pokemon("snorlax", 143, height=21, weight=4600, base_experience=189),
        ]
    )
    sqlite_session.commit()
    return repository


def test_upsert_inserts_new_records(
    sqlite_session: Session,
    repository: SqlAlchemyPokemonRepository,
) -> None:
    stored = repository.upsert_all([make_pokemon("pikachu", 25), make_pokemon("eevee", 133)])
    sqlite_session.commit()

    assert stored == 2
    assert repository.count() == 2
    rows = sqlite_session.execute(select(pokemon_table.c.poke_api_id)).scalars().all()
    assert sorted(rows) == [25, 133]


def test_upsert_updates_in_place_and_keeps_internal_id(
    sqlite_session: Session,
    repository: SqlAlchemyPokemonRepository,
) -> None:
    original = make_pokemon("pikachu", 25, weight=60)
    repository.upsert_all([original])
    sqlite_session.commit()
    original_id = original.id

    later = datetime(2024, 6, 1, tzinfo=UTC)
    refreshed = make_pokemon("pikachu", 25, weight=61, base_experience=None, synced_at=later)
    repository.upsert_all([refreshed])
    sqlite_session.commit()
    sqlite_session.expire_all()

    stored = repository.get_by_poke_api_id(25)
    assert stored is not None
    assert repository.count() == 1
    assert stored.id == original_id
    assert stored.id != refreshed.id
    assert stored.weight == 61
    assert stored.base_experience is None
    assert stored.last_synced_at == later
    assert stored.raw_payload == refreshed.raw_payload


def test_upsert_collapses_duplicates_in_one_batch(
    sqlite_session: Session,
    repository: SqlAlchemyPokemonRepository,
) -> None:
    stored = repository.upsert_all(
        [make_pokemon("pikachu", 25, weight=60), make_pokemon("pikachu", 25, weight=62)]
    )
    sqlite_session.commit()

    assert stored == 1
    found = repository.get_by_poke_api_id(25)
    assert found is not None
    assert found.weight == 62


def test_upsert_of_empty_batch_is_a_no_op(repository: SqlAlchemyPokemonRepository) -> None:
    assert repository.upsert_all([]) == 0
    assert repository.count() == 0


def test_upsert_translates_database_errors(
    sqlite_session: Session,
    repository: SqlAlchemyPokemonRepository,
) -> None:
    broken = make_pokemon("pikachu", 25)
    broken.name = None  # type: ignore[assignment]

    with pytest.raises(StoreWriteFailed):
        repository.upsert_all([broken])

    sqlite_session.rollback()
    assert repository.count() == 0


def test_find_top_by_height(populated: SqlAlchemyPokemonRepository) -> None:
    result = populated.find_top_by_attribute(RankingAttribute.HEIGHT, 2)

    assert [item.name for item in result] == ["snorlax", "charizard"]


def test_find_top_by_weight(populated: SqlAlchemyPokemonRepository) -> None:
    result = populated.find_top_by_attribute(RankingAttribute.WEIGHT, 1)

    assert [item.name for item in result] == ["snorlax"]


def test_find_top_returns_min_of_n_and_total(populated: SqlAlchemyPokemonRepository) -> None:
    result = populated.find_top_by_attribute(RankingAttribute.BASE_EXPERIENCE, 50)

    assert len(result) == 3
    values = [item.base_experience for item in result]
    assert values == [240, 189, 112]


def test_find_top_puts_nulls_last_and_breaks_ties_by_id(
    sqlite_session: Session,
    repository: SqlAlchemyPokemonRepository,
) -> None:
    repository.upsert_all(
        [
            make_pokemon("rattata-alola", 10_091, base_experience=None),
            make_pokemon("ditto", 132, base_experience=101),
            make_pokemon("abra", 63, base_experience=62),
            make_pokemon("mew", 151, base_experience=101),
        ]
    )
    sqlite_session.commit()

    result = repository.find_top_by_attribute(RankingAttribute.BASE_EXPERIENCE, 4)

    assert [item.poke_api_id for item in result] == [132, 151, 63, 10_091]


@pytest.mark.parametrize("n", [0, -1])
def test_find_top_rejects_non_positive_count(
    populated: SqlAlchemyPokemonRepository,
    n: int,
) -> None:
    with pytest.raises(InvalidArgument):
        populated.find_top_by_attribute(RankingAttribute.HEIGHT, n)


def test_get_by_poke_api_id_missing(repository: SqlAlchemyPokemonRepository) -> None:
    assert repository.get_by_poke_api_id(999) is None
