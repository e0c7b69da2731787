from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pokesync.domain.model import RankingAttribute
from tests.helpers.pokemon import make_pokemon


def test_new_records_get_distinct_internal_ids() -> None:
    assert make_pokemon("pikachu", 25).id != make_pokemon("pikachu", 25).id


def test_attribute_reads_ranking_value() -> None:
    pokemon = make_pokemon("snorlax", 143, height=21, weight=4600, base_experience=None)

    assert pokemon.attribute(RankingAttribute.HEIGHT) == 21
    assert pokemon.attribute(RankingAttribute.WEIGHT) == 4600
    assert pokemon.attribute(RankingAttribute.BASE_EXPERIENCE) is None


def test_refresh_from_copies_values_and_keeps_identity() -> None:
    stored = make_pokemon("pikachu", 25, weight=60)
    later = datetime(2025, 1, 1, tzinfo=UTC)
    incoming = make_pokemon("pikachu", 25, weight=61, synced_at=later)
    original_id = stored.id

    stored.refresh_from(incoming)

    assert stored.id == original_id
    assert stored.weight == 61
    assert stored.last_synced_at == later
    assert stored.raw_payload == incoming.raw_payload


def test_refresh_from_other_entry_is_rejected() -> None:
    with pytest.raises(ValueError, match="Cannot refresh"):
        make_pokemon("pikachu", 25).refresh_from(make_pokemon("raichu", 26))
