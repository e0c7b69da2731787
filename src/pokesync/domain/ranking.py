"""Read-side ranking queries over the synchronized store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pokesync.domain.errors import InvalidArgument
from pokesync.domain.model import RankingAttribute

if TYPE_CHECKING:
    from pokesync.domain.model import Pokemon
    from pokesync.domain.ports.unit_of_work import UnitOfWorkFactory


def require_positive_count(n: int) -> int:
    if n < 1:
        raise InvalidArgument(f"Number of pokemon must be at least 1, got {n}")
    return n


def parse_ranking_attribute(value: RankingAttribute | str) -> RankingAttribute:
    try:
        return RankingAttribute(value)
    except ValueError as exc:
        choices = ", ".join(attribute.value for attribute in RankingAttribute)
        raise InvalidArgument(f"Unknown ranking attribute {value!r}; expected {choices}") from exc


def top_pokemon(
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    attribute: RankingAttribute | str,
    n: int,
) -> list[Pokemon]:
    """Return the ``n`` Pokémon with the highest ``attribute``.

    Arguments are validated before a unit of work is opened, so invalid
    requests never reach the store.
    """

    require_positive_count(n)
    ranking_attribute = parse_ranking_attribute(attribute)
    with unit_of_work_factory() as uow:
        return uow.repositories.pokemon.find_top_by_attribute(ranking_attribute, n)
