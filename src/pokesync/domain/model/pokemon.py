"""Persisted Pokémon snapshot and the attributes it can be ranked by."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from datetime import datetime


def new_id() -> UUID:
    return uuid4()


class RankingAttribute(StrEnum):
    HEIGHT = "height"
    WEIGHT = "weight"
    BASE_EXPERIENCE = "base_experience"


@dataclass(eq=False, kw_only=True)
class Pokemon:
    """One synchronized entry, keyed in the store by ``poke_api_id``.

    ``id`` is the internal identity and never changes once the row exists;
    re-synchronizing an entry copies the new values onto the stored instance
    through :meth:`refresh_from`.
    """

    id: UUID = field(default_factory=new_id)
    poke_api_id: int
    name: str
    height: int
    weight: int
    base_experience: int | None = None
    raw_payload: str
    last_synced_at: datetime

    def attribute(self, attribute: RankingAttribute) -> int | None:
        return getattr(self, attribute.value)

    def refresh_from(self, other: Pokemon) -> None:
        if other.poke_api_id != self.poke_api_id:
            raise ValueError(
                f"Cannot refresh pokemon {self.poke_api_id} from pokemon {other.poke_api_id}"
            )
        self.name = other.name
        self.height = other.height
        self.weight = other.weight
        self.base_experience = other.base_experience
        self.raw_payload = other.raw_payload
        self.last_synced_at = other.last_synced_at
