"""Response bodies served by the HTTP API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from pokesync.domain.model import Pokemon


class PokemonDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    poke_api_id: int
    name: str
    weight: int
    height: int
    base_experience: int | None = None

    @classmethod
    def from_domain(cls, pokemon: Pokemon) -> PokemonDto:
        return cls(
            poke_api_id=pokemon.poke_api_id,
            name=pokemon.name,
            weight=pokemon.weight,
            height=pokemon.height,
            base_experience=pokemon.base_experience,
        )


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
