"""Pydantic models describing the PokeAPI payloads we consume."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PokeApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedResource(PokeApiBaseModel):
    name: str
    url: str


class PokemonListResponse(PokeApiBaseModel):
    """``GET /pokemon?limit=N``.

    ``results`` stays optional so that a payload without it can be told apart
    from an empty listing.
    """

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[NamedResource] | None = None


class PokemonDetailPayload(PokeApiBaseModel):
    """``GET /pokemon/{id}``, reduced to the fields that are stored as columns.

    ``base_experience`` is ``null`` upstream for a number of alternate forms.
    """

    id: int = Field(ge=1)
    name: str = Field(min_length=1)
    height: int
    weight: int
    base_experience: int | None = None


def looks_like_detail_payload(payload: object) -> bool:
    """Cache predicate: keep only JSON objects that carry an ``id`` and ``name``."""

    return isinstance(payload, dict) and "id" in payload and "name" in payload
