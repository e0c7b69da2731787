"""Public interface for the PokeAPI adapter."""

from __future__ import annotations

from .client import PokeApiClient
from .schema import (
    NamedResource,
    PokemonDetailPayload,
    PokemonListResponse,
    looks_like_detail_payload,
)
from .translator import parse_pokemon_detail, translate_pokemon

__all__ = [
    "NamedResource",
    "PokeApiClient",
    "PokemonDetailPayload",
    "PokemonListResponse",
    "looks_like_detail_payload",
    "parse_pokemon_detail",
    "translate_pokemon",
]
