"""Translate PokeAPI detail payloads into domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from pokesync.domain.errors import ItemResolutionFailed
from pokesync.domain.model import Pokemon

from .schema import PokemonDetailPayload

if TYPE_CHECKING:
    from datetime import datetime


def parse_pokemon_detail(raw: str, *, name: str, synced_at: datetime) -> Pokemon:
    """Decode ``raw`` and build a record that keeps the body verbatim.

    Raises ``ItemResolutionFailed`` when the body is not valid JSON or lacks a
    required field.
    """

    try:
        payload = PokemonDetailPayload.model_validate_json(raw)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ItemResolutionFailed(name, f"invalid detail payload ({problems})") from exc
    return translate_pokemon(payload, raw=raw, synced_at=synced_at)


def translate_pokemon(
    payload: PokemonDetailPayload,
    *,
    raw: str,
    synced_at: datetime,
) -> Pokemon:
    return Pokemon(
        poke_api_id=payload.id,
        name=payload.name,
        height=payload.height,
        weight=payload.weight,
        base_experience=payload.base_experience,
        raw_payload=raw,
        last_synced_at=synced_at,
    )
