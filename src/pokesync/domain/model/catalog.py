"""Transient catalog references and per-item resolution outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pokemon import Pokemon


@dataclass(frozen=True, slots=True)
class CatalogEntryRef:
    """Name and detail location of one catalog entry. Never persisted."""

    name: str
    detail_url: str


@dataclass(frozen=True, slots=True)
class ResolutionSuccess:
    ref: CatalogEntryRef
    pokemon: Pokemon


@dataclass(frozen=True, slots=True)
class ResolutionFailure:
    ref: CatalogEntryRef
    reason: str


type DetailResolution = ResolutionSuccess | ResolutionFailure
