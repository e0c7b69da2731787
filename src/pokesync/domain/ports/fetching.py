"""Ports for fetching the upstream catalog and its detail documents."""

from __future__ import annotations

from collections.abc import Callable  # noqa: TC003
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from pokesync.domain.model import CatalogEntryRef, DetailResolution


@runtime_checkable
class CatalogFetcher(Protocol):
    """Lists every known catalog entry in one request."""

    async def fetch_catalog(self, *, limit: int) -> Sequence[CatalogEntryRef]:
        """Return up to ``limit`` entries or raise ``UpstreamUnavailable``."""
        ...


@runtime_checkable
class DetailResolver(Protocol):
    """Turns one catalog entry into a record, reporting failures as values."""

    async def resolve_detail(self, ref: CatalogEntryRef) -> DetailResolution:
        """Never raises; any problem is returned as ``ResolutionFailure``."""
        ...


@runtime_checkable
class PokemonSource(CatalogFetcher, DetailResolver, Protocol):
    """Both upstream calls behind one async session scoped to a sync cycle."""

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


type PokemonSourceFactory = Callable[[], PokemonSource]


__all__ = ["CatalogFetcher", "DetailResolver", "PokemonSource", "PokemonSourceFactory"]
