"""HTTP client for the PokeAPI catalog and detail endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Self

import httpx
from pydantic import ValidationError

from pokesync.adapters.http_resilience import ResilientClient
from pokesync.config.pokeapi import PokeApiConfig, get_pokeapi_config
from pokesync.domain.errors import ItemResolutionFailed, UpstreamUnavailable
from pokesync.domain.model import (
    CatalogEntryRef,
    DetailResolution,
    ResolutionFailure,
    ResolutionSuccess,
)

from .schema import PokemonListResponse, looks_like_detail_payload
from .translator import parse_pokemon_detail

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from pokesync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _default_config() -> PokeApiConfig:
    return get_pokeapi_config(cache_predicate=looks_like_detail_payload)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _describe_http_error(exc: httpx.HTTPError | httpx.InvalidURL | TimeoutError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return "request timed out"
    return f"{type(exc).__name__}: {exc}"


@dataclass(slots=True)
class PokeApiClient:
    """Catalog fetcher and detail resolver sharing HTTP clients for one cycle.

    Use as ``async with PokeApiClient() as source``; the underlying clients
    are opened on entry and closed on exit.
    """

    config: PokeApiConfig = field(default_factory=_default_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    now_provider: Callable[[], datetime] = field(default=_utcnow)
    _catalog_client: ResilientClient | None = field(default=None, init=False, repr=False)
    _detail_client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> Self:
        if self._catalog_client is not None or self._detail_client is not None:
            raise RuntimeError("PokeApiClient session already open")
        self._catalog_client = self.client_factory(self.config.catalog)
        self._detail_client = self.client_factory(self.config.detail)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        clients = (self._catalog_client, self._detail_client)
        self._catalog_client = None
        self._detail_client = None
        for client in clients:
            if client is not None:
                await client.aclose()

    @property
    def catalog_url(self) -> str:
        return f"{self.config.base_url}/pokemon"

    async def fetch_catalog(self, *, limit: int) -> list[CatalogEntryRef]:
        client = self._require_open(self._catalog_client)
        try:
            async with asyncio.timeout(client.config.deadline_seconds):
                response = await client.get(self.catalog_url, params={"limit": limit})
            response.raise_for_status()
            listing = PokemonListResponse.model_validate_json(response.content)
        except (httpx.HTTPError, httpx.InvalidURL, TimeoutError) as exc:
            raise UpstreamUnavailable(
                f"Catalog request to {self.catalog_url} failed: {_describe_http_error(exc)}"
            ) from exc
        except ValidationError as exc:
            raise UpstreamUnavailable("Catalog response could not be decoded") from exc

        if listing.results is None:
            raise UpstreamUnavailable("Catalog response carried no result list")

        log.debug("Catalog reports %s entries, returned %s", listing.count, len(listing.results))
        return [CatalogEntryRef(name=entry.name, detail_url=entry.url) for entry in listing.results]

    async def resolve_detail(self, ref: CatalogEntryRef) -> DetailResolution:
        client = self._require_open(self._detail_client)
        try:
            async with asyncio.timeout(client.config.deadline_seconds):
                response = await client.get(ref.detail_url)
            response.raise_for_status()
            pokemon = parse_pokemon_detail(
                response.text,
                name=ref.name,
                synced_at=self.now_provider(),
            )
        except (httpx.HTTPError, httpx.InvalidURL, TimeoutError) as exc:
            reason = _describe_http_error(exc)
        except ItemResolutionFailed as exc:
            reason = exc.reason
        else:
            return ResolutionSuccess(ref=ref, pokemon=pokemon)

        log.warning("Could not resolve %s from %s: %s", ref.name, ref.detail_url, reason)
        return ResolutionFailure(ref=ref, reason=reason)

    @staticmethod
    def _require_open(client: ResilientClient | None) -> ResilientClient:
        if client is None:
            raise RuntimeError("PokeApiClient must be used inside 'async with'")
        return client


if TYPE_CHECKING:
    from pokesync.domain.ports.fetching import PokemonSource

    _source_check: PokemonSource = PokeApiClient()
