"""PokeAPI configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_str
from .http_resilience import (
    NO_RETRY,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)

DEFAULT_POKEAPI_BASE_URL = "https://pokeapi.co/api/v2"
DEFAULT_PAGE_SIZE = 1500
DEFAULT_CATALOG_TIMEOUT_SECONDS = 30.0
DEFAULT_DETAIL_TIMEOUT_SECONDS = 10.0
DEFAULT_DETAIL_RATE_LIMIT = 20
USER_AGENT = "pokesync (+https://pokeapi.co/docs/v2#fairuse)"


@dataclass(frozen=True, slots=True)
class PokeApiConfig:
    """Endpoints and HTTP behaviour for the catalog and detail calls."""

    base_url: str
    page_size: int
    catalog: ResilienceConfig
    detail: ResilienceConfig


def get_pokeapi_config(*, cache_predicate: ShouldCacheHook | None = None) -> PokeApiConfig:
    base_url = env_str("POKEAPI_BASE_URL", DEFAULT_POKEAPI_BASE_URL).rstrip("/")
    page_size = env_int("POKESYNC_PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1)
    catalog_timeout = env_float(
        "POKESYNC_CATALOG_TIMEOUT", DEFAULT_CATALOG_TIMEOUT_SECONDS, minimum=0.1
    )
    detail_timeout = env_float(
        "POKESYNC_DETAIL_TIMEOUT", DEFAULT_DETAIL_TIMEOUT_SECONDS, minimum=0.1
    )
    detail_rate = env_int("POKESYNC_DETAIL_RATE_LIMIT", DEFAULT_DETAIL_RATE_LIMIT, minimum=1)
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}

    # A failed listing ends the cycle; the scheduler's next tick is the retry.
    catalog = ResilienceConfig(
        name="pokeapi-catalog",
        timeout_seconds=catalog_timeout,
        retry=NO_RETRY,
        cache=None,
        default_headers=headers,
    )
    detail = ResilienceConfig(
        name="pokeapi-detail",
        timeout_seconds=detail_timeout,
        retry=RetryPolicy(total=2, backoff_factor=0.5, max_backoff_wait=10.0),
        ratelimit=RateLimit(max_calls=detail_rate, per_seconds=1.0),
        cache=CacheConfig(should_cache=cache_predicate),
        default_headers=headers,
    )
    return PokeApiConfig(base_url=base_url, page_size=page_size, catalog=catalog, detail=detail)
