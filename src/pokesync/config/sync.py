"""Synchronization and scheduling defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str

DEFAULT_MAX_CONCURRENCY = 16
DEFAULT_SYNC_CRON = "0 */12 * * *"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    schedule_cron: str = DEFAULT_SYNC_CRON
    scheduler_enabled: bool = True


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        max_concurrency=env_int("POKESYNC_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY, minimum=1),
        schedule_cron=env_str("POKESYNC_SYNC_CRON", DEFAULT_SYNC_CRON),
        scheduler_enabled=env_bool("POKESYNC_SCHEDULER_ENABLED", True),
    )
