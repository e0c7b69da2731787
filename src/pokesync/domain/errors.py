"""Error taxonomy for the synchronization pipeline and the read side."""

from __future__ import annotations


class PokesyncError(RuntimeError):
    """Base class for pokesync domain errors."""


class UpstreamUnavailable(PokesyncError):
    """The catalog could not be fetched or carried no result list."""


class ItemResolutionFailed(PokesyncError):
    """A single catalog entry could not be resolved to a detail record."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class StoreWriteFailed(PokesyncError):
    """The bulk upsert was rejected; nothing from the batch was written."""


class StoreUnavailable(PokesyncError):
    """The store was not started or could not hand out a session."""


class InvalidArgument(PokesyncError, ValueError):
    """A caller supplied an argument outside its accepted domain."""


class SyncFailed(PokesyncError):
    """A sync cycle ended without persisting its snapshot."""


class SyncAlreadyRunning(PokesyncError):
    """A sync cycle was requested while another one was in flight."""
