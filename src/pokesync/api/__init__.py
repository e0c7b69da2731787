"""HTTP API for ranking queries and manual synchronization."""

from __future__ import annotations

from .app import create_app

__all__ = ["create_app"]
