"""
ETFI HTTP API

Read-only FastAPI service over a loaded game data snapshot.

Usage:
    from etfi.api import create_app
    from etfi.packs import load_snapshot

    app = create_app(load_snapshot("snapshot.yaml"))
"""
from __future__ import annotations

from .app import create_app

__all__ = ["create_app"]
