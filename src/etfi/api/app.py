"""
ETFI API application factory.

The snapshot is loaded once by the caller and kept on app.state; every
request resolves against it afresh.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..engine import PolicyModifierAggregator
from ..exceptions import EtfiError, SnapshotLoadError
from ..packs import GameSnapshot, load_snapshot
from .routes import router

logger = logging.getLogger(__name__)


def create_app(
    snapshot: Optional[GameSnapshot] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API over a snapshot.

    Without a snapshot, the one at settings.data_path is loaded.

    Raises:
        SnapshotLoadError: If no snapshot is given and none is configured
    """
    settings = settings or Settings()
    if snapshot is None:
        if settings.data_path is None:
            raise SnapshotLoadError(message="No snapshot given: set ETFI_DATA_PATH")
        snapshot = load_snapshot(settings.data_path, strict_version=settings.strict_version)
        logger.info("Loaded snapshot %s", settings.data_path)

    app = FastAPI(
        title="ETFI API",
        description="Resolves active policy modifiers into town focus Bonus Yields labels.",
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )
    app.state.settings = settings
    app.state.snapshot = snapshot
    app.state.aggregator = PolicyModifierAggregator.from_snapshot(snapshot)

    @app.exception_handler(EtfiError)
    async def etfi_error_handler(request: Request, exc: EtfiError):
        logger.warning("Request failed: %s", exc)
        return JSONResponse(status_code=400, content=exc.to_dict())

    app.include_router(router)
    return app
