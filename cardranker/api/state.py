"""
Application phase and the shared ranking session.

The catalog is loaded once at startup. Until that finishes the app is
LOADING; a failed load leaves it FAILED for the rest of the process.
Interactive endpoints only run in READY.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from fastapi import Depends, Request

from cardranker.config import Settings
from cardranker.models.failure import CatalogLoadError, FailureKind, KnownError
from cardranker.services.blob_store import BlobStore
from cardranker.services.catalog import load_catalog
from cardranker.services.grade_store import GradeStoreRepository
from cardranker.services.ranking import RankingSession

logger = logging.getLogger(__name__)


class AppPhase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class AppState:
    """Process-wide ranker state, stored on `app.state.ranker`."""

    phase: AppPhase = AppPhase.LOADING
    session: RankingSession | None = None
    error: CatalogLoadError | None = None


async def start_ranker(app_state: AppState, app_settings: Settings, blob_store: BlobStore) -> None:
    """
    Load the catalog and persisted grades, then open the session.

    A catalog failure is recorded on `app_state` instead of raised, so the
    API can keep answering with the error.
    """
    app_state.phase = AppPhase.LOADING
    try:
        catalog = await load_catalog(app_settings)
    except CatalogLoadError as e:
        logger.error(
            "catalog_load_failed",
            extra={"source": e.source, "detail": e.detail},
        )
        app_state.phase = AppPhase.FAILED
        app_state.error = e
        return

    repository = GradeStoreRepository(blob_store, app_settings.storage_key)
    app_state.session = await RankingSession.open(catalog, repository)
    app_state.phase = AppPhase.READY


def get_app_state(request: Request) -> AppState:
    state: AppState | None = getattr(request.app.state, "ranker", None)
    if state is None:
        state = AppState()
        request.app.state.ranker = state
    return state


def get_ranking_session(
    app_state: Annotated[AppState, Depends(get_app_state)],
) -> RankingSession:
    """
    Dependency returning the ready session.

    Raises:
        CatalogLoadError: If the catalog failed to load
        KnownError: While the catalog is still loading
    """
    if app_state.phase == AppPhase.FAILED and app_state.error is not None:
        raise CatalogLoadError(app_state.error.source, app_state.error.detail)
    if app_state.phase != AppPhase.READY or app_state.session is None:
        raise KnownError(
            kind=FailureKind.CATALOG_LOADING,
            message="Loading cards...",
            suggestion="Retry in a moment.",
            status_code=503,
        )
    return app_state.session
