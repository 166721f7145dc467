import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cardranker.api import cards_router, health_router, rankings_router, view_router
from cardranker.api.state import AppState, start_ranker
from cardranker.config import settings
from cardranker.db.database import async_session_factory, init_db
from cardranker.models.failure import ApiResponse, KnownError
from cardranker.services.blob_store import SqlBlobStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler: create tables, then load cards and grades."""
    await init_db()
    app.state.ranker = AppState()
    await start_ranker(app.state.ranker, settings, SqlBlobStore(async_session_factory))
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardranker"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(health_router)
app.include_router(rankings_router)
app.include_router(view_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a KnownError as a known-failure envelope with its status code."""
    logger.info("known_error", extra={"kind": exc.kind.value, "status": exc.status_code})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render anything unexpected as an unknown-failure envelope instead of a bare 500."""
    logger.exception("unexpected_error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=ApiResponse.unknown_failure(type(exc).__name__).model_dump(mode="json"),
    )
