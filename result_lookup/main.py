"""
FastAPI Main Application
Examination result lookup: form page, JSON API and diagnostics
"""

from contextlib import asynccontextmanager
from datetime import date
import logging
from typing import AsyncGenerator, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import httpx
import uvicorn

from result_lookup.api.routes import health, lookup, page
from result_lookup.api.sessions import LookupSessionRegistry
from result_lookup.config import Settings, settings as default_settings
from result_lookup.config.record_store import RecordStoreConfig, check_environment
from result_lookup.core.logging import setup_logging
from result_lookup.domain.services.result_lookup_controller import ResultLookupController
from result_lookup.infrastructure.record_store.postgrest_client import PostgrestRecordStore
from result_lookup.infrastructure.record_store.types import RecordStore
from result_lookup.utils.logging_redaction import register_secret

logger = logging.getLogger(__name__)


def _install_store(app: FastAPI, store: RecordStore, clock: Callable[[], date]) -> None:
    app.state.store = store
    app.state.sessions = LookupSessionRegistry(
        factory=lambda: ResultLookupController(store, clock=clock),
        max_entries=app.state.settings.SESSION_MAX_ENTRIES,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Opens the shared record store client and closes it on shutdown
    """
    settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info("🚀 Starting Examination Result Lookup")
    logger.info("=" * 60)

    env_status = check_environment(settings)
    if env_status.all_configured:
        logger.info("✅ %s", env_status.message)
    else:
        # Not fatal: every query will fail until the variables are set
        logger.warning("⚠️ %s Missing: %s", env_status.message, ", ".join(env_status.missing()))

    http_client: Optional[httpx.AsyncClient] = None
    if getattr(app.state, "store", None) is None:
        config = RecordStoreConfig.from_settings(settings)
        register_secret(config.credential)
        http_client = httpx.AsyncClient(timeout=config.timeout_seconds)
        _install_store(app, PostgrestRecordStore(config, client=http_client), app.state.clock)
        logger.info("📚 Record store client ready")

    yield

    logger.info("🛑 Shutting down Examination Result Lookup...")
    app.state.sessions.clear()
    if http_client is not None:
        await http_client.aclose()
        logger.info("✅ Record store client closed")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    clock: Callable[[], date] = date.today,
) -> FastAPI:
    """
    Build the application. Passing ``store`` skips the real record store
    client, which is how tests run without a backend.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Examination Result Lookup",
        description="Look up an examination result by roll number and date of birth",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.store = None
    if store is not None:
        _install_store(app, store, clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(page.router, tags=["Page"])
    app.include_router(lookup.router, prefix="/api/v1/lookup", tags=["Result Lookup"])
    return app


setup_logging(default_settings.LOG_LEVEL)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "result_lookup.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.DEBUG,
    )
