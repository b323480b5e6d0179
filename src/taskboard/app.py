"""Application factory for the FastAPI service."""

from __future__ import annotations

import asyncio
import datetime
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import PROJECT_ROOT, Settings, get_settings
from .routers.drafts import router as drafts_router
from .routers.themes import router as themes_router
from .services.draft_sessions import DraftSessionService
from .store import SQLiteDocumentStore

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _configure_logging(settings: Settings) -> None:
    """Configure logging based on the LOG_LEVEL and LOG_FILE settings."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = []

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))
        handlers.append(file_handler)

    # Always add console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT))
    handlers.append(console_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    logging.getLogger("taskboard").setLevel(log_level)
    logging.getLogger("uvicorn").setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)

    # Quiet down the SQLite driver unless debugging
    if log_level > logging.DEBUG:
        logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def _resolve_under(base: Path, p: Path) -> Path:
    # Allow absolute paths as-is (useful for tests and external mounts).
    if p.is_absolute():
        return p.resolve()
    resolved = (base / p).resolve()
    if not resolved.is_relative_to(base):
        raise ValueError(f"Configured path {resolved} escapes project root {base}")
    return resolved


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    # Load .env first so settings and logging see it
    load_dotenv()
    settings = settings or get_settings()
    _configure_logging(settings)

    database_path = _resolve_under(PROJECT_ROOT, settings.database_path)
    store = SQLiteDocumentStore(database_path)
    draft_session_service = DraftSessionService(
        store,
        window_days=settings.custom_repeat_window_days,
        session_ttl=datetime.timedelta(seconds=settings.draft_session_ttl_seconds),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.initialize()
        try:
            yield
        finally:
            try:
                await asyncio.wait_for(store.close(), timeout=10.0)
            except asyncio.TimeoutError:
                logger.warning("Document store shutdown timed out after 10s")

    app = FastAPI(
        title="Taskboard Backend",
        version="0.1.0",
        description="Task drafts with recurrence, due dates and themes.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.document_store = store
    app.state.draft_session_service = draft_session_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(drafts_router)
    app.include_router(themes_router)

    @app.get("/health", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok", "database": str(database_path)}

    return app


__all__ = ["create_app"]
