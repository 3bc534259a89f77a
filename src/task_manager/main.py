"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import Settings, load_settings
from .errors import register_exception_handlers
from .logging_config import setup_logging
from .middleware import LoggingMiddleware
from .routers import ai, auth, pages, tasks
from .state import AppState

BASE_DIR = Path(__file__).parent
STATIC_DIR = BASE_DIR / "static"

log = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the application state on startup."""
        app.state.app_state = AppState.create(settings)
        app.state.app_state.users.ensure_seeded()
        log.info("app_started", db_path=str(settings.db_path))
        yield
        log.info("app_stopped")

    app = FastAPI(
        title="Task Manager",
        description="Single-tenant task management with rule-based insights",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(auth.router)
    app.include_router(tasks.router)
    app.include_router(ai.router)
    app.include_router(pages.router)

    return app


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = load_settings()
    setup_logging(settings.log_format, settings.log_level)
    uvicorn.run(
        "task_manager.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
