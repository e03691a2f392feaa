"""FastAPI application factory and process entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from bloglist import blogs, users
from bloglist.config import Settings
from bloglist.errors import register_error_handlers
from bloglist.service import BlogListService
from bloglist.store_redis import create_stores
from bloglist.telemetry import (
    add_trace_context,
    configure_stdlib_logging,
    init_telemetry,
    shutdown_telemetry,
)

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_trace_context,  # type: ignore[list-item]
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(),
    ],
)

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_telemetry()
    settings: Settings = getattr(app.state, "settings", None) or Settings()
    app.state.settings = settings
    blog_store, user_store = create_stores(settings.store_backend, settings.redis_url)
    service = BlogListService.from_settings(settings, blog_store, user_store)
    app.state.service = service

    await log.ainfo("service started", store_backend=settings.store_backend)
    yield

    await service.aclose()
    await log.ainfo("service stopped")
    shutdown_telemetry()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an app instance. Settings are read from the environment if omitted."""
    app = FastAPI(title="Bloglist API", lifespan=lifespan)
    if settings is not None:
        app.state.settings = settings
    register_error_handlers(app)
    app.include_router(blogs.router)
    app.include_router(users.router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    FastAPIInstrumentor.instrument_app(app)
    return app


app = create_app()


def run() -> None:
    """Start the HTTP listener on the configured host and port."""
    settings = Settings()
    configure_stdlib_logging(settings.log_level)
    log.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level
    )


if __name__ == "__main__":
    run()
