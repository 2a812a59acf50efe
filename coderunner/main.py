from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Final

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coderunner.api.routes import error_response, router as api_router
from coderunner.core.config import Settings, get_settings
from coderunner.core.logging import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API. Passing ``settings`` replaces the environment-derived ones."""
    resolved = settings if settings is not None else get_settings()
    configure_logging(resolved.log_level)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        resolved.jobs_dir.mkdir(parents=True, exist_ok=True)
        yield

    app = FastAPI(
        title="Code Runner API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_request: Request, _exc: RequestValidationError) -> JSONResponse:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid JSON")

    @app.get("/healthz")
    def healthz() -> dict[str, str]:  # sync + strictly typed
        return {"status": "ok"}

    app.include_router(api_router, prefix="/v1")
    return app


app: Final[FastAPI] = create_app()


def run() -> None:
    """Run the API using Uvicorn.

    This is for local/dev usage. Production deployments should use a process manager
    and configure workers according to their environment.
    """
    import uvicorn

    host: str = os.environ.get("HOST", "127.0.0.1")
    port_str: str | None = os.environ.get("PORT")
    port: int = int(port_str) if port_str else 5000
    uvicorn.run("coderunner.main:app", host=host, port=port, log_level="info")
