"""SOLIDify HTTP service — scans C# trees on the server and reports SOLID findings.

Serve with ``uvicorn solidify.main:app``.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from solidify import __version__
from solidify.api.router import api_router
from solidify.config import get_settings
from solidify.graph.workflow import WorkflowServices
from solidify.logging_setup import configure_logging

API_PREFIX = "/api/v1"

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One engine per process; each scan still builds its own store
    services = getattr(app.state, "services", None) or WorkflowServices()
    app.state.services = services
    logger.info(
        "service_ready",
        debug=get_settings().DEBUG,
        checkers=[checker.name for checker in services.engine.checkers],
    )
    yield
    logger.info("service_stopped")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "message": "The scan could not be completed."},
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning("invalid_request", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=422, content={"error": "validation_error", "message": str(exc)})


def create_app() -> FastAPI:
    """Build the FastAPI application with routes, CORS and error handlers."""
    configure_logging()

    application = FastAPI(
        title="SOLIDify",
        description="Heuristic SOLID checks for C# source, with optional LLM explanations.",
        version=__version__,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.add_exception_handler(Exception, handle_unexpected)
    application.add_exception_handler(ValueError, handle_value_error)
    application.include_router(api_router, prefix=API_PREFIX)

    @application.get("/")
    async def root():
        return {
            "name": application.title,
            "version": __version__,
            "health": f"{API_PREFIX}/health",
            "rules": f"{API_PREFIX}/rules",
        }

    return application


app = create_app()
