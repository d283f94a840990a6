"""
User API — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn userapi.main:app) or the `userapi` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────┐ ┌────────────────┐  │
    │  │ GET /user/id │ │ POST /user│ │ DELETE /user/id│  │
    │  └──────────────┘ └───────────┘ └────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFound→404 │ Malformed→400 │ Store→503     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, open the document store, ping it (log only)
    Shutdown: close the document store client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from userapi import __version__
from userapi.config import settings
from userapi.database import open_user_store
from userapi.exceptions import (
    MalformedRequestError,
    NotFoundError,
    StoreUnavailableError,
)
from userapi.middleware.logging import RequestLoggingMiddleware
from userapi.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from userapi.routes import users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Replaced by RequestLoggingMiddleware / too chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the document store on startup and close it on shutdown.

    An unreachable store is logged and the server starts anyway: each
    request that needs the store fails on its own with a 503, and requests
    succeed again as soon as the store comes back.
    """
    setup_logging()
    logger.info("User API %s starting up...", __version__)

    store = open_user_store(settings)
    app.state.user_store = store
    try:
        await store.ping()
        logger.info("Document store reachable at startup")
    except StoreUnavailableError:
        logger.warning("Document store unreachable at startup; serving anyway")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("User API shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        NotFoundError           → 404, no body
        MalformedRequestError   → 400, no body
        RequestValidationError  → 400, no body (FastAPI body parsing)
        HTTPException           → its status, no body (unknown route, 405)
        StoreUnavailableError   → 503, JSON error
        Exception (fallback)    → 500, JSON error

    Client errors deliberately carry no detail. Server errors carry a
    generic message and the request ID; details go to the log only.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return Response(status_code=404)

    @app.exception_handler(MalformedRequestError)
    async def handle_malformed_request(request: Request, exc: MalformedRequestError):
        logger.info("[%s] Malformed request: %s | %s", request_id_var.get(""), exc.message, exc.context)
        return Response(status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body failed to parse or type-check; reported as a malformed request."""
        error = MalformedRequestError(
            context={"errors": [e.get("msg") for e in exc.errors()]}
        )
        return await handle_malformed_request(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return Response(status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        rid = request_id_var.get("")
        logger.error("[%s] Store unavailable: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=503,
            content={
                "error": "store_unavailable",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all; the traceback is logged, never returned.

        Runs in ServerErrorMiddleware, outside RequestIDMiddleware, so the
        request ID header is set here.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Importing this module has no side effects beyond building the app:
    the store is opened by the lifespan handler, not here.
    """
    app = FastAPI(
        title="User API",
        description="Create, fetch and delete users stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on the configured address."""
    uvicorn.run(
        "userapi.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
