"""
Main entrypoint for the User Registry API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn user_registry_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .schemas.user import VALIDATION_MESSAGES

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid request input as ``400 {"errors": [...]}``.

    One entry per offending field, in the order pydantic reported them.
    Known registration fields carry their fixed message.  Errors that
    concern the body as a whole (malformed JSON, not an object) are
    reported under ``param: "body"``.
    """
    errors = []
    seen = set()
    for error in exc.errors():
        loc = error.get("loc", ())
        param = loc[1] if len(loc) > 1 and isinstance(loc[1], str) else "body"
        if param in seen:
            continue
        seen.add(param)
        msg = VALIDATION_MESSAGES.get(param, error.get("msg", "Invalid value"))
        errors.append({"msg": msg, "param": param})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Log any unexpected failure and answer with a bare 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging first so that everything below can log, then
    mounts the v1 routes under ``/api/v1`` and registers the error
    handlers.  The user collection is migrated on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.include_router(v1_router, prefix="/api/v1")

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


# Create the application instance at import time so that uvicorn can
# discover it without calling create_app manually.
app = create_app()
