"""FastAPI application factory for the TTS proxy."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import get_settings
from src.config.settings import Settings
from src.tts_matrix.api import routes
from src.tts_matrix.dispatcher import TTSDispatcher
from src.tts_matrix.tts.factory import create_dispatcher

logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    """Condense pydantic validation errors into one readable message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.info(f"Rejected invalid request to {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


def create_app(
    settings: Optional[Settings] = None,
    dispatcher: Optional[TTSDispatcher] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Optional settings. If None, uses get_settings().
        dispatcher: Optional dispatcher. If None, one is built from settings.

    Returns:
        Configured FastAPI application with routes under ``/api``.
    """
    if settings is None:
        settings = get_settings()
    if dispatcher is None:
        dispatcher = create_dispatcher(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Side-by-side text-to-speech comparison across vendors.",
        version="0.1.0",
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(routes.router, prefix="/api", tags=["tts"])

    logger.info(f"Configured TTS services: {dispatcher.health()['configuredServices']}")
    return app
