"""HTTP routes for the TTS proxy.

The browser only ever talks to these routes; vendor credentials stay on the
server.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from src.config.settings import Settings
from src.tts_matrix.dispatcher import TTSDispatcher
from src.tts_matrix.models import (
    ErrorKind,
    ServiceDescriptor,
    SynthesisFailure,
    TTSRequest,
    TTSResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

# Failures caused by the caller rather than by a vendor
CLIENT_ERROR_KINDS = {ErrorKind.VALIDATION, ErrorKind.UNKNOWN_SERVICE}


def get_dispatcher(request: Request) -> TTSDispatcher:
    return request.app.state.dispatcher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


DispatcherDep = Annotated[TTSDispatcher, Depends(get_dispatcher)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/tts",
    response_model=TTSResponse,
    response_model_exclude_none=True,
    summary="Generate speech with one vendor",
    responses={400: {"description": "Invalid request"}, 500: {"description": "Synthesis failed"}},
)
async def generate_tts(
    body: TTSRequest,
    dispatcher: DispatcherDep,
    settings: SettingsDep,
    service: Annotated[Optional[str], Query(description="Service identifier")] = None,
):
    """Synthesize ``body.text`` with the vendor named by ``service``.

    Returns the uniform TTSResponse on success, or ``{"error": ...}`` with
    status 400 for bad input and 500 for a vendor failure.
    """
    if not service:
        return error_response(400, "Missing service")
    if len(body.text) > settings.max_text_length:
        return error_response(400, f"Text exceeds {settings.max_text_length} character limit")

    result = await dispatcher.route(service, body)
    if isinstance(result, SynthesisFailure):
        status_code = 400 if result.kind in CLIENT_ERROR_KINDS else 500
        logger.warning(f"TTS request for {service} failed ({result.kind.value}): {result.message}")
        return error_response(status_code, result.message)

    return result.response


@router.get("/health", summary="Service configuration report")
async def health(dispatcher: DispatcherDep):
    """Report which vendors are configured. Never exposes credentials."""
    return dispatcher.health()


@router.get(
    "/services",
    response_model=list[ServiceDescriptor],
    summary="List TTS services",
)
async def list_services(dispatcher: DispatcherDep):
    """List every service with its display name and configuration state."""
    return dispatcher.services()
