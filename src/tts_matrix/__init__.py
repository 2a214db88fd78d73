"""TTS comparison service: one request, several vendors, uniform results."""

from src.tts_matrix.models import (
    ErrorKind,
    ServiceDescriptor,
    SynthesisFailure,
    SynthesisResult,
    SynthesisSuccess,
    TTSRequest,
    TTSResponse,
)

__all__ = [
    "TTSRequest",
    "TTSResponse",
    "ServiceDescriptor",
    "ErrorKind",
    "SynthesisSuccess",
    "SynthesisFailure",
    "SynthesisResult",
]
