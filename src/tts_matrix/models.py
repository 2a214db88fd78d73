"""Request, response and result models for TTS synthesis.

This module defines Pydantic models for type-safe validation of synthesis
requests and for the uniform response shape every vendor adapter produces.
JSON field names are camelCase on the wire.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

VoiceGender = Literal["male", "female"]

MAX_TEXT_LENGTH = 5000


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TTSRequest(CamelModel):
    """Text to synthesize with the language and voice gender to use."""

    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, description="Text to synthesize")
    language: str = Field(..., min_length=2, max_length=8, description="ISO-639-1 language code")
    voice_gender: VoiceGender = Field(..., description="Voice gender: 'male' or 'female'")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject whitespace-only text without altering the text itself."""
        if not v.strip():
            raise ValueError("Text cannot be empty")
        return v


class TTSResponse(CamelModel):
    """Uniform synthesis response.

    When ``success`` is true, ``audio_url`` and ``audio_size`` are populated and
    ``error`` is absent. When false, ``audio_url`` is empty and ``error`` is set.
    """

    audio_url: str = Field(default="", description="Playable URI: remote URL or base64 data URI")
    audio_size: int = Field(default=0, ge=0, description="Audio payload size in bytes")
    generation_time: int = Field(default=0, ge=0, description="Wall-clock generation time in milliseconds")
    success: bool = Field(..., description="Whether synthesis succeeded")
    text_length: int = Field(default=0, ge=0, description="Length of the synthesized text")
    error: Optional[str] = Field(default=None, description="Human-readable failure message")

    @model_validator(mode="after")
    def check_outcome(self) -> "TTSResponse":
        if self.success:
            if not self.audio_url or self.audio_size <= 0:
                raise ValueError("A successful response needs audio_url and a positive audio_size")
            if self.error is not None:
                raise ValueError("A successful response cannot carry an error")
        else:
            if not self.error:
                raise ValueError("A failed response needs an error message")
            if self.audio_url:
                raise ValueError("A failed response cannot carry audio")
        return self


class ServiceDescriptor(CamelModel):
    """Static metadata about a TTS service, used for labeling."""

    id: str = Field(..., description="Service identifier used for routing")
    display_name: str = Field(..., description="Human-readable vendor name")
    description: str = Field(default="", description="Short description of the vendor")
    configured: bool = Field(default=False, description="Whether the service has the credentials it needs")


class ErrorKind(str, Enum):
    """Category of a synthesis failure."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    UPSTREAM_HTTP = "upstream_http"
    UPSTREAM_PROTOCOL = "upstream_protocol"
    UPSTREAM_JOB_FAILED = "upstream_job_failed"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    TIMEOUT = "timeout"
    UNKNOWN_SERVICE = "unknown_service"


class SynthesisSuccess(BaseModel):
    """Successful synthesis outcome."""

    outcome: Literal["success"] = "success"
    service: str
    response: TTSResponse

    @property
    def ok(self) -> bool:
        return True


class SynthesisFailure(BaseModel):
    """Failed synthesis outcome with its error category."""

    outcome: Literal["failure"] = "failure"
    service: str
    kind: ErrorKind
    message: str
    status_code: Optional[int] = Field(default=None, description="Upstream HTTP status, if any")
    text_length: int = 0
    generation_time: int = 0

    @property
    def ok(self) -> bool:
        return False

    def to_response(self) -> TTSResponse:
        """Render the failure in the uniform response shape."""
        return TTSResponse(
            success=False,
            error=self.message,
            text_length=self.text_length,
            generation_time=self.generation_time,
        )


SynthesisResult = Union[SynthesisSuccess, SynthesisFailure]
