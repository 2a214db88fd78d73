"""Audio payload helpers.

Data URI encoding and decoding for audio bytes, and the synthetic tone
generator behind the offline demo service.
"""

import base64
import binascii
import io
import math

import numpy as np
import soundfile as sf


def encode_data_uri(data: bytes, mime_type: str = "audio/mpeg") -> str:
    """Encode audio bytes as a base64 data URI.

    Args:
        data: Raw audio bytes.
        mime_type: MIME type of the audio. Defaults to 'audio/mpeg'.

    Returns:
        A ``data:<mime>;base64,<payload>`` string.
    """
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Decode a base64 data URI.

    Args:
        uri: A ``data:<mime>;base64,<payload>`` string.

    Returns:
        Tuple of (mime type, raw bytes).

    Raises:
        ValueError: If the string is not a base64 data URI.
    """
    if not uri.startswith("data:"):
        raise ValueError("Not a data URI")
    header, sep, payload = uri[5:].partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("Data URI is not base64 encoded")
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return header[: -len(";base64")], data


def decode_base64_audio(value: str) -> bytes:
    """Decode a base64 audio field from a vendor JSON envelope.

    Raises:
        ValueError: If the value is not valid base64.
    """
    if value.startswith("data:"):
        return decode_data_uri(value)[1]
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 audio: {e}") from e


def generate_tone_wav(
    text_length: int,
    base_frequency: float,
    sample_rate: int = 22050,
    max_duration: float = 3.0,
) -> bytes:
    """Render a decaying, slightly modulated sine tone as a 16-bit mono WAV.

    The tone lasts 0.1 seconds per character of text, capped at
    ``max_duration``.

    Args:
        text_length: Number of characters in the synthesized text.
        base_frequency: Carrier frequency in Hz.
        sample_rate: Output sample rate in Hz.
        max_duration: Longest tone in seconds.

    Returns:
        WAV file bytes.
    """
    duration = min(text_length * 0.1, max_duration)
    samples = max(int(math.floor(sample_rate * duration)), 1)

    t = np.arange(samples, dtype=np.float64) / sample_rate
    frequency = base_frequency + np.sin(t * 2) * 50
    signal = np.sin(2 * np.pi * frequency * t) * 0.3 * np.exp(-t * 0.5)
    signal = np.clip(signal, -1.0, 1.0).astype(np.float32)

    buffer = io.BytesIO()
    sf.write(buffer, signal, sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()
