#!/usr/bin/env python3
"""Compare TTS services through a running proxy server.

This script sends the same text to every service (or a chosen subset) and:
- Prints generation time and audio size per service as results arrive
- Saves each returned audio file for listening

Usage:
    python scripts/compare_tts.py
    python scripts/compare_tts.py --text "Custom test message" --gender male
    python scripts/compare_tts.py --services elevenlabs hume --url http://localhost:9000
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.tts_matrix.client import TTSClient
from src.tts_matrix.models import TTSRequest
from src.tts_matrix.tts.audio import decode_data_uri

# Set up logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

EXTENSIONS = {"audio/mpeg": "mp3", "audio/wav": "wav"}


async def compare(
    url: str,
    request: TTSRequest,
    services: Optional[list[str]],
    output_dir: Path,
) -> int:
    """Run one comparison and save the audio.

    Args:
        url: Proxy server base URL.
        request: Synthesis request sent to every service.
        services: Services to call. If None, asks the server for its list.
        output_dir: Directory for the audio files.

    Returns:
        Number of services that failed.
    """
    client = TTSClient(base_url=url)

    if not services:
        services = [service["id"] for service in await client.services()]

    print("=" * 60)
    print("TTS Comparison")
    print("=" * 60)
    print(f"  Text: {request.text}")
    print(f"  Language: {request.language}, voice: {request.voice_gender}")
    print(f"  Services: {', '.join(services)}")
    print()

    output_dir.mkdir(parents=True, exist_ok=True)
    failures = 0

    async for result in client.compare(request, services):
        if not result.success:
            failures += 1
            print(f"✗ {result.service}: {result.error}")
            continue

        response = result.response
        mime_type, audio = decode_data_uri(response.audio_url)
        output_file = output_dir / f"{result.service}.{EXTENSIONS.get(mime_type, 'bin')}"
        output_file.write_bytes(audio)

        print(
            f"✓ {result.service}: {response.generation_time} ms, "
            f"{response.audio_size} bytes ({response.audio_size / 1024:.2f} KB) -> {output_file}"
        )

    print()
    print(f"{len(services) - failures}/{len(services)} services succeeded")
    return failures


async def main() -> None:
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Compare TTS services side by side",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--text",
        "-t",
        type=str,
        default="Hello, this is a test message for TTS synthesis.",
        help="Text to synthesize",
    )
    parser.add_argument("--language", "-l", type=str, default="en", help="ISO-639-1 language code")
    parser.add_argument("--gender", "-g", choices=["female", "male"], default="female", help="Voice gender")
    parser.add_argument("--services", "-s", nargs="*", default=None, help="Services to compare (default: all)")
    parser.add_argument("--url", type=str, default="http://localhost:8000", help="Proxy server base URL")
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=project_root / "test_outputs",
        help="Directory for audio files (default: test_outputs/)",
    )

    args = parser.parse_args()
    request = TTSRequest(text=args.text, language=args.language, voice_gender=args.gender)

    try:
        failures = await compare(args.url, request, args.services, args.out_dir)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)

    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    asyncio.run(main())
