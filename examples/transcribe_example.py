"""Example: Transcribe a recorded clip using the desk commands library."""

import asyncio
import os

from desk_commands import CommandError, transcribe_audio


async def main():
    """Transcribe a webm clip."""
    # The credential is passed per call and never stored
    api_key = os.environ["OPENAI_API_KEY"]

    audio_path = "path/to/your/clip.webm"
    with open(audio_path, "rb") as f:
        audio_bytes = f.read()

    print("Transcribing audio...")
    try:
        transcript = await transcribe_audio(audio_bytes, api_key)
    except CommandError as e:
        print(f"Failed [{e.error_type}]: {e}")
        return

    print(f"\nTranscript:\n{transcript}")


if __name__ == "__main__":
    asyncio.run(main())
