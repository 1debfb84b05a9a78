"""Simple configuration for core library usage."""

from dataclasses import dataclass

STATE_FILENAME = "state.json"
EMPTY_STATE = "{}"

OPENAI_TRANSCRIPTION_URL = "https://api.openai.com/v1/audio/transcriptions"


@dataclass(frozen=True)
class CommandConfig:
    """Configuration for the desk command library.

    This is a plain config suitable for library usage without
    environment variable loading.

    Args:
        transcription_url: Endpoint receiving the multipart upload
        transcription_model: Value of the ``model`` form field
        audio_filename: Filename declared on the ``file`` part
        audio_mime_type: Content type declared on the ``file`` part
        timeout_s: Total timeout for the transcription request in seconds
        connect_timeout_s: Connection timeout in seconds
        audio_max_upload_bytes: Largest clip accepted for upload, None disables the check
    """

    transcription_url: str = OPENAI_TRANSCRIPTION_URL
    transcription_model: str = "gpt-4o-transcribe"
    audio_filename: str = "audio.webm"
    audio_mime_type: str = "audio/webm"
    timeout_s: float = 300.0
    connect_timeout_s: float = 10.0
    audio_max_upload_bytes: int | None = 25_000_000
