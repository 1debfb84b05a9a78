"""Speech-to-text client for the OpenAI audio transcription endpoint."""

import logging
import re

import httpx
from pydantic import BaseModel, StrictStr, ValidationError

from desk_commands.core.config import CommandConfig
from desk_commands.core.exceptions import (
    ApiError,
    PayloadDecodeError,
    RequestBuildError,
    ResponseReadError,
    TransportError,
)

logger = logging.getLogger(__name__)

_TOKEN = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*"
_MIME_RE = re.compile(rf"{_TOKEN}/{_TOKEN}")


class TranscriptionResponse(BaseModel):
    """Success payload of the transcription endpoint; extra fields are ignored."""

    text: StrictStr


def _describe(e: BaseException) -> str:
    return str(e) or e.__class__.__name__


def _mime_type(value: str) -> str:
    if not _MIME_RE.fullmatch(value):
        raise RequestBuildError(f"Mime error: invalid content type {value!r}")
    return value


def build_transcription_request(
    client: httpx.AsyncClient,
    audio: bytes,
    api_key: str,
    config: CommandConfig,
) -> httpx.Request:
    """Assemble the multipart upload without sending it.

    The body carries exactly two parts: the ``model`` text field and the
    ``file`` part holding ``audio``.

    Raises:
        RequestBuildError: If the clip is too large, the declared MIME type is
            malformed, or httpx cannot encode the request.
    """
    limit = config.audio_max_upload_bytes
    if limit is not None and len(audio) > limit:
        raise RequestBuildError(
            f"Audio upload exceeds maximum size of {limit} bytes",
            error_type="audio_too_large",
        )

    mime = _mime_type(config.audio_mime_type)

    try:
        return client.build_request(
            "POST",
            config.transcription_url,
            headers={"Authorization": f"Bearer {api_key}"},
            data={"model": config.transcription_model},
            files={"file": (config.audio_filename, audio, mime)},
        )
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise RequestBuildError(f"Request build error: {_describe(e)}") from e


async def transcribe(audio: bytes, api_key: str, config: CommandConfig | None = None) -> str:
    """Upload one audio clip and return the transcript exactly as the API sent it.

    Args:
        audio: Raw clip bytes, uploaded as-is.
        api_key: Bearer token for this call only.
        config: Endpoint and timeout settings; defaults to ``CommandConfig()``.

    Returns:
        The ``text`` field of the response, untrimmed.

    Raises:
        RequestBuildError: If the request cannot be assembled.
        TransportError: If no response status was received.
        ResponseReadError: If the response body could not be read.
        ApiError: If the API answered with a non-2xx status.
        PayloadDecodeError: If a 2xx body lacks a string ``text`` field.
    """
    config = config or CommandConfig()
    timeout = httpx.Timeout(config.timeout_s, connect=config.connect_timeout_s)

    async with httpx.AsyncClient(timeout=timeout) as client:
        request = build_transcription_request(client, audio, api_key, config)
        logger.debug("Uploading %d bytes of audio to %s", len(audio), request.url)

        try:
            response = await client.send(request, stream=True)
        except httpx.TransportError as e:
            logger.error("Transport error to %s: %s", request.url, e)
            raise TransportError(f"Request error: {_describe(e)}") from e

        try:
            await response.aread()
            body = response.text
        except (httpx.RequestError, httpx.StreamError) as e:
            logger.error("Failed to read response from %s: %s", request.url, e)
            raise ResponseReadError(f"Response read error: {_describe(e)}") from e
        finally:
            await response.aclose()

    if not response.is_success:
        reason = response.reason_phrase or httpx.codes.get_reason_phrase(response.status_code)
        logger.warning("Transcription API returned %d %s", response.status_code, reason)
        raise ApiError(
            f"OpenAI error {response.status_code} {reason}: {body}",
            status_code=response.status_code,
            reason=reason,
            body=body,
        )

    try:
        payload = TranscriptionResponse.model_validate_json(body)
    except ValidationError as e:
        logger.error("Unexpected transcription payload: %d error(s)", e.error_count())
        raise PayloadDecodeError(f"JSON parse error: {e}, body: {body}", body=body) from e

    return payload.text
