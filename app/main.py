"""FastAPI application entry point for the Desk Commands bridge."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import get_settings
from app.schemas import CommandResponse, ErrorDetail, ErrorResponse, TranscribeAudioArgs, WriteDataFileArgs
from app.security import MaxBodySizeMiddleware, RequestIDMiddleware, ShellTokenMiddleware
from desk_commands.core.exceptions import (
    ApiError,
    CommandError,
    PayloadDecodeError,
    RequestBuildError,
    ResponseReadError,
    TransportError,
)
from desk_commands.core.logging import setup_logging
from desk_commands.core.operations import read_data_file, transcribe_audio, write_data_file

logger = logging.getLogger(__name__)

# Each audio byte costs up to four characters ("255,") in the JSON body
JSON_BYTES_PER_AUDIO_BYTE = 4
JSON_BODY_SLACK = 64 * 1024

_UPSTREAM_ERRORS = (TransportError, ApiError, ResponseReadError, PayloadDecodeError)


def _load_settings_safe():
    """Load settings, returning None when configuration is unavailable (e.g. tests)."""
    try:
        return get_settings()
    except Exception:
        return None


def create_app() -> FastAPI:
    """Build and return the FastAPI application with all middleware configured."""
    settings = _load_settings_safe()

    if settings is not None:
        setup_logging(settings.log_level)

    application = FastAPI(
        title="Desk Commands",
        description="Command bridge for a desktop UI shell: audio transcription and state persistence",
        version=__version__,
    )

    # Middleware stack (order matters: outermost is listed first, executes first)
    # 1. Request ID: assigned before anything else
    application.add_middleware(RequestIDMiddleware)

    # 2. Shell token enforcement (skips /health)
    application.add_middleware(
        ShellTokenMiddleware,
        shell_token=settings.shell_token if settings else None,
    )

    # 3. Body size guard for the audio upload command
    max_audio = settings.audio_max_upload_bytes if settings else 25_000_000
    application.add_middleware(
        MaxBodySizeMiddleware,
        max_bytes=max_audio * JSON_BYTES_PER_AUDIO_BYTE + JSON_BODY_SLACK,
    )

    # 4. CORS for the webview origin of the UI shell
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins_list if settings else [],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    return application


app = create_app()


def _command_failure(e: CommandError) -> HTTPException:
    """Flatten a command error into the single message the UI shell displays."""
    if isinstance(e, RequestBuildError):
        status_code = 400
    elif isinstance(e, _UPSTREAM_ERRORS):
        status_code = 502
    else:
        status_code = 500
    error_response = ErrorResponse(error=ErrorDetail(type=e.error_type, message=str(e)))
    return HTTPException(status_code=status_code, detail=error_response.model_dump())


def _internal_error(command: str, e: Exception) -> HTTPException:
    logger.exception(f"Unexpected error in {command}: {e}")
    return HTTPException(
        status_code=500,
        detail={"error": {"type": "internal_error", "message": f"Unexpected error: {e}"}},
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"ok": True, "version": __version__}


@app.post("/invoke/transcribe_audio")
async def invoke_transcribe_audio(args: TranscribeAudioArgs) -> CommandResponse:
    """
    Transcribe a recorded clip.

    Body: {"audio": [<byte>, ...], "apiKey": "<token>"}. Returns the
    transcript verbatim as {"result": "<text>"}.
    """
    try:
        settings = get_settings()
        text = await transcribe_audio(args.audio_bytes, args.api_key, settings.command_config())
    except CommandError as e:
        raise _command_failure(e)
    except Exception as e:
        raise _internal_error("transcribe_audio", e)

    return CommandResponse(result=text)


@app.post("/invoke/read_data_file")
async def invoke_read_data_file() -> CommandResponse:
    """
    Read the persisted UI state.

    Returns {"result": "<json text>"}, with "{}" when nothing was saved yet.
    """
    try:
        settings = get_settings()
        contents = await read_data_file(settings.resolve_app_data_dir)
    except CommandError as e:
        raise _command_failure(e)
    except Exception as e:
        raise _internal_error("read_data_file", e)

    return CommandResponse(result=contents)


@app.post("/invoke/write_data_file")
async def invoke_write_data_file(args: WriteDataFileArgs) -> CommandResponse:
    """
    Overwrite the persisted UI state.

    Body: {"contents": "<json text>"}. Returns {"result": null}.
    """
    try:
        settings = get_settings()
        await write_data_file(args.contents, settings.resolve_app_data_dir)
    except CommandError as e:
        raise _command_failure(e)
    except Exception as e:
        raise _internal_error("write_data_file", e)

    return CommandResponse(result=None)


def serve() -> None:
    """Run the bridge with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting Desk Commands bridge on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    serve()
