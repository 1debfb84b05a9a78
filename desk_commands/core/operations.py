"""Named commands invoked by the UI shell."""

import logging
import time

from desk_commands.core.config import CommandConfig
from desk_commands.core.exceptions import CommandError
from desk_commands.core.logging import command_var
from desk_commands.core.paths import AppDataDir
from desk_commands.core.state_store import read_state, write_state
from desk_commands.core.transcription import transcribe

logger = logging.getLogger(__name__)


async def transcribe_audio(audio: bytes, api_key: str, config: CommandConfig | None = None) -> str:
    """Transcribe one recorded clip and return its text."""
    token = command_var.set("transcribe_audio")
    start = time.perf_counter()
    try:
        logger.info("Transcribing %d bytes of audio", len(audio))
        text = await transcribe(audio, api_key, config)
        logger.info("Transcribed %d chars (%.0f ms)", len(text), (time.perf_counter() - start) * 1000)
        return text
    except CommandError as e:
        logger.warning("transcribe_audio failed [%s]", e.error_type)
        raise
    finally:
        command_var.reset(token)


async def read_data_file(app_data_dir: AppDataDir) -> str:
    """Return the persisted UI state as JSON text, ``"{}"`` if none exists."""
    token = command_var.set("read_data_file")
    try:
        contents = await read_state(app_data_dir)
        logger.info("Read %d chars of state", len(contents))
        return contents
    except CommandError as e:
        logger.warning("read_data_file failed [%s]: %s", e.error_type, e.message)
        raise
    finally:
        command_var.reset(token)


async def write_data_file(contents: str, app_data_dir: AppDataDir) -> None:
    """Overwrite the persisted UI state with ``contents``."""
    token = command_var.set("write_data_file")
    try:
        await write_state(contents, app_data_dir)
        logger.info("Wrote %d chars of state", len(contents))
    except CommandError as e:
        logger.warning("write_data_file failed [%s]: %s", e.error_type, e.message)
        raise
    finally:
        command_var.reset(token)
