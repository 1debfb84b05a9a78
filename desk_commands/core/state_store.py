"""Read-or-default and atomic write of the persisted UI state file."""

import asyncio
import logging
import os
import stat
import tempfile
from pathlib import Path

from desk_commands.core.config import EMPTY_STATE
from desk_commands.core.exceptions import IoCreateDirError, IoReadError, IoWriteError
from desk_commands.core.paths import AppDataDir, resolve_state_path

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    """Read the state file synchronously. Intended to be called via asyncio.to_thread."""
    try:
        if not path.exists():
            logger.debug("No state file at %s, returning empty state", path)
            return EMPTY_STATE
        # Decode bytes directly so line endings come back untouched
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read state file %s: %s", path, e)
        raise IoReadError(f"Failed to read {path}: {e}") from e


def _write_atomic(path: Path, contents: str) -> None:
    """Replace the state file through a temp file in the same directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed to create directory %s: %s", path.parent, e)
        raise IoCreateDirError(f"Failed to create directory {path.parent}: {e}") from e

    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(contents.encode("utf-8"))
            f.flush()
            os.fsync(f.fileno())
        # Keep the permissions of the file being replaced
        try:
            os.chmod(tmp_path, stat.S_IMODE(os.stat(path).st_mode))
        except FileNotFoundError:
            pass
        os.replace(tmp_path, path)
    except (OSError, UnicodeEncodeError) as e:
        logger.error("Failed to write state file %s: %s", path, e)
        if tmp_path is not None:
            Path(tmp_path).unlink(missing_ok=True)
        raise IoWriteError(f"Failed to write {path}: {e}") from e


async def read_state(app_data_dir: AppDataDir) -> str:
    """Return the persisted state text, or ``"{}"`` when none has been written.

    Raises:
        PathResolutionError: If the application data directory is unavailable.
        IoReadError: If the file exists but cannot be read as UTF-8.
    """
    path = resolve_state_path(app_data_dir)
    return await asyncio.to_thread(_read_text, path)


async def write_state(contents: str, app_data_dir: AppDataDir) -> None:
    """Overwrite the persisted state with ``contents``, creating directories as needed.

    A concurrent reader observes either the previous or the new contents.
    Concurrent writers race and the last ``os.replace`` wins.

    Raises:
        PathResolutionError: If the application data directory is unavailable.
        IoCreateDirError: If the parent directory cannot be created.
        IoWriteError: If the file cannot be written or moved into place.
    """
    path = resolve_state_path(app_data_dir)
    await asyncio.to_thread(_write_atomic, path, contents)
    logger.debug("Wrote %d chars of state to %s", len(contents), path)
