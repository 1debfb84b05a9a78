"""Resolution of the application-data directory and the state file inside it."""

import logging
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

from desk_commands.core.config import STATE_FILENAME
from desk_commands.core.exceptions import PathResolutionError

logger = logging.getLogger(__name__)

AppDataDir = str | os.PathLike | Callable[[], str | os.PathLike | None] | None


def _home(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME") or environ.get("USERPROFILE")
    if home:
        return Path(home)
    try:
        return Path.home()
    except RuntimeError as e:
        raise PathResolutionError(f"Could not determine home directory: {e}") from e


def resolve_app_data_dir(
    identifier: str,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the per-user data directory for ``identifier`` on this host.

    Args:
        identifier: Application identifier used as the leaf directory name.
        platform: Override for ``sys.platform`` (tests).
        environ: Override for ``os.environ`` (tests).

    Raises:
        PathResolutionError: On an unsupported platform or missing environment.
    """
    if not identifier:
        raise PathResolutionError("Application identifier must not be empty")

    platform = platform or sys.platform
    env = os.environ if environ is None else environ

    if platform.startswith("win") or platform == "cygwin":
        appdata = env.get("APPDATA")
        if not appdata:
            raise PathResolutionError("APPDATA is not set; cannot locate the application data directory")
        base = Path(appdata)
    elif platform == "darwin":
        base = _home(env) / "Library" / "Application Support"
    elif platform.startswith(("linux", "freebsd", "openbsd", "netbsd")):
        xdg = env.get("XDG_DATA_HOME", "")
        # Relative XDG paths are invalid and must be ignored
        if xdg and Path(xdg).is_absolute():
            base = Path(xdg)
        else:
            base = _home(env) / ".local" / "share"
    else:
        raise PathResolutionError(f"Unsupported platform for application data: {platform}")

    return base / identifier


def resolve_state_path(app_data_dir: AppDataDir) -> Path:
    """Compute the single state file location under ``app_data_dir``.

    ``app_data_dir`` is either a path or a zero-argument resolver supplied by
    the host. A failing resolver is reported, never replaced by a default.
    """
    if callable(app_data_dir):
        try:
            app_data_dir = app_data_dir()
        except PathResolutionError:
            raise
        except Exception as e:
            raise PathResolutionError(f"Failed to resolve application data directory: {e}") from e

    if app_data_dir is None or str(app_data_dir) == "":
        raise PathResolutionError("Application data directory is not available")

    return Path(app_data_dir) / STATE_FILENAME
