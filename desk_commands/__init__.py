"""Desk Commands - backend commands for a desktop UI shell.

A small library implementing the two command families a desktop front end
invokes: transcription of a recorded clip through the OpenAI speech-to-text
API, and read/write of a single JSON state file under the user's
application-data directory.

Usage:
    >>> from desk_commands import read_data_file, resolve_app_data_dir, transcribe_audio
    >>>
    >>> text = await transcribe_audio(open("clip.webm", "rb").read(), api_key)
    >>> state = await read_data_file(lambda: resolve_app_data_dir("com.example.desk"))
"""

__version__ = "0.1.0"

# Public library API exports
from desk_commands.core.config import CommandConfig
from desk_commands.core.operations import (
    read_data_file,
    transcribe_audio,
    write_data_file,
)
from desk_commands.core.paths import resolve_app_data_dir, resolve_state_path
from desk_commands.core.state_store import read_state, write_state
from desk_commands.core.transcription import transcribe

# Export exceptions for library users
from desk_commands.core.exceptions import (
    ApiError,
    CommandError,
    IoCreateDirError,
    IoReadError,
    IoWriteError,
    PathResolutionError,
    PayloadDecodeError,
    RequestBuildError,
    ResponseReadError,
    TransportError,
)

__all__ = [
    "__version__",
    # Configuration
    "CommandConfig",
    # Commands
    "transcribe_audio",
    "read_data_file",
    "write_data_file",
    # Building blocks
    "transcribe",
    "read_state",
    "write_state",
    "resolve_app_data_dir",
    "resolve_state_path",
    # Exceptions
    "CommandError",
    "PathResolutionError",
    "IoReadError",
    "IoWriteError",
    "IoCreateDirError",
    "RequestBuildError",
    "TransportError",
    "ApiError",
    "ResponseReadError",
    "PayloadDecodeError",
]
