"""Error taxonomy for desk commands.

Every failure a command can report is one of these. ``str(error)`` is the
flattened, human-readable message handed back to the UI shell; the class and
``error_type`` keep the cause distinguishable before that happens.
"""


class CommandError(Exception):
    """Base exception for all command errors."""

    error_type = "command_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PathResolutionError(CommandError):
    """Raised when the application-data directory cannot be resolved."""

    error_type = "path_resolution_error"


class IoReadError(CommandError):
    """Raised when the state file exists but cannot be read."""

    error_type = "io_read_error"


class IoWriteError(CommandError):
    """Raised when the state file cannot be written."""

    error_type = "io_write_error"


class IoCreateDirError(CommandError):
    """Raised when the state file's parent directories cannot be created."""

    error_type = "io_create_dir_error"


class RequestBuildError(CommandError):
    """Raised when the transcription request cannot be assembled locally."""

    def __init__(self, message: str, error_type: str = "request_build_error"):
        self.error_type = error_type
        super().__init__(message)


class TransportError(CommandError):
    """Raised when the request never produced a response status line."""

    error_type = "transport_error"


class ApiError(CommandError):
    """Raised when the remote API answered with a non-success status."""

    error_type = "api_error"

    def __init__(self, message: str, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(message)


class ResponseReadError(CommandError):
    """Raised when the response body could not be read after the status line."""

    error_type = "response_read_error"


class PayloadDecodeError(CommandError):
    """Raised when a success response does not carry a string ``text`` field."""

    error_type = "payload_decode_error"

    def __init__(self, message: str, body: str):
        self.body = body
        super().__init__(message)
