"""Shell token authentication, request size limits, and request ID middleware."""

import hmac
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from desk_commands.core.logging import generate_request_id, request_id_var

logger = logging.getLogger(__name__)

SHELL_TOKEN_HEADER = "x-shell-token"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID to every request and log request lifecycle."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = generate_request_id()
        request.state.request_id = rid
        token = request_id_var.set(rid)
        start = time.perf_counter()
        try:
            logger.info("%s %s", request.method, request.url.path)
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s -> %s (%.0f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            response.headers["X-Request-ID"] = rid
            return response
        finally:
            request_id_var.reset(token)


class ShellTokenMiddleware(BaseHTTPMiddleware):
    """Require the shell's shared token on command invocations when one is configured.

    Only paths under /invoke/ are guarded; /health is always public. The
    transcription credential travels in the command arguments, not here.
    """

    def __init__(self, app, shell_token: str | None) -> None:  # noqa: ANN001
        super().__init__(app)
        self.shell_token = shell_token

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.shell_token is None or not request.url.path.startswith("/invoke/"):
            return await call_next(request)

        provided = request.headers.get(SHELL_TOKEN_HEADER)
        if provided is None:
            return JSONResponse(
                status_code=401,
                content={"error": {"type": "auth_required", "message": "Missing X-Shell-Token header"}},
            )

        if not hmac.compare_digest(provided.encode(), self.shell_token.encode()):
            return JSONResponse(
                status_code=401,
                content={"error": {"type": "auth_failed", "message": "Invalid shell token"}},
            )

        return await call_next(request)


class MaxBodySizeMiddleware(BaseHTTPMiddleware):
    """Reject audio uploads whose Content-Length exceeds a configured limit.

    The command's arguments arrive as a JSON array of byte values, so the
    limit applies to the encoded body rather than the raw clip.
    """

    def __init__(self, app, max_bytes: int) -> None:  # noqa: ANN001
        super().__init__(app)
        self.max_bytes = max_bytes
        self._guarded_paths = {"/invoke/transcribe_audio"}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "POST" and request.url.path in self._guarded_paths:
            content_length = request.headers.get("content-length")
            if content_length is not None:
                try:
                    if int(content_length) > self.max_bytes:
                        return JSONResponse(
                            status_code=413,
                            content={
                                "error": {
                                    "type": "request_too_large",
                                    "message": f"Request body exceeds maximum allowed size ({self.max_bytes} bytes)",
                                }
                            },
                        )
                except ValueError:
                    pass  # non-integer content-length; let downstream handle

        return await call_next(request)
