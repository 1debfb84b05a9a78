"""Tests for bridge middleware: shell token, request size limits, request ID."""

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from app.security import MaxBodySizeMiddleware, RequestIDMiddleware, ShellTokenMiddleware


# ---------------------------------------------------------------------------
# Helpers: build minimal FastAPI apps with specific middleware for isolation
# ---------------------------------------------------------------------------

def _make_app_with_shell_token(shell_token: str | None) -> FastAPI:
    """Create a minimal app with ShellTokenMiddleware configured."""
    test_app = FastAPI()
    test_app.add_middleware(ShellTokenMiddleware, shell_token=shell_token)

    @test_app.get("/health")
    async def health():
        return {"ok": True}

    @test_app.post("/invoke/read_data_file")
    async def read_data_file():
        return {"result": "{}"}

    @test_app.post("/invoke/transcribe_audio")
    async def transcribe_audio():
        return {"result": "hello"}

    return test_app


def _make_app_with_body_limit(max_bytes: int) -> FastAPI:
    """Create a minimal app with MaxBodySizeMiddleware configured."""
    test_app = FastAPI()
    test_app.add_middleware(MaxBodySizeMiddleware, max_bytes=max_bytes)

    @test_app.post("/invoke/transcribe_audio")
    async def transcribe_audio(request: Request):
        await request.body()
        return {"result": "hello"}

    @test_app.post("/invoke/write_data_file")
    async def write_data_file(request: Request):
        await request.body()
        return {"result": None}

    return test_app


def _make_app_with_request_id() -> FastAPI:
    """Create a minimal app with RequestIDMiddleware configured."""
    test_app = FastAPI()
    test_app.add_middleware(RequestIDMiddleware)

    @test_app.get("/health")
    async def health():
        return {"ok": True}

    return test_app


# ---------------------------------------------------------------------------
# Shell Token Middleware Tests
# ---------------------------------------------------------------------------

class TestShellTokenMiddleware:
    """Tests for shell token enforcement."""

    def test_no_token_configured_allows_all(self):
        client = TestClient(_make_app_with_shell_token(None))

        assert client.get("/health").status_code == 200
        assert client.post("/invoke/read_data_file").status_code == 200
        assert client.post("/invoke/transcribe_audio").status_code == 200

    def test_health_always_public(self):
        client = TestClient(_make_app_with_shell_token("shell-secret"))

        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["ok"] is True

    def test_missing_token_returns_401(self):
        client = TestClient(_make_app_with_shell_token("shell-secret"))

        resp = client.post("/invoke/read_data_file")
        assert resp.status_code == 401
        assert resp.json()["error"]["type"] == "auth_required"

    def test_wrong_token_returns_401(self):
        client = TestClient(_make_app_with_shell_token("shell-secret"))

        resp = client.post("/invoke/read_data_file", headers={"X-Shell-Token": "wrong"})
        assert resp.status_code == 401
        assert resp.json()["error"]["type"] == "auth_failed"

    def test_correct_token_allows_request(self):
        client = TestClient(_make_app_with_shell_token("shell-secret"))

        resp = client.post("/invoke/transcribe_audio", headers={"X-Shell-Token": "shell-secret"})
        assert resp.status_code == 200

    def test_openai_bearer_is_not_a_shell_token(self):
        """An Authorization header does not satisfy the shell token check."""
        client = TestClient(_make_app_with_shell_token("shell-secret"))

        resp = client.post("/invoke/transcribe_audio", headers={"Authorization": "Bearer shell-secret"})
        assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Max Body Size Middleware Tests
# ---------------------------------------------------------------------------

class TestMaxBodySizeMiddleware:
    """Tests for upload size limits on the audio command."""

    def test_small_upload_allowed(self):
        client = TestClient(_make_app_with_body_limit(1000))

        resp = client.post("/invoke/transcribe_audio", content=b"x" * 500)
        assert resp.status_code == 200

    def test_oversized_upload_rejected(self):
        client = TestClient(_make_app_with_body_limit(100))

        resp = client.post("/invoke/transcribe_audio", content=b"x" * 200)
        assert resp.status_code == 413
        assert resp.json()["error"]["type"] == "request_too_large"

    def test_state_writes_not_guarded(self):
        """State writes are not subject to the audio upload limit."""
        client = TestClient(_make_app_with_body_limit(100))

        resp = client.post("/invoke/write_data_file", content=b"x" * 200)
        assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Request ID Middleware Tests
# ---------------------------------------------------------------------------

class TestRequestIDMiddleware:
    """Tests for request ID injection."""

    def test_response_has_request_id_header(self):
        client = TestClient(_make_app_with_request_id())

        resp = client.get("/health")
        assert resp.status_code == 200
        assert len(resp.headers["x-request-id"]) == 12

    def test_request_ids_are_unique(self):
        client = TestClient(_make_app_with_request_id())

        ids = {client.get("/health").headers["x-request-id"] for _ in range(10)}
        assert len(ids) == 10


# ---------------------------------------------------------------------------
# Integration: middleware with the real app
# ---------------------------------------------------------------------------

class TestSecurityIntegration:
    """Test that middleware is wired correctly in the actual app."""

    def test_health_accessible(self):
        from app.main import app

        resp = TestClient(app).get("/health")
        assert resp.status_code == 200
        assert "x-request-id" in resp.headers
