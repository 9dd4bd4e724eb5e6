"""
Basic application tests.

Validates that the FastAPI app starts correctly, the health endpoint
responds, security headers are applied and rate limiting answers 429.
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from shopdesk.cli import build_parser
from shopdesk.main import app
from shopdesk.shared.logging import REDACTED, SecretRedactingFilter, configure_logging
from shopdesk.shared.security.headers import SECURE_HEADERS
from shopdesk.shared.security.rate_limiting import rate_limit_exceeded_handler

client = TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self) -> None:
        """Health endpoint must return HTTP 200 with status ok."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_health_response_body(self) -> None:
        """Health endpoint must return status and version fields."""
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert "version" in body


class TestSecurityHeaders:
    """Tests for security headers on responses."""

    def test_security_headers_present(self) -> None:
        """All security headers must be present on every response."""
        response = client.get("/api/v1/health")
        for name, value in SECURE_HEADERS.items():
            assert response.headers[name] == value

    def test_headers_on_error_responses(self) -> None:
        """Security headers are also set on error responses."""
        response = client.get("/shops")
        assert response.status_code == 401
        assert response.headers["X-Frame-Options"] == "DENY"


class TestRateLimiting:
    """Tests for rate limiting behavior."""

    def test_rate_limit_returns_429(self) -> None:
        """Exceeding the limit returns HTTP 429 with a JSON error body."""
        limited = FastAPI()
        limited.state.limiter = Limiter(
            key_func=get_remote_address, default_limits=["2/minute"]
        )
        limited.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
        limited.add_middleware(SlowAPIMiddleware)

        @limited.get("/ping")
        def ping() -> dict[str, str]:
            return {"pong": "ok"}

        limited_client = TestClient(limited)
        statuses = [limited_client.get("/ping").status_code for _ in range(3)]
        assert statuses == [200, 200, 429]
        assert limited_client.get("/ping").json()["error"].startswith("Rate limit exceeded")


class TestCli:
    """Tests for command line parsing."""

    def test_serve_defaults(self) -> None:
        """serve binds to localhost:8000 without reload by default."""
        args = build_parser().parse_args(["serve"])
        assert (args.host, args.port, args.reload) == ("127.0.0.1", 8000, False)

    def test_command_required(self) -> None:
        """Running without a subcommand exits with usage."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestLogging:
    """Tests for logging configuration."""

    @staticmethod
    def _record(msg: str, *args: object) -> logging.LogRecord:
        return logging.LogRecord("shopdesk", logging.INFO, __file__, 1, msg, args, None)

    def test_api_keys_are_masked(self) -> None:
        """A configured key is replaced in the rendered message."""
        record = self._record("Rejected key %s from %s", "admin-key", "10.0.0.1")
        assert SecretRedactingFilter(["admin-key"]).filter(record) is True
        assert record.getMessage() == f"Rejected key {REDACTED} from 10.0.0.1"

    def test_other_messages_untouched(self) -> None:
        """Messages without a secret keep their lazy arguments."""
        record = self._record("Listed %d shops", 3)
        SecretRedactingFilter(["admin-key"]).filter(record)
        assert record.args == (3,)
        assert record.getMessage() == "Listed 3 shops"

    def test_sql_logging_follows_flag(self) -> None:
        """SQL statements are only logged when asked for."""
        configure_logging("INFO", log_sql=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
        configure_logging("INFO")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
