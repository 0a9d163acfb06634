"""
Unit tests for logging helpers and the request logging middleware.
"""

import json
import logging
from types import SimpleNamespace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from recoverytrack.core.logging_config import (
    JSONFormatter,
    filter_sensitive_data,
    setup_logging,
    truncate_large_data,
)
from recoverytrack.middleware import RequestLoggingMiddleware


class TestFilterSensitiveData:

    def test_masks_nested_keys(self):
        data = {
            "email": "pat@recoverytrack.io",
            "password": "secret123",
            "log": {"reflection_text": "My knee hurts", "energy_level": 4},
            "items": [{"Authorization": "Bearer abc"}],
        }
        filtered = filter_sensitive_data(data)
        assert filtered["email"] == "pat@recoverytrack.io"
        assert filtered["password"] == "***FILTERED***"
        assert filtered["log"]["reflection_text"] == "***FILTERED***"
        assert filtered["log"]["energy_level"] == 4
        assert filtered["items"][0]["Authorization"] == "***FILTERED***"

    def test_token_usage_counters_stay_readable(self):
        data = {
            "access_token": "eyJhbGciOi",
            "prompt_tokens": 120,
            "total_tokens": 300,
            "reflectionText": "Elbow tender",
        }
        filtered = filter_sensitive_data(data)
        assert filtered["access_token"] == "***FILTERED***"
        assert filtered["reflectionText"] == "***FILTERED***"
        assert filtered["prompt_tokens"] == 120
        assert filtered["total_tokens"] == 300

    def test_primitives_untouched(self):
        assert filter_sensitive_data("plain") == "plain"
        assert filter_sensitive_data(3) == 3


class TestTruncateLargeData:

    def test_short_string(self):
        assert truncate_large_data("abc", max_length=10) == "abc"

    def test_long_string(self):
        result = truncate_large_data("x" * 20, max_length=5)
        assert result.startswith("xxxxx...")
        assert "total length: 20" in result


class TestJSONFormatter:

    def test_extra_fields_are_merged_and_filtered(self):
        record = logging.LogRecord("recoverytrack.test", logging.INFO, __file__, 10, "Reflection submitted", None, None)
        record.extra_fields = {"log_id": "l1", "api_key": "k"}
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "Reflection submitted"
        assert data["level"] == "INFO"
        assert data["log_id"] == "l1"
        assert data["api_key"] == "***FILTERED***"


class TestSetupLogging:

    def test_file_handler(self, tmp_path):
        config = SimpleNamespace(
            log_level="debug",
            log_console_enabled=False,
            log_file_enabled=True,
            log_file_path=str(tmp_path / "logs" / "app.log"),
            log_json_format=True,
        )
        root_logger = logging.getLogger()
        previous_handlers, previous_level = root_logger.handlers[:], root_logger.level
        try:
            setup_logging(config)
            assert root_logger.level == logging.DEBUG
            assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
            assert (tmp_path / "logs" / "app.log").exists()
        finally:
            for handler in root_logger.handlers:
                handler.close()
            root_logger.handlers[:] = previous_handlers
            root_logger.setLevel(previous_level)


class TestRequestLoggingMiddleware:

    def _app(self):
        app = FastAPI()
        app.add_middleware(RequestLoggingMiddleware)

        @app.get("/ping")
        async def ping():
            return {"pong": True}

        return app

    def test_generates_request_id(self):
        response = TestClient(self._app()).get("/ping")
        assert response.status_code == 200
        assert response.headers["x-request-id"]

    def test_echoes_request_id(self):
        response = TestClient(self._app()).get("/ping", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"
