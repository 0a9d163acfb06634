"""
ASGI middleware for logging API requests and responses.

Uses pure ASGI middleware (not BaseHTTPMiddleware) so streaming responses pass through untouched.

Every request gets an X-Request-ID (taken from the request or generated) that is
echoed on the response and attached to the log records. Bodies carry players'
health self-reports, so they are only logged at DEBUG level and always filtered.
"""

import json
import logging
import time
import uuid
from typing import Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = b"x-request-id"


def _sanitize_body(data: bytes) -> str:
    """Filter sensitive keys if the body is JSON, otherwise just truncate."""
    text = data.decode("utf-8", errors="ignore")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return truncate_large_data(text, max_length=2000)
    return truncate_large_data(json.dumps(filter_sensitive_data(payload), ensure_ascii=False), max_length=2000)


def _extract_error_reason(body: bytes) -> Optional[str]:
    """Pull the 'detail' of an error response, if there is one."""
    try:
        payload = json.loads(body.decode("utf-8", errors="ignore"))
    except json.JSONDecodeError:
        return None
    if isinstance(payload, dict) and payload.get("detail"):
        return truncate_large_data(str(payload["detail"]), max_length=500)
    return None


class RequestLoggingMiddleware:
    """Pure ASGI middleware to log all API requests and responses."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Initialize the logging middleware.

        Args:
            app: The ASGI application
            exclude_paths: Paths that are passed through without logging (e.g., ["/health"])
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        headers = dict(scope.get("headers", []))
        request_id = headers.get(REQUEST_ID_HEADER, b"").decode("latin-1") or uuid.uuid4().hex
        client = scope.get("client")
        debug_bodies = logger.isEnabledFor(logging.DEBUG)

        request_chunks = []
        response_chunks = []
        status_code = 0

        async def logging_receive() -> Message:
            message = await receive()
            if debug_bodies and message["type"] == "http.request":
                request_chunks.append(message.get("body", b""))
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
                message["headers"] = list(message.get("headers", [])) + [(REQUEST_ID_HEADER, request_id.encode("latin-1"))]
            elif message["type"] == "http.response.body" and (debug_bodies or status_code >= 400):
                response_chunks.append(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            logger.error(
                f"Request failed: {method} {path} - {str(e)}",
                exc_info=True,
                extra={"extra_fields": {
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                    "error": str(e),
                }}
            )
            raise

        duration_ms = round((time.time() - start_time) * 1000, 2)
        response_body = b"".join(response_chunks)
        extra_fields = {
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "client": client[0] if client else None,
        }

        if status_code >= 400:
            extra_fields["error_reason"] = _extract_error_reason(response_body)

        if debug_bodies:
            request_body = b"".join(request_chunks)
            if request_body:
                logger.debug(f"Request body: {_sanitize_body(request_body)}", extra={"extra_fields": {"request_id": request_id}})
            if response_body:
                logger.debug(f"Response body: {_sanitize_body(response_body)}", extra={"extra_fields": {"request_id": request_id}})

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        logger.log(
            log_level,
            f"Request completed: {method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra={"extra_fields": extra_fields}
        )
