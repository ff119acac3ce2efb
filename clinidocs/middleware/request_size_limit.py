"""Request body size limit middleware.

Rejects requests whose body exceeds max_bytes. A declared Content-Length is
checked up front; otherwise (chunked uploads) bytes are counted as the app
reads them and reading stops with 413 once the limit is passed.
Raw ASGI (no BaseHTTPMiddleware).
"""

import json
from typing import Any, Callable

from fastapi import HTTPException

from clinidocs.middleware.request_id import get_header


class PayloadTooLarge(HTTPException):
    """Raised from receive() once the streamed body passes the limit."""

    def __init__(self, max_bytes: int, received: int) -> None:
        super().__init__(
            status_code=413,
            detail=f"Request body must be at most {max_bytes} bytes",
        )
        self.max_bytes = max_bytes
        self.received = received


async def _send_413(send: Callable, max_bytes: int, actual: int | None = None) -> None:
    """Send 413 Payload Too Large response."""
    details: dict[str, Any] = {"max_bytes": max_bytes}
    if actual is not None:
        details["content_length"] = actual
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": details,
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None and declared.strip().isdigit():
            length = int(declared)
            if length > max_bytes:
                await _send_413(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        received = 0
        response_started = False

        async def counting_receive() -> dict:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    raise PayloadTooLarge(max_bytes, received)
            return message

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await app(scope, counting_receive, tracking_send)
        except PayloadTooLarge as e:
            if response_started:
                raise
            await _send_413(send, max_bytes, e.received)

    return asgi_app
