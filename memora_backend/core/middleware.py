import logging
from typing import Any, Iterable, List

from fastapi import Request
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from memora_backend.core.errors import error_response

logger = logging.getLogger(__name__)

BODY_TOO_LARGE_MESSAGE = "Request body too large"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Any) -> Any:
        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"Request from: {client_ip} {request.method} {request.url.path}")
        return await call_next(request)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """
    Reject browser requests whose Origin is not allow-listed, preflights included.

    Sits outside CORSMiddleware, which on its own only withholds CORS headers for
    unknown origins on simple requests and answers bad preflights in plain text.
    Requests without an Origin header (the native app, curl, health probes) are
    let through.
    """

    def __init__(self, app: Any, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = set(allowed_origins)

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        origin = request.headers.get("origin")
        if origin is not None and "*" not in self.allowed_origins and origin not in self.allowed_origins:
            logger.warning(f"Rejected {request.method} from disallowed origin {origin} to {request.url.path}")
            return error_response(403, "Origin not allowed")
        return await call_next(request)


class BodySizeLimitMiddleware:
    """
    Cap request bodies at max_body_bytes.

    A declared Content-Length is checked up front. Bodies without one (chunked
    uploads) are read and counted here before the handler runs, then replayed.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                await error_response(400, "Invalid Content-Length header")(scope, receive, send)
                return
            if declared > self.max_body_bytes:
                logger.warning(f"Rejected {declared} byte body for {scope['path']} (limit {self.max_body_bytes})")
                await error_response(413, BODY_TOO_LARGE_MESSAGE)(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        chunks: List[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            received += len(body)
            if received > self.max_body_bytes:
                logger.warning(f"Rejected streamed body for {scope['path']} after {received} bytes (limit {self.max_body_bytes})")
                await error_response(413, BODY_TOO_LARGE_MESSAGE)(scope, receive, send)
                return
            chunks.append(body)
            more_body = message.get("more_body", False)

        buffered = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": buffered, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)
