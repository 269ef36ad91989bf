"""
Body Size Middleware
Rejects requests whose body exceeds the configured limit.

The declared Content-Length is checked first; the body itself is then read
and counted, so chunked requests without Content-Length are limited too. The
buffered messages are replayed to the application unchanged.
"""

from starlette.responses import JSONResponse


class BodySizeLimitMiddleware:
    def __init__(self, app, max_body_bytes: int = 1048576):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def _reject(self, scope, receive, send):
        response = JSONResponse(content={"error": "payload_too_large"}, status_code=413)
        await response(scope, receive, send)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        content_length = headers.get(b"content-length")

        if content_length is not None:
            try:
                too_large = int(content_length) > self.max_body_bytes
            except ValueError:
                too_large = False
            if too_large:
                await self._reject(scope, receive, send)
                return

        messages = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return
            more_body = message.get("more_body", False)

        async def replay():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)
