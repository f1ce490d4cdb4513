"""X-Request-ID 中间件：为每个 HTTP 请求绑定请求 ID，并在响应头中回传。

请求头已带 ``X-Request-ID`` 时沿用，否则生成 UUID4；日志通过
``LogContextFilter`` 读取该值。
"""

from __future__ import annotations

import uuid

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.packages.catalog.core.logger import set_request_id

REQUEST_ID_HEADER = "x-request-id"


class RequestIdMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = dict(scope.get("headers") or [])
        raw = incoming.get(REQUEST_ID_HEADER.encode("latin-1"))
        request_id = raw.decode("latin-1") if raw else str(uuid.uuid4())
        set_request_id(request_id)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        await self.app(scope, receive, send_with_request_id)
