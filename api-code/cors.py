from __future__ import annotations

from typing import Any, Dict, Sequence

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send


class PathPrefixCORSMiddleware:
    """Apply Starlette's CORSMiddleware only to requests under ``path_prefix``.

    Starlette treats an OPTIONS request as a preflight only when it carries
    ``Access-Control-Request-Method``; bare OPTIONS requests under the prefix
    are answered here with 204 and the configured allow headers.
    """

    def __init__(
        self,
        app: ASGIApp,
        path_prefix: str = "/api/",
        allow_origins: Sequence[str] = (),
        allow_methods: Sequence[str] = ("GET",),
        **cors_options: Any,
    ):
        self.app = app
        self.path_prefix = path_prefix
        self.allow_origins = list(allow_origins)
        self.allow_methods = list(allow_methods)
        self.cors = CORSMiddleware(
            app,
            allow_origins=self.allow_origins,
            allow_methods=self.allow_methods,
            **cors_options,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not scope["path"].startswith(self.path_prefix):
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if scope["method"] == "OPTIONS" and "access-control-request-method" not in headers:
            response = Response(status_code=204, headers=self._bare_options_headers(headers))
            await response(scope, receive, send)
            return
        await self.cors(scope, receive, send)

    def _bare_options_headers(self, request_headers: Headers) -> Dict[str, str]:
        headers = {"Access-Control-Allow-Methods": ", ".join(self.allow_methods)}
        origin = request_headers.get("origin")
        if "*" in self.allow_origins:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin and origin in self.allow_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return headers
