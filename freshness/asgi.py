from __future__ import annotations

import logging
import typing as t

from freshness._fresh import fresh
from freshness._headers import Headers

# Configure logger for this module
logger = logging.getLogger(__name__)

DEFAULT_METHODS = ("GET", "HEAD")
# A 304 response carries no content, so the content framing headers of
# the original response no longer apply.
DEFAULT_STRIPPED_HEADERS = ("content-type", "content-length", "transfer-encoding")


class _ASGIScope(t.TypedDict, total=False):
    """ASGI HTTP scope type."""

    type: str
    asgi: dict[str, str]
    http_version: str
    method: str
    scheme: str
    path: str
    query_string: bytes
    root_path: str
    headers: list[tuple[bytes, bytes]]
    server: tuple[str, int | None] | None
    client: tuple[str, int] | None
    state: dict[str, t.Any]
    extensions: dict[str, t.Any]


_Scope = _ASGIScope
_Receive = t.Callable[[], t.Awaitable[dict[str, t.Any]]]
_Send = t.Callable[[dict[str, t.Any]], t.Awaitable[None]]
_ASGIApp = t.Callable[[_Scope, _Receive, _Send], t.Awaitable[None]]


class ConditionalGetMiddleware:
    """
    ASGI middleware that answers conditional requests with 304 Not Modified.

    The wrapped application always produces its full response. When the
    request is a conditional GET or HEAD and the response validators
    (``ETag``, ``Last-Modified``) show that the client's copy is still
    fresh, the middleware replaces the response with an empty
    ``304 Not Modified`` and discards the body.

    Per-request state lives in closures, so one instance can serve
    concurrent requests.

    Args:
        app: The ASGI application to wrap.
        methods: Request methods eligible for a 304. Defaults to GET and HEAD.
        stripped_headers: Response headers removed from a 304 response.

    Example:
        ```python
        from freshness.asgi import ConditionalGetMiddleware

        app = ConditionalGetMiddleware(app=my_asgi_app)
        ```
    """

    def __init__(
        self,
        app: _ASGIApp,
        methods: t.Iterable[str] = DEFAULT_METHODS,
        stripped_headers: t.Iterable[str] = DEFAULT_STRIPPED_HEADERS,
    ) -> None:
        self.app = app
        self._methods = frozenset(method.upper() for method in methods)
        self._stripped_headers = frozenset(name.lower().encode("latin1") for name in stripped_headers)

        logger.info(
            "Initialized ConditionalGetMiddleware with methods=%s",
            ",".join(sorted(self._methods)),
        )

    async def __call__(self, scope: _Scope, receive: _Receive, send: _Send) -> None:
        """
        Handle an ASGI request.

        Args:
            scope: The ASGI scope dictionary.
            receive: The ASGI receive callable.
            send: The ASGI send callable.
        """
        if scope["type"] != "http":
            logger.debug("Skipping non-HTTP request: type=%s", scope["type"])
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET").upper()
        path = scope.get("path", "/")

        if method not in self._methods:
            logger.debug("Skipping request with ineligible method: method=%s path=%s", method, path)
            await self.app(scope, receive, send)
            return

        request_headers = Headers(scope.get("headers", []))
        not_modified = False

        async def inner_send(message: dict[str, t.Any]) -> None:
            nonlocal not_modified

            if message["type"] == "http.response.start":
                status_code = message["status"]
                response_headers = message.get("headers", [])

                if 200 <= status_code < 300 and fresh(request_headers, Headers(response_headers)):
                    not_modified = True
                    logger.debug(
                        "Replacing response with 304 Not Modified: method=%s path=%s status=%d",
                        method,
                        path,
                        status_code,
                    )
                    await send(
                        {
                            "type": "http.response.start",
                            "status": 304,
                            "headers": [
                                (key, value)
                                for key, value in response_headers
                                if key.lower() not in self._stripped_headers
                            ],
                        }
                    )
                    return

                logger.debug("Passing response through: method=%s path=%s status=%d", method, path, status_code)
                await send(message)
            elif message["type"] == "http.response.body" and not_modified:
                if not message.get("more_body", False):
                    await send({"type": "http.response.body", "body": b"", "more_body": False})
            else:
                await send(message)

        try:
            await self.app(scope, receive, inner_send)
        except Exception as e:
            logger.error(
                "Error calling wrapped application: method=%s path=%s error=%s",
                method,
                path,
                str(e),
                exc_info=True,
            )
            raise
