"""The WSGI application that routes requests through vibey middleware."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from http import HTTPStatus

from werkzeug.wrappers import Request, Response

from .context import Context
from .emotional_logger import VibeLogger, default_vibe_logger
from .middleware import (
    access_log_middleware,
    emoji_status_middleware,
    emotional_logging_middleware,
    recovery_middleware,
    vibey_method_converter_middleware,
)
from .response_writer import ResponseWriter

Handler = Callable[[Context], None]

_ANY_METHODS = ("GET", "POST", "PUT", "PATCH", "HEAD", "OPTIONS", "DELETE", "CONNECT", "TRACE")
_NOT_FOUND_BODY = b"404 page not found"


class NotVibeyEnoughError(RuntimeError):
    """A standard method name was used where a vibey one is expected."""


@dataclass(frozen=True)
class _Route:
    method: str
    path: str
    pattern: re.Pattern[str]
    handlers: tuple[Handler, ...]


def _compile_path(path: str) -> re.Pattern[str]:
    parts = []
    for segment in path.split("/"):
        if segment.startswith(":"):
            parts.append(f"(?P<{segment[1:]}>[^/]+)")
        elif segment.startswith("*"):
            parts.append(f"(?P<{segment[1:]}>.*)")
        else:
            parts.append(re.escape(segment))
    return re.compile("/".join(parts) + r"\Z")


def _parse_addr(addr: str | None) -> tuple[str, int]:
    if not addr:
        return "0.0.0.0", 8080
    host, _, port = addr.rpartition(":")
    return host or "0.0.0.0", int(port)


class VibesEngine:
    """Routes requests to handlers; usable directly as a WSGI application."""

    def __init__(self, logger: VibeLogger | None = None) -> None:
        self.logger = logger if logger is not None else default_vibe_logger()
        self.middlewares: list[Handler] = []
        self._routes: list[_Route] = []

    def use(self, *args: Handler) -> None:
        """Add middleware; it applies to routes registered afterwards."""
        self.middlewares.extend(args)

    def handle(self, method: str, path: str, handler: Handler) -> None:
        if not path.startswith("/"):
            raise ValueError("path must begin with '/'")
        method = method.upper()
        if any(r.method == method and r.path == path for r in self._routes):
            raise ValueError(f"route {method} {path} is already registered")
        self._routes.append(
            _Route(method, path, _compile_path(path), (*self.middlewares, handler))
        )

    def _refuse(self, method: str, vibey: str, reason: str) -> None:
        self.logger.uhoh(
            "Standard HTTP method %s is not vibey enough. Please use %s instead", method, vibey
        )
        raise NotVibeyEnoughError(f"Not vibey enough: Use {vibey} instead of {method} {reason}")

    def get(self, path: str, handler: Handler) -> None:
        self._refuse("GET", "VIBE", "for better energy flow")

    def post(self, path: str, handler: Handler) -> None:
        self._refuse("POST", "MANIFEST", "to properly manifest your creation")

    def put(self, path: str, handler: Handler) -> None:
        self._refuse("PUT", "ALIGN", "to align your energies")

    def delete(self, path: str, handler: Handler) -> None:
        self._refuse("DELETE", "RELEASE", "to properly release what no longer serves you")

    def patch(self, path: str, handler: Handler) -> None:
        self.handle("PATCH", path, handler)

    def head(self, path: str, handler: Handler) -> None:
        self.handle("HEAD", path, handler)

    def options(self, path: str, handler: Handler) -> None:
        self.handle("OPTIONS", path, handler)

    def any(self, path: str, handler: Handler) -> None:
        for method in _ANY_METHODS:
            self.handle(method, path, handler)

    def vibe(self, path: str, handler: Handler) -> None:
        self.handle("GET", path, handler)

    def manifest(self, path: str, handler: Handler) -> None:
        self.handle("POST", path, handler)

    def align(self, path: str, handler: Handler) -> None:
        self.handle("PUT", path, handler)

    def release(self, path: str, handler: Handler) -> None:
        self.handle("DELETE", path, handler)

    def _match(self, method: str, path: str) -> tuple[_Route, dict[str, str]] | None:
        for route in self._routes:
            if route.method != method:
                continue
            found = route.pattern.match(path)
            if found:
                return route, found.groupdict()
        return None

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        request = Request(environ)
        writer = ResponseWriter()
        matched = self._match(request.method, request.path)
        if matched is not None:
            route, params = matched
            ctx = Context(request, writer, params)
            ctx._set_handlers(route.handlers)
            ctx.next()
        else:
            writer.status = HTTPStatus.NOT_FOUND
            ctx = Context(request, writer)
            ctx._set_handlers(self.middlewares)
            ctx.next()
            if not writer.written and writer.status == HTTPStatus.NOT_FOUND:
                writer.headers.set("Content-Type", "text/plain")
                writer.write(_NOT_FOUND_BODY)
        response = Response(
            writer.body, status=int(writer.status), headers=list(writer.headers.items())
        )
        return response(environ, start_response)

    def run(self, addr: str | None = None) -> None:
        """Serve until interrupted; ``addr`` looks like ``":8080"``."""
        from werkzeug.serving import run_simple

        host, port = _parse_addr(addr)
        run_simple(host, port, self, threaded=True)


def new() -> VibesEngine:
    """An engine with the vibey middleware and recovery."""
    engine = VibesEngine()
    engine.use(
        vibey_method_converter_middleware(),
        emoji_status_middleware(),
        emotional_logging_middleware(engine.logger),
        recovery_middleware(),
    )
    engine.logger.fyi("go-vibes engine created with extra vibes ✨")
    return engine


def default() -> VibesEngine:
    """An engine with the vibey middleware, an access log and recovery."""
    engine = VibesEngine()
    engine.use(
        vibey_method_converter_middleware(),
        emoji_status_middleware(),
        emotional_logging_middleware(engine.logger),
        access_log_middleware(),
        recovery_middleware(),
    )
    engine.logger.fyi("go-vibes engine started with extra vibes ✨")
    return engine