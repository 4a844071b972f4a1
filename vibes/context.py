"""Per-request context handed to handlers and middleware."""

from __future__ import annotations

import dataclasses
import json
import mimetypes
from collections.abc import Callable, Sequence
from http import HTTPStatus
from pathlib import Path
from typing import Any

from werkzeug.wrappers import Request

from .response_writer import ResponseWriter, VibesResponseWriter

Writer = ResponseWriter | VibesResponseWriter

_JSON_CONTENT_TYPE = "application/json; charset=utf-8"
_PLAIN_CONTENT_TYPE = "text/plain; charset=utf-8"
_NOT_FOUND_BODY = b"404 page not found"

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class StatusCodes:
    """Common HTTP status codes."""

    OK = HTTPStatus.OK
    CREATED = HTTPStatus.CREATED
    NO_CONTENT = HTTPStatus.NO_CONTENT
    BAD_REQUEST = HTTPStatus.BAD_REQUEST
    UNAUTHORIZED = HTTPStatus.UNAUTHORIZED
    FORBIDDEN = HTTPStatus.FORBIDDEN
    NOT_FOUND = HTTPStatus.NOT_FOUND
    METHOD_NOT_ALLOWED = HTTPStatus.METHOD_NOT_ALLOWED
    CONFLICT = HTTPStatus.CONFLICT
    INTERNAL_SERVER_ERROR = HTTPStatus.INTERNAL_SERVER_ERROR


class BindError(ValueError):
    """The request body could not be bound."""


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serialisable")


def encode_json(obj: Any) -> bytes:
    """Encode compactly with sorted keys and HTML-safe escapes."""
    text = json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=_json_default
    )
    for raw, escaped in _JSON_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text.encode("utf-8")


def _body_allowed(code: int) -> bool:
    return not (100 <= code <= 199 or code in (204, 304))


Handler = Callable[["Context"], None]


class Context:
    """A request, the writer for its response, route parameters and the handler chain."""

    def __init__(
        self,
        request: Request,
        writer: Writer,
        params: dict[str, str] | None = None,
    ) -> None:
        self.request = request
        self.writer: Writer = writer
        self.params: dict[str, str] = dict(params or {})
        self._handlers: Sequence[Handler] = ()
        self._index = -1

    def _set_handlers(self, handlers: Sequence[Handler]) -> None:
        self._handlers = tuple(handlers)
        self._index = -1

    def _abort(self) -> None:
        self._index = len(self._handlers)

    def next(self) -> None:
        """Run the remaining handlers in the chain."""
        self._index += 1
        while self._index < len(self._handlers):
            self._handlers[self._index](self)
            self._index += 1

    def _render(self, code: int, content_type: str, body: bytes) -> None:
        self.writer.write_header(code)
        if "Content-Type" not in self.writer.headers:
            self.writer.headers.set("Content-Type", content_type)
        if _body_allowed(code):
            self.writer.write(body)

    def json(self, code: int, obj: Any) -> None:
        self._render(code, _JSON_CONTENT_TYPE, encode_json(obj))

    def string(self, code: int, format: str, *args: object) -> None:
        text = format % args if args else format
        self._render(code, _PLAIN_CONTENT_TYPE, text.encode("utf-8"))

    def html(self, code: int, html: str) -> None:
        self.header("Content-Type", "text/html")
        self.string(code, html)

    def data(self, code: int, content_type: str, data: bytes) -> None:
        self._render(code, content_type, bytes(data))

    def file(self, filepath: str | Path) -> None:
        """Send a file's contents, or a plain 404 if it does not exist."""
        path = Path(filepath)
        if not path.is_file():
            self._render(HTTPStatus.NOT_FOUND, _PLAIN_CONTENT_TYPE, _NOT_FOUND_BODY)
            return
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        if content_type.startswith("text/"):
            content_type += "; charset=utf-8"
        self._render(HTTPStatus.OK, content_type, path.read_bytes())

    def header(self, key: str, value: str) -> None:
        """Set a response header; an empty value removes it."""
        if value == "":
            self.writer.headers.remove(key)
        else:
            self.writer.headers.set(key, value)

    def get_header(self, key: str) -> str:
        return self.request.headers.get(key, "")

    def param(self, key: str) -> str:
        return self.params.get(key, "")

    def query(self, key: str) -> str:
        return self.request.args.get(key, "")

    def default_query(self, key: str, default_value: str) -> str:
        return self.request.args.get(key, default_value)

    def form_value(self, key: str) -> str:
        return self.request.form.get(key, "")

    def bind(self) -> Any:
        """Parse the body by content type; GET requests bind the query."""
        if self.request.method == "GET":
            return self.request.args.to_dict()
        mimetype = self.request.mimetype
        if mimetype == "application/json":
            return self.bind_json()
        if mimetype in ("application/x-www-form-urlencoded", "multipart/form-data"):
            return self.request.form.to_dict()
        if mimetype in ("", "text/plain"):
            return {**self.request.args.to_dict(), **self.request.form.to_dict()}
        raise BindError(f"unsupported content type {mimetype!r}")

    def bind_json(self) -> Any:
        """Parse the body as JSON, raising BindError if it is empty or invalid."""
        raw = self.request.get_data()
        if not raw:
            raise BindError("invalid request")
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise BindError(str(exc)) from exc