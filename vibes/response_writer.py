"""Response writers, including one that hides the status code behind emoji."""

from __future__ import annotations

import json
from http import HTTPStatus

from werkzeug.datastructures import Headers

from .emoji_status import get_status_emoji

XSTATUS_EMOJI = "X-Status-Emoji"

_BADGE = (
    '<div style="position:fixed;bottom:10px;right:10px;background:#f0f0f0;'
    'padding:5px;border-radius:5px;font-size:24px;z-index:9999">{}</div>'
)

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _to_bytes(data: bytes | bytearray | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


class ResponseWriter:
    """Collects a response's status, headers and body.

    The status can change until the first body write; after that it is fixed.
    """

    def __init__(self) -> None:
        self.status: int = HTTPStatus.OK
        self.headers = Headers()
        self._body = bytearray()
        self.written = False

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, code: int) -> None:
        if code > 0 and not self.written:
            self.status = code

    def write(self, data: bytes | bytearray | str) -> int:
        chunk = _to_bytes(data)
        self.written = True
        self._body += chunk
        return len(chunk)


def _reject_constant(name: str) -> float:
    raise ValueError(f"invalid JSON constant {name}")


def _encode_json(obj: dict) -> str:
    text = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for raw, escaped in _JSON_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text


def decorate_body(content_type: str | None, emoji: str, data: bytes | bytearray | str) -> bytes:
    """Add the status emoji to a body in the way its content type suits."""
    body = _to_bytes(data)
    content_type = content_type or ""
    mark = emoji.encode("utf-8")

    if "application/json" in content_type:
        try:
            document = json.loads(body, parse_constant=_reject_constant)
        except ValueError:
            document = None
        if isinstance(document, dict):
            document["status_emoji"] = emoji
            for key in ("status", "code", "statusCode"):
                document.pop(key, None)
            return _encode_json(document).encode("utf-8")
        return b'{"data":' + body + b',"status_emoji":"' + mark + b'"}'

    if "text/html" in content_type:
        badge = _BADGE.format(emoji).encode("utf-8")
        return b"<!-- Status Emoji: " + mark + b" -->" + body + badge

    if "text/plain" in content_type:
        return b"Status: " + mark + b"\n" + body

    if "application/xml" in content_type or "text/xml" in content_type:
        return b"<!-- Status Emoji: " + mark + b" -->" + body

    return body


class VibesResponseWriter:
    """Wraps a writer: always sends 200 and carries the real status as emoji."""

    def __init__(self, inner: ResponseWriter) -> None:
        self.inner = inner
        self.status_code: int = HTTPStatus.OK

    @property
    def headers(self) -> Headers:
        return self.inner.headers

    @property
    def status(self) -> int:
        """The status actually sent, which the wrapper keeps at 200."""
        return self.inner.status

    @property
    def body(self) -> bytes:
        return self.inner.body

    @property
    def written(self) -> bool:
        return self.inner.written

    def write_header(self, code: int) -> None:
        self.status_code = code
        self.headers.set(XSTATUS_EMOJI, get_status_emoji(code))
        self.headers.set("X-Original-Status-Code", "hidden")
        self.inner.write_header(HTTPStatus.OK)

    def write(self, data: bytes | bytearray | str) -> int:
        content_type = self.headers.get("Content-Type", "")
        emoji = get_status_emoji(self.status_code)
        return self.inner.write(decorate_body(content_type, emoji, data))