"""Emoji renderings of HTTP status codes."""

from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType

UNKNOWN_STATUS_EMOJI = "❓❓❓"

STATUS_EMOJI = MappingProxyType(
    {
        HTTPStatus.OK: "✅👌🆗",
        HTTPStatus.CREATED: "🆕👶✨",
        HTTPStatus.ACCEPTED: "👍🙏⏳",
        HTTPStatus.NO_CONTENT: "👻💨🚫",
        HTTPStatus.MOVED_PERMANENTLY: "🏃🔄🏠",
        HTTPStatus.FOUND: "🔍🔎👀",
        HTTPStatus.SEE_OTHER: "👉👀🔄",
        HTTPStatus.BAD_REQUEST: "💔👿😭",
        HTTPStatus.UNAUTHORIZED: "🔒🚫🔑",
        HTTPStatus.FORBIDDEN: "🚫⛔🙅",
        HTTPStatus.NOT_FOUND: "🕵\ufe0f🔍❓",
        HTTPStatus.METHOD_NOT_ALLOWED: "📝🚫🤷",
        HTTPStatus.REQUEST_TIMEOUT: "⏱\ufe0f⌛💤",
        HTTPStatus.CONFLICT: "💥👊⚔\ufe0f",
        HTTPStatus.GONE: "🏃💨👋",
        HTTPStatus.INTERNAL_SERVER_ERROR: "🔥💻💥",
        HTTPStatus.NOT_IMPLEMENTED: "🚧👷🔨",
        HTTPStatus.BAD_GATEWAY: "🚪❌🚧",
        HTTPStatus.SERVICE_UNAVAILABLE: "🏥🔌❌",
        HTTPStatus.GATEWAY_TIMEOUT: "⏱\ufe0f🚪⌛",
    }
)


def get_status_emoji(status_code: int) -> str:
    """Return the emoji for a status code, or question marks if it has none."""
    return STATUS_EMOJI.get(status_code, UNKNOWN_STATUS_EMOJI)