"""Middleware: method renaming, emoji statuses, logging and recovery."""

from __future__ import annotations

import json
import sys
import time
import traceback
from collections.abc import Callable
from datetime import datetime
from http import HTTPStatus
from typing import TextIO

from .context import Context
from .emoji_status import get_status_emoji
from .emotional_logger import VibeLogger
from .response_writer import VibesResponseWriter
from .vibey_methods import from_http_method

Middleware = Callable[[Context], None]

_UNITS = ((1_000_000_000, "s"), (1_000_000, "ms"), (1_000, "µs"))


def format_duration(nanoseconds: int) -> str:
    """Render a duration the way a Go duration prints for sub-minute values."""
    if nanoseconds < 1_000:
        return f"{nanoseconds}ns"
    for unit, suffix in _UNITS:
        if nanoseconds >= unit or suffix == "µs":
            whole, frac = divmod(nanoseconds, unit)
            digits = len(str(unit)) - 1
            frac_text = str(frac).rjust(digits, "0").rstrip("0")
            return f"{whole}.{frac_text}{suffix}" if frac_text else f"{whole}{suffix}"
    return f"{nanoseconds}ns"


def vibey_method_converter_middleware() -> Middleware:
    """Record the original and vibey method names as response headers."""

    def middleware(c: Context) -> None:
        method = c.request.method
        c.header("X-Original-Method", method)
        c.header("X-Vibey-Method", str(from_http_method(method)))
        c.next()

    return middleware


def emoji_status_middleware() -> Middleware:
    """Swap the writer for one that hides the status behind emoji."""

    def middleware(c: Context) -> None:
        c.writer = VibesResponseWriter(c.writer)
        c.next()

    return middleware


def emotional_logging_middleware(logger: VibeLogger) -> Middleware:
    """Log each request at a level chosen by its status."""

    def middleware(c: Context) -> None:
        start = time.perf_counter_ns()
        c.next()
        latency = format_duration(time.perf_counter_ns() - start)
        status = c.writer.status
        args = (c.request.method, c.request.path, status, latency, get_status_emoji(status))
        line = "%s %s [%d] (%s) %s"
        if status >= 500:
            logger.crap(line, *args)
        elif status >= 300:
            logger.uhoh(line, *args)
        else:
            logger.fyi(line, *args)

    return middleware


def recovery_middleware() -> Middleware:
    """Turn an exception in a later handler into a 500 response."""

    def middleware(c: Context) -> None:
        try:
            c.next()
        except Exception:
            sys.stderr.write(traceback.format_exc())
            c.writer.write_header(HTTPStatus.INTERNAL_SERVER_ERROR)
            c._abort()

    return middleware


def access_log_middleware(out: TextIO | None = None) -> Middleware:
    """Write one access line per request to ``out`` (standard output by default)."""

    def middleware(c: Context) -> None:
        start = time.perf_counter_ns()
        c.next()
        latency = format_duration(time.perf_counter_ns() - start)
        stamp = datetime.now().strftime("%Y/%m/%d - %H:%M:%S")
        client = c.request.remote_addr or ""
        stream = out if out is not None else sys.stdout
        stream.write(
            f"[GIN] {stamp} | {c.writer.status:3d} | {latency:>13} | {client:>15} |"
            f" {c.request.method:<7} {json.dumps(c.request.path)}\n"
        )

    return middleware