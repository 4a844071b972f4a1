"""Example applications built on the engine, and a command to run them."""

from __future__ import annotations

import argparse
import os
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .context import BindError, Context, StatusCodes
from .engine import VibesEngine, default

_HTML_OK = """
    <html>
        <head>
            <title>Vibes Framework Demo</title>
            <style>
                body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
                h1 { color: #333; }
                .container { background: #f9f9f9; border-radius: 10px; padding: 20px; }
            </style>
        </head>
        <body>
            <div class="container">
                <h1>Vibes Framework HTML Demo</h1>
                <p>This is a successful response! Look for the emoji status badge in the corner.</p>
                <p>The actual HTTP status code is always 200, but the true status is communicated via emojis.</p>
                <p><a href="/html-error">See an error page</a></p>
            </div>
        </body>
    </html>
"""

_HTML_ERROR = """
    <html>
        <head>
            <title>Vibes Framework Demo - Error</title>
            <style>
                body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
                h1 { color: #d9534f; }
                .container { background: #f9f9f9; border-radius: 10px; padding: 20px; }
            </style>
        </head>
        <body>
            <div class="container">
                <h1>Not Found Error!</h1>
                <p>This page demonstrates a 404 Not Found error response.</p>
                <p>Look for the emoji status badge in the corner!</p>
                <p><a href="/html-ok">Back to success page</a></p>
            </div>
        </body>
    </html>
"""


@dataclass
class User:
    """A user as the vibey-methods example sends and receives it."""

    id: str = ""
    name: str = ""
    email: str = ""


def _user_from_payload(payload: Any) -> User:
    """Build a User from decoded JSON; unknown keys are ignored."""
    if not isinstance(payload, Mapping):
        raise BindError("expected a JSON object")
    fields = {str(key).lower(): value for key, value in payload.items()}
    values: dict[str, str] = {}
    for name in ("id", "name", "email"):
        value = fields.get(name)
        if value is None:
            continue
        if not isinstance(value, str):
            raise BindError(f"field {name!r} must be a string")
        values[name] = value
    return User(**values)


def build_basic_app() -> VibesEngine:
    """Routes that show how each status is rendered as emoji."""
    engine = default()

    def json_route(code: int, message: str) -> Callable[[Context], None]:
        def handler(c: Context) -> None:
            c.json(code, {"message": message})

        return handler

    engine.vibe("/ok", json_route(StatusCodes.OK, "All good! Check the status emoji!"))
    engine.vibe(
        "/created", json_route(StatusCodes.CREATED, "Resource created! Check the status emoji!")
    )
    engine.vibe(
        "/bad-request", json_route(StatusCodes.BAD_REQUEST, "Bad request! Check the status emoji!")
    )
    engine.vibe(
        "/not-found", json_route(StatusCodes.NOT_FOUND, "Not found! Check the status emoji!")
    )
    engine.vibe(
        "/server-error",
        json_route(StatusCodes.INTERNAL_SERVER_ERROR, "Server error! Check the status emoji!"),
    )

    def html_ok(c: Context) -> None:
        c.html(StatusCodes.OK, _HTML_OK)

    def html_error(c: Context) -> None:
        c.html(StatusCodes.NOT_FOUND, _HTML_ERROR)

    def text(c: Context) -> None:
        c.string(
            StatusCodes.OK,
            "This is a plain text response. The emoji status should be prepended.",
        )

    engine.vibe("/html-ok", html_ok)
    engine.vibe("/html-error", html_error)
    engine.vibe("/text", text)
    return engine


def build_logging_app() -> VibesEngine:
    """Routes that log at each emotional level; ``/fatal`` shuts the process down."""
    engine = default()
    logger = engine.logger

    logger.fyi("Server is starting up! Just FYI!")
    logger.uhoh("Memory usage seems a bit high, but we'll manage!")

    def success(c: Context) -> None:
        logger.fyi("Processing success request")
        c.json(StatusCodes.OK, {"message": "This is a success!"})

    def not_found(c: Context) -> None:
        logger.uhoh("Someone tried to access something that doesn't exist!")
        c.json(StatusCodes.NOT_FOUND, {"message": "Can't find what you're looking for!"})

    def error(c: Context) -> None:
        logger.crap("Something bad happened in the server!")
        c.json(StatusCodes.INTERNAL_SERVER_ERROR, {"message": "Server is having issues!"})

    def shut_down() -> None:
        try:
            logger.uhoh("About to demonstrate a COOKED log (fatal)...")
            logger.cooked("The server is completely COOKED! Shutting down!")
        except SystemExit as exc:
            os._exit(exc.code if isinstance(exc.code, int) else 1)

    def fatal(c: Context) -> None:
        c.json(
            StatusCodes.INTERNAL_SERVER_ERROR,
            {"message": "This would normally crash the server!"},
        )
        threading.Thread(target=shut_down, daemon=True).start()

    engine.vibe("/success", success)
    engine.vibe("/not-found", not_found)
    engine.vibe("/error", error)
    engine.vibe("/fatal", fatal)
    return engine


def build_vibey_methods_app() -> VibesEngine:
    """A small user API using VIBE, MANIFEST, ALIGN and RELEASE."""
    engine = default()

    def list_users(c: Context) -> None:
        users = [
            User(id="1", name="Cosmic Carl", email="carl@example.com"),
            User(id="2", name="Energetic Emma", email="emma@example.com"),
        ]
        c.json(StatusCodes.OK, {"users": users, "vibe": "immaculate"})

    def create_user(c: Context) -> None:
        try:
            user = _user_from_payload(c.bind_json())
        except BindError:
            c.json(StatusCodes.BAD_REQUEST, {"message": "Your manifestation energy is misaligned!"})
            return
        user.id = "3"
        c.json(
            StatusCodes.CREATED,
            {"message": "You have successfully manifested a new user!", "user": user},
        )

    def update_user(c: Context) -> None:
        user_id = c.param("id")
        try:
            user = _user_from_payload(c.bind_json())
        except BindError:
            c.json(StatusCodes.BAD_REQUEST, {"message": "Your alignment energy is disrupted!"})
            return
        user.id = user_id
        c.json(StatusCodes.OK, {"message": "User energy has been realigned!", "user": user})

    def delete_user(c: Context) -> None:
        c.json(
            StatusCodes.NO_CONTENT,
            {
                "message": "User has been released back to the universe",
                "released_id": c.param("id"),
            },
        )

    engine.vibe("/users", list_users)
    engine.manifest("/users", create_user)
    engine.align("/users/:id", update_user)
    engine.release("/users/:id", delete_user)
    return engine


_BUILDERS: dict[str, Callable[[], VibesEngine]] = {
    "basic": build_basic_app,
    "logging": build_logging_app,
    "vibey_methods": build_vibey_methods_app,
}


def main(argv: list[str] | None = None) -> int:
    """Run one of the example applications."""
    parser = argparse.ArgumentParser(
        prog="vibes-examples", description="Serve one of the example applications."
    )
    parser.add_argument("example", choices=sorted(_BUILDERS))
    parser.add_argument("--addr", default=":8080", help="address to listen on, e.g. :8080")
    args = parser.parse_args(argv)

    engine = _BUILDERS[args.example]()
    if args.example != "logging":
        engine.run(args.addr)
        return 0

    engine.logger.fyi("Server is ready on %s", args.addr)
    try:
        engine.run(args.addr)
    except OSError as exc:
        engine.logger.crap("Failed to start server: %s", exc)
        return 1
    return 0