# vibes

A small WSGI web framework with extra vibes.

- Every response goes out as `200 OK`. The real status travels as an emoji
  in the `X-Status-Emoji` header and is added to the body as well: a
  `status_emoji` field in JSON, a badge in HTML, a `Status:` line before
  plain text, a comment before XML.
- Routes are registered with vibey methods: `vibe` (GET), `manifest` (POST),
  `align` (PUT) and `release` (DELETE). Registering with the plain `get`,
  `post`, `put` or `delete` logs a complaint and raises
  `vibes.engine.NotVibeyEnoughError`.
- Requests are logged with emotional levels: FYI, UHOH, CRAP and COOKED.
  A COOKED message ends the process with status 1.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## A first application

```python
from vibes.context import StatusCodes
from vibes.engine import default

app = default()

def ok(c):
    c.json(StatusCodes.OK, {"message": "All good! Check the status emoji!"})

def missing(c):
    c.json(StatusCodes.NOT_FOUND, {"message": "Not found! Check the status emoji!"})

def greet(c):
    c.string(StatusCodes.OK, "Hello, %s", c.param("name"))

app.vibe("/ok", ok)
app.vibe("/not-found", missing)
app.vibe("/hello/:name", greet)

app.run(":8080")
```

`/not-found` answers with HTTP 200, the header `X-Status-Emoji: 🕵️🔍❓` and
the body `{"message":"Not found! Check the status emoji!","status_emoji":"🕵️🔍❓"}`.
JSON objects lose any `status`, `code` and `statusCode` keys on the way out;
JSON that is not an object is wrapped as `{"data":...,"status_emoji":"..."}`.

A `VibesEngine` is a WSGI application, so any WSGI server can serve it in
place of `run`, which uses Werkzeug's development server. Paths may hold
`:name` segments (one segment) and `*name` segments (the rest of the path).
Unmatched paths get `404 page not found`. `patch`, `head`, `options` and
`any` register routes as well; `use(*middleware)` adds middleware that
applies to routes registered after it.

`vibes.engine.new()` builds an engine with the vibes middleware and
recovery only (an exception in a handler becomes a 500, shown as 🔥💻💥);
`vibes.engine.default()` also adds an access log on standard output.

## The handler context

Handlers receive a `vibes.context.Context`:

| Method | Does |
| --- | --- |
| `json(code, obj)` | respond with JSON (dataclasses are encoded as objects) |
| `string(code, format, *args)` | respond with `%`-formatted plain text |
| `html(code, html)` | respond with HTML |
| `data(code, content_type, data)` | respond with raw bytes |
| `file(filepath)` | respond with a file, or a plain 404 if it is missing |
| `header(key, value)` | set a response header; an empty value removes it |
| `get_header(key)` | read a request header |
| `param(key)` | read a path parameter such as `:id` |
| `query(key)`, `default_query(key, default_value)` | read query parameters |
| `form_value(key)` | read a form field |
| `bind()`, `bind_json()` | decode the request body and return it |
| `next()` | run the rest of the handler chain (for middleware) |

`bind` and `bind_json` raise `vibes.context.BindError` when the body is
empty, invalid or of an unsupported content type.

`StatusCodes` names the common codes: `OK`, `CREATED`, `NO_CONTENT`,
`BAD_REQUEST`, `UNAUTHORIZED`, `FORBIDDEN`, `NOT_FOUND`,
`METHOD_NOT_ALLOWED`, `CONFLICT` and `INTERNAL_SERVER_ERROR`.

## Status emojis

```python
from vibes.emoji_status import get_status_emoji

get_status_emoji(201)  # "🆕👶✨"
get_status_emoji(418)  # "❓❓❓"
```

`vibes.response_writer.decorate_body(content_type, emoji, data)` applies the
body decoration on its own; `VibesResponseWriter` wraps a `ResponseWriter`
to do it for every response.

## Vibey methods

```python
from vibes.vibey_methods import VibeyMethod, from_http_method

from_http_method("POST")              # VibeyMethod.MANIFEST
VibeyMethod.RELEASE.to_http_method()  # "DELETE"
```

Other method names pass through unchanged. Each request gets the response
headers `X-Original-Method` and `X-Vibey-Method`.

## Emotional logging

```python
import sys
from vibes.emotional_logger import VibeLogger

log = VibeLogger(sys.stderr, False)
log.fyi("Server is starting up! Just FYI!")
log.uhoh("Memory usage is %d%%", 91)
log.crap("Something bad happened")
```

Lines look like `[15:04:05] UHOH 😬: Memory usage is 91%`.
`default_vibe_logger()` writes to standard output in colour. Handled
requests are logged at FYI below 300, UHOH from 300 and CRAP from 500.

## Commands

`vibes-examples basic|logging|vibey_methods [--addr :8080]` serves one of the
demonstration applications: status emojis on JSON, HTML and text responses;
the emotional log levels (its `/fatal` route ends the process); and a small
user API built from `vibe`, `manifest`, `align` and `release`. The same
applications are available as `build_basic_app()`, `build_logging_app()`
and `build_vibey_methods_app()` in `vibes.examples`.

`vibes-upload-docs` walks a directory of Markdown files, takes each file's
title from its front matter or first `# ` heading, and upserts the documents
as vectors into a vector index in batches, then prints the index statistics.
It needs the API key in the `PINECONE_API_KEY` environment variable; the
index address comes from `PINECONE_HOST`. `--path`, `--namespace` and
`--chunk-size` set the directory (default `../docs`), the namespace
(default `docs-namespace`) and the batch size (default 10).

## What it does not do

`vibes-upload-docs` does not compute real embeddings: `get_embeddings`
gives every document the same placeholder vector of 1536 values of 0.01.
Only the document metadata differs between the uploaded records.