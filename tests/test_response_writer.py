import json

import pytest

from vibes.emoji_status import get_status_emoji
from vibes.response_writer import (
    XSTATUS_EMOJI,
    ResponseWriter,
    VibesResponseWriter,
    decorate_body,
)


def test_plain_writer_records_status_and_body():
    writer = ResponseWriter()
    writer.write_header(201)
    assert writer.write(b"abc") == 3
    assert writer.status == 201
    assert writer.body == b"abc"


def test_plain_writer_status_fixed_after_write():
    writer = ResponseWriter()
    writer.write(b"x")
    writer.write_header(500)
    assert writer.status == 200
    assert writer.written is True


def test_vibes_writer_hides_status():
    inner = ResponseWriter()
    writer = VibesResponseWriter(inner)
    writer.write_header(404)
    assert writer.status_code == 404
    assert inner.status == 200
    assert writer.status == 200
    assert inner.headers.get(XSTATUS_EMOJI) == get_status_emoji(404)
    assert inner.headers.get("X-Original-Status-Code") == "hidden"


def test_vibes_writer_rewrites_json():
    writer = VibesResponseWriter(ResponseWriter())
    writer.headers.set("Content-Type", "application/json; charset=utf-8")
    writer.write_header(400)
    written = writer.write(b'{"message":"nope","status":400,"code":1,"statusCode":2}')
    document = json.loads(writer.body)
    assert written == len(writer.body)
    assert document == {"message": "nope", "status_emoji": get_status_emoji(400)}


def test_json_output_has_sorted_keys():
    body = decorate_body("application/json", "E", b'{"z":1,"a":{"y":2,"b":3}}')
    document = json.loads(body)
    assert list(document) == sorted(document)
    assert list(document["a"]) == ["b", "y"]


def test_json_escapes_html_characters():
    body = decorate_body("application/json", "E", b'{"a":"<b>"}')
    assert b"\\u003cb\\u003e" in body
    assert json.loads(body)["a"] == "<b>"


@pytest.mark.parametrize("payload", [b"[1,2]", b'"text"', b"not json", b"null"])
def test_json_fallback_wraps_data(payload):
    body = decorate_body("application/json", "E", payload)
    assert body == b'{"data":' + payload + b',"status_emoji":"E"}'


def test_plain_text_is_prefixed():
    assert decorate_body("text/plain; charset=utf-8", "E", b"hello") == b"Status: E\nhello"


@pytest.mark.parametrize("content_type", ["application/xml", "text/xml"])
def test_xml_gets_comment(content_type):
    assert decorate_body(content_type, "E", b"<a/>") == b"<!-- Status Emoji: E --><a/>"


def test_html_gets_comment_and_badge():
    body = decorate_body("text/html", "E", b"<p>hi</p>").decode("utf-8")
    assert body.startswith("<!-- Status Emoji: E --><p>hi</p>")
    assert body.endswith("z-index:9999\">E</div>")


@pytest.mark.parametrize("content_type", ["", None, "application/octet-stream", "image/png"])
def test_other_types_unchanged(content_type):
    assert decorate_body(content_type, "E", b"\x00\x01raw") == b"\x00\x01raw"


def test_default_status_is_ok_for_plain_text():
    writer = VibesResponseWriter(ResponseWriter())
    writer.headers.set("Content-Type", "text/plain")
    writer.write("fine")
    assert writer.body == ("Status: " + get_status_emoji(200) + "\nfine").encode("utf-8")