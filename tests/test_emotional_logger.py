import io
import re

import pytest

from vibes.emotional_logger import (
    RESET_COLOR,
    EmotionalLevel,
    VibeLogger,
    default_vibe_logger,
)

LINE = re.compile(r"^\[\d{2}:\d{2}:\d{2}\] (?P<prefix>.+?): (?P<message>.*)\n$")


def _plain_logger():
    buffer = io.StringIO()
    return VibeLogger(buffer, False), buffer


@pytest.mark.parametrize(
    "method, label",
    [("fyi", "FYI 💁"), ("uhoh", "UHOH 😬"), ("crap", "CRAP 💩")],
)
def test_plain_lines(method, label):
    logger, buffer = _plain_logger()
    getattr(logger, method)("hello %s %d", "world", 7)
    match = LINE.match(buffer.getvalue())
    assert match is not None
    assert match["prefix"] == label
    assert match["message"] == "hello world 7"


def test_message_without_args_is_not_formatted():
    logger, buffer = _plain_logger()
    logger.fyi("100% vibes")
    match = LINE.match(buffer.getvalue())
    assert match is not None
    assert match["message"] == "100% vibes"


def test_colorful_prefix_wraps_label():
    buffer = io.StringIO()
    VibeLogger(buffer, True).uhoh("careful")
    output = buffer.getvalue()
    assert "\033[33m" + "UHOH 😬" + RESET_COLOR + ": careful\n" in output


def test_cooked_writes_then_exits():
    logger, buffer = _plain_logger()
    with pytest.raises(SystemExit) as info:
        logger.cooked("all %s", "gone")
    assert info.value.code == 1
    match = LINE.match(buffer.getvalue())
    assert match is not None
    assert match["prefix"] == "COOKED 🔥"
    assert match["message"] == "all gone"


def test_one_line_per_call():
    logger, buffer = _plain_logger()
    logger.fyi("one")
    logger.crap("two")
    lines = buffer.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("FYI 💁: one")
    assert lines[1].endswith("CRAP 💩: two")


def test_level_order_and_colors():
    assert sorted(EmotionalLevel) == [
        EmotionalLevel.FYI,
        EmotionalLevel.UHOH,
        EmotionalLevel.CRAP,
        EmotionalLevel.COOKED,
    ]
    buffer = io.StringIO()
    logger = VibeLogger(buffer, True)
    logger.fyi("cyan")
    logger.crap("red")
    lines = buffer.getvalue().splitlines()
    assert EmotionalLevel.FYI.color == "\033[36m"
    assert EmotionalLevel.COOKED.color == "\033[35m"
    assert EmotionalLevel.FYI.color + "FYI 💁" + RESET_COLOR + ": cyan" in lines[0]
    assert EmotionalLevel.CRAP.color + "CRAP 💩" + RESET_COLOR + ": red" in lines[1]


def test_default_logger_writes_colourful_to_stdout(capsys):
    logger = default_vibe_logger()
    logger.fyi("ready")
    captured = capsys.readouterr().out
    assert "\033[36mFYI 💁" + RESET_COLOR + ": ready" in captured
    assert logger.colorful is True