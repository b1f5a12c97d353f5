"""Tests for the incremental line reader."""
import pytest

from de1link.core.errors import ParseError
from de1link.parsing.serial import CommandFrame, FromDevice, LineReader, Subscribe


def feed(reader: LineReader, text: str) -> list:
    frames = []
    for char in text:
        frame = reader.handle_char(char)
        if frame is not None:
            frames.append(frame)
    return frames


def test_frame_returned_on_newline():
    reader = LineReader()
    assert feed(reader, "[M]FF") == []
    assert reader.handle_char("\n") == FromDevice(CommandFrame("M", b"\xff"))


def test_multiple_lines_in_one_chunk():
    reader = LineReader()
    assert feed(reader, "<+M>\n[M]FF\n<+N>\n") == [
        Subscribe("M"),
        FromDevice(CommandFrame("M", b"\xff")),
        Subscribe("N"),
    ]


def test_bytes_interface():
    reader = LineReader()
    frames = [reader.handle_byte(b) for b in b"<+M>\n"]
    assert frames[-1] == Subscribe("M")
    assert frames[:-1] == [None] * 4


def test_parse_error_propagates_and_resets_buffer():
    reader = LineReader()
    feed(reader, "[M]FF.")
    with pytest.raises(ParseError):
        reader.handle_char("\n")
    assert reader.buffered == ""
    assert feed(reader, "<+E>\n") == [Subscribe("E")]


def test_empty_line_is_parse_error():
    reader = LineReader()
    with pytest.raises(ParseError):
        reader.handle_char("\n")


def test_overflowed_line_is_dropped_silently():
    reader = LineReader(capacity=8)
    assert feed(reader, "[M]" + "00" * 10) == []
    assert reader.overflow is True
    assert len(reader.buffered) == 8
    assert reader.handle_char("\n") is None
    assert reader.overflow is False
    assert reader.buffered == ""


def test_line_after_overflow_parses():
    reader = LineReader(capacity=8)
    frames = feed(reader, "x" * 20 + "\n" + "[M]FF\n")
    assert frames == [FromDevice(CommandFrame("M", b"\xff"))]


def test_line_exactly_at_capacity_parses():
    reader = LineReader(capacity=5)
    assert feed(reader, "[M]FF\n") == [FromDevice(CommandFrame("M", b"\xff"))]


def test_non_ascii_characters_are_ignored():
    reader = LineReader()
    assert feed(reader, "[M]éF☃F\n") == [FromDevice(CommandFrame("M", b"\xff"))]


def test_non_ascii_bytes_are_ignored():
    reader = LineReader()
    frames = [reader.handle_byte(b) for b in b"<+\xffM>\n"]
    assert frames[-1] == Subscribe("M")


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        LineReader(capacity=0)
