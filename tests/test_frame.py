"""Tests for the line grammar: parsing, rejection and serialization."""
import asyncio
from pathlib import Path

import pytest

from de1link.core.errors import CodecError, ParseError
from de1link.parsing.commands import MAX_DATA_LENGTH
from de1link.parsing.serial import (
    CommandFrame,
    Frame,
    FromDevice,
    Subscribe,
    ToDevice,
    Unsubscribe,
    parse_frame,
)
from de1link.transports.pipe import BytePipe

SESSION_LOG = Path(__file__).parent / "data" / "session-log.txt"

SAMPLE_DATA = bytes.fromhex("598E00000000587659591745F55A000000009F")


def test_from_device_frame_parses():
    frame = parse_frame("[M]598E00000000587659591745F55A000000009F")
    assert frame == FromDevice(CommandFrame("M", SAMPLE_DATA))
    assert frame.command == "M"
    assert frame.data == SAMPLE_DATA


def test_to_device_frame_parses():
    frame = parse_frame("<E>598E00000000587659591745F55A000000009F")
    assert frame == ToDevice(CommandFrame("E", SAMPLE_DATA))


def test_subscribe_frame_parses():
    assert parse_frame("<+E>") == Subscribe("E")


def test_unsubscribe_frame_parses():
    assert parse_frame("<-E>") == Unsubscribe("E")


def test_single_byte_frame():
    assert parse_frame("[M]FF") == FromDevice(CommandFrame("M", b"\xff"))


def test_empty_payload():
    assert parse_frame("<A>") == ToDevice(CommandFrame("A", b""))


def test_lowercase_hex_accepted():
    assert parse_frame("[Q]0d0f0500") == FromDevice(CommandFrame("Q", bytes([0x0D, 0x0F, 0x05, 0x00])))


def test_frame_parse_classmethod():
    assert Frame.parse("<+M>") == Subscribe("M")


@pytest.mark.parametrize(
    "line",
    [
        "[M]FF.",
        "[M>FF",
        "[M.FF",
        "<M]FF",
        "[M]F",
        "[M]FFG0",
        "<+E>FF",
        "<-E",
        "[M",
        "",
        "M]FF",
        " [M]FF",
        "[M]FF\r",
        "[é]FF",
        "<é>00",
        "<+☃>",
        "<-é>",
        "[\t]FF",
    ],
)
def test_invalid_lines_fail(line):
    with pytest.raises(ParseError):
        parse_frame(line)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_frame("garbage")


def test_data_longer_than_max_is_trailing_input():
    line = "[E]" + "00" * (MAX_DATA_LENGTH + 1)
    with pytest.raises(ParseError):
        parse_frame(line)


def test_data_at_max_length_parses():
    line = "[E]" + "AB" * MAX_DATA_LENGTH
    frame = parse_frame(line)
    assert len(frame.data) == MAX_DATA_LENGTH


def test_serialize_uses_uppercase_and_newline():
    frame = FromDevice(CommandFrame("Q", bytes([0x0D, 0x0F, 0x05, 0x00])))
    assert frame.to_line() == "[Q]0D0F0500\n"
    assert frame.encode() == b"[Q]0D0F0500\n"
    assert ToDevice(CommandFrame("B", b"\x02")).to_line() == "<B>02\n"
    assert Subscribe("M").to_line() == "<+M>\n"
    assert Unsubscribe("M").to_line() == "<-M>\n"


def test_command_frame_rejects_oversize_data():
    with pytest.raises(CodecError):
        CommandFrame("E", bytes(MAX_DATA_LENGTH + 1))


def test_command_frame_requires_single_character():
    with pytest.raises(CodecError):
        CommandFrame("EE", b"")


@pytest.mark.parametrize("command", ["é", "☃", "\n", ""])
def test_command_must_be_printable_ascii(command):
    with pytest.raises(CodecError):
        CommandFrame(command, b"")
    with pytest.raises(CodecError):
        Subscribe(command)
    with pytest.raises(CodecError):
        Unsubscribe(command)


def test_non_ascii_command_never_reaches_the_encoder():
    for line in ("[é]FF", "<+☃>"):
        with pytest.raises(ParseError):
            Frame.parse(line).encode()


def test_frame_base_is_abstract():
    with pytest.raises(TypeError):
        Frame()


def test_frame_write_to_sink():
    async def scenario():
        pipe = BytePipe()
        written = await ToDevice(CommandFrame("B", b"\x02")).write(pipe)
        return written, await pipe.read(64)

    written, data = asyncio.run(scenario())
    assert written == 6
    assert data == b"<B>02\n"


def test_decoding_and_reencoding_logs_is_noop():
    for line in SESSION_LOG.read_text().splitlines():
        frame = parse_frame(line)
        assert frame.to_line().rstrip("\n") == line.upper(), line


def test_serialize_then_parse_is_identity():
    frames = [
        FromDevice(CommandFrame("M", SAMPLE_DATA)),
        ToDevice(CommandFrame("E", bytes(20))),
        ToDevice(CommandFrame("A", b"")),
        Subscribe("N"),
        Unsubscribe("Q"),
    ]
    for frame in frames:
        assert parse_frame(frame.to_line().rstrip("\n")) == frame
