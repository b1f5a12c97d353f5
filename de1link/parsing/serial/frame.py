"""
Line-level framing for the DE1 serial protocol.

Every frame is one ASCII line::

    [C]<hex>   data sent by the machine for command C
    <C><hex>   data sent to the machine for command C
    <+C>       subscribe to notifications for command C
    <-C>       unsubscribe from command C

Hex digits are accepted in either case and always written in uppercase.
A line that matches a frame but has anything left over is rejected.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from de1link.core.errors import CodecError, ParseError
from de1link.parsing.commands import MAX_DATA_LENGTH

if TYPE_CHECKING:
    from de1link.transports.base import ByteSink

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_command_char(char: str) -> bool:
    """Command characters are single printable ASCII characters."""
    return len(char) == 1 and char.isascii() and char.isprintable()


def _check_command(char: str) -> None:
    if not is_command_char(char):
        raise CodecError(f"command must be one printable ASCII character, got {char!r}")


@dataclass(frozen=True)
class CommandFrame:
    command: str
    data: bytes = b""

    def __post_init__(self) -> None:
        _check_command(self.command)
        if len(self.data) > MAX_DATA_LENGTH:
            raise CodecError(f"frame data is {len(self.data)} bytes, limit is {MAX_DATA_LENGTH}")
        object.__setattr__(self, "data", bytes(self.data))

    def __repr__(self) -> str:
        return f"CommandFrame(command={self.command!r}, data={self.data.hex().upper() or '(empty)'})"


class Frame(ABC):
    """Base class of the four line forms."""

    @classmethod
    def parse(cls, line: str) -> "Frame":
        return parse_frame(line)

    @abstractmethod
    def to_line(self) -> str:
        ...

    def encode(self) -> bytes:
        return self.to_line().encode("ascii")

    async def write(self, sink: "ByteSink") -> int:
        """Write the encoded line to ``sink``; returns the number of bytes written."""
        data = self.encode()
        await sink.write_all(data)
        return len(data)


@dataclass(frozen=True)
class FromDevice(Frame):
    command_frame: CommandFrame

    @property
    def command(self) -> str:
        return self.command_frame.command

    @property
    def data(self) -> bytes:
        return self.command_frame.data

    def to_line(self) -> str:
        return f"[{self.command}]{self.data.hex().upper()}\n"


@dataclass(frozen=True)
class ToDevice(Frame):
    command_frame: CommandFrame

    @property
    def command(self) -> str:
        return self.command_frame.command

    @property
    def data(self) -> bytes:
        return self.command_frame.data

    def to_line(self) -> str:
        return f"<{self.command}>{self.data.hex().upper()}\n"


@dataclass(frozen=True)
class Subscribe(Frame):
    command: str

    def __post_init__(self) -> None:
        _check_command(self.command)

    def to_line(self) -> str:
        return f"<+{self.command}>\n"


@dataclass(frozen=True)
class Unsubscribe(Frame):
    command: str

    def __post_init__(self) -> None:
        _check_command(self.command)

    def to_line(self) -> str:
        return f"<-{self.command}>\n"


# Each rule takes the line and returns (frame, unconsumed input), or None.
_Rule = Callable[[str], Optional[Tuple[Frame, str]]]


def _hex_bytes(text: str) -> Tuple[bytes, str]:
    data = bytearray()
    pos = 0
    while len(data) < MAX_DATA_LENGTH and pos + 2 <= len(text):
        pair = text[pos: pos + 2]
        if pair[0] not in HEX_DIGITS or pair[1] not in HEX_DIGITS:
            break
        data.append(int(pair, 16))
        pos += 2
    return bytes(data), text[pos:]


def _bracketed(text: str, opening: str, closing: str) -> Optional[Tuple[str, str]]:
    """Match ``opening``, one command character, then ``closing``."""
    width = len(opening) + 2
    if len(text) < width or not text.startswith(opening) or text[width - 1] != closing:
        return None
    if not is_command_char(text[len(opening)]):
        return None
    return text[len(opening)], text[width:]


def _from_device(text: str) -> Optional[Tuple[Frame, str]]:
    matched = _bracketed(text, "[", "]")
    if matched is None:
        return None
    command, rest = matched
    data, rest = _hex_bytes(rest)
    return FromDevice(CommandFrame(command, data)), rest


def _to_device(text: str) -> Optional[Tuple[Frame, str]]:
    matched = _bracketed(text, "<", ">")
    if matched is None:
        return None
    command, rest = matched
    data, rest = _hex_bytes(rest)
    return ToDevice(CommandFrame(command, data)), rest


def _subscribe(text: str) -> Optional[Tuple[Frame, str]]:
    matched = _bracketed(text, "<+", ">")
    if matched is None:
        return None
    return Subscribe(matched[0]), matched[1]


def _unsubscribe(text: str) -> Optional[Tuple[Frame, str]]:
    matched = _bracketed(text, "<-", ">")
    if matched is None:
        return None
    return Unsubscribe(matched[0]), matched[1]


# Subscribe forms share the ``<`` prefix with host frames, so they go first.
RULES: tuple[_Rule, ...] = (_from_device, _subscribe, _unsubscribe, _to_device)


def parse_frame(line: str) -> Frame:
    """
    Parse one line (without its newline) into a :class:`Frame`.

    Raises:
        ParseError: If no rule matches or input remains after the match.
    """
    for rule in RULES:
        result = rule(line)
        if result is None:
            continue
        frame, rest = result
        if rest:
            raise ParseError(line, f"unexpected trailing input {rest!r}")
        return frame
    raise ParseError(line)


__all__ = [
    "CommandFrame",
    "Frame",
    "FromDevice",
    "HEX_DIGITS",
    "is_command_char",
    "Subscribe",
    "ToDevice",
    "Unsubscribe",
    "parse_frame",
]
