"""
Exception hierarchy shared by the protocol, codec and simulator layers.

Callers can tell "not a frame at all" (:class:`ParseError`) apart from
"a frame, but for a command we cannot decode" (:class:`UnknownCommand`).
"""
from __future__ import annotations

from typing import Any


class De1Error(Exception):
    pass


class ParseError(De1Error, ValueError):
    """The line does not match the frame grammar, or has trailing input."""

    def __init__(self, line: str, reason: str = "invalid frame") -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


class UnknownCommand(De1Error):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"unknown command {command!r}")


class UnsupportedMmr(De1Error):
    def __init__(self, addr: int) -> None:
        self.addr = addr
        super().__init__(f"unsupported MMR address 0x{addr:06x}")


class UnexpectedFrame(De1Error):
    def __init__(self, frame: Any) -> None:
        self.frame = frame
        super().__init__(f"unexpected frame {frame!r}")


class CodecError(De1Error, ValueError):
    """A byte-level encode or decode fault."""


class PayloadLengthError(CodecError):
    def __init__(self, command: str, expected: int, actual: int) -> None:
        self.command = command
        self.expected = expected
        self.actual = actual
        super().__init__(f"command {command!r} expects {expected} bytes of data, got {actual}")


class TransportError(De1Error, ConnectionError):
    pass


__all__ = [
    "CodecError",
    "De1Error",
    "ParseError",
    "PayloadLengthError",
    "TransportError",
    "UnexpectedFrame",
    "UnknownCommand",
    "UnsupportedMmr",
]
