"""
ASCII line framing for the DE1 serial link.

This sub-package turns individual lines into :class:`Frame` values and back,
and provides :class:`LineReader` to cut a raw character stream into lines.
"""
from de1link.parsing.serial.frame import (
    CommandFrame,
    Frame,
    FromDevice,
    Subscribe,
    ToDevice,
    Unsubscribe,
    parse_frame,
)
from de1link.parsing.serial.reader import DEFAULT_LINE_CAPACITY, LineReader

__all__ = [
    "CommandFrame",
    "DEFAULT_LINE_CAPACITY",
    "Frame",
    "FromDevice",
    "LineReader",
    "Subscribe",
    "ToDevice",
    "Unsubscribe",
    "parse_frame",
]
