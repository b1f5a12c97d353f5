from __future__ import annotations

from typing import Optional

from de1link.parsing.serial.frame import Frame, parse_frame

DEFAULT_LINE_CAPACITY = 64


class LineReader:
    """
    Incremental line splitter feeding :func:`parse_frame`.

    Characters are handed over one at a time so the reader works with any
    chunking of the underlying stream. The buffer never grows past
    ``capacity``: once full, the rest of the line is dropped and no frame is
    produced for it. Non-ASCII characters are ignored.
    """

    def __init__(self, capacity: int = DEFAULT_LINE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._buffer: list[str] = []
        self.overflow = False

    @property
    def buffered(self) -> str:
        return "".join(self._buffer)

    def handle_char(self, char: str) -> Optional[Frame]:
        """
        Consume one character.

        Returns the parsed frame when ``char`` ends a line, ``None`` otherwise.

        Raises:
            ParseError: If a complete, non-overflowed line is not a frame.
        """
        if char == "\n":
            line = self.buffered
            overflowed = self.overflow
            self._buffer.clear()
            self.overflow = False
            if overflowed:
                return None
            return parse_frame(line)

        if not char.isascii():
            return None

        if len(self._buffer) >= self.capacity:
            self.overflow = True
        else:
            self._buffer.append(char)
        return None

    def handle_byte(self, byte_value: int) -> Optional[Frame]:
        return self.handle_char(chr(byte_value))


__all__ = ["DEFAULT_LINE_CAPACITY", "LineReader"]
