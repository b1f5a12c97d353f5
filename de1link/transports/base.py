from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    async def read(self, max_bytes: int) -> bytes:
        """Return between 1 and ``max_bytes`` bytes, or ``b""`` at end of stream."""
        ...


@runtime_checkable
class ByteSink(Protocol):
    async def write_all(self, data: bytes) -> None:
        """Write every byte of ``data`` or raise :class:`TransportError`."""
        ...
