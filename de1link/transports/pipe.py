"""
In-memory byte pipe used to wire the simulator to a test or a host.

The pipe has a fixed capacity; writers wait for room and readers wait for
data, so a slow consumer applies back-pressure instead of growing memory.
"""
from __future__ import annotations

import asyncio

from de1link.core.errors import TransportError

DEFAULT_PIPE_CAPACITY = 256


class BytePipe:
    def __init__(self, capacity: int = DEFAULT_PIPE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._buffer = bytearray()
        self._closed = False
        self._cond = asyncio.Condition()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._buffer)

    async def read(self, max_bytes: int) -> bytes:
        async with self._cond:
            await self._cond.wait_for(lambda: bool(self._buffer) or self._closed)
            chunk = bytes(self._buffer[:max_bytes])
            del self._buffer[:max_bytes]
            self._cond.notify_all()
            return chunk

    async def write_all(self, data: bytes) -> None:
        view = memoryview(bytes(data))
        while view:
            async with self._cond:
                await self._cond.wait_for(lambda: len(self._buffer) < self.capacity or self._closed)
                if self._closed:
                    raise TransportError("write to closed pipe")
                room = self.capacity - len(self._buffer)
                self._buffer += view[:room]
                view = view[room:]
                self._cond.notify_all()

    async def close(self) -> None:
        async with self._cond:
            self._closed = True
            self._cond.notify_all()
