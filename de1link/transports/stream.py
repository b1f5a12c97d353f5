from __future__ import annotations

import asyncio
import logging

from de1link.core.errors import TransportError

logger = logging.getLogger(__name__)


class StreamSource:
    """Adapt an ``asyncio.StreamReader`` to the byte source interface."""

    def __init__(self, reader: asyncio.StreamReader) -> None:
        self.reader = reader

    async def read(self, max_bytes: int) -> bytes:
        try:
            data = await self.reader.read(max_bytes)
        except (ConnectionError, OSError) as exc:
            raise TransportError(f"read failed: {exc}") from exc
        logger.debug("RX: %s", data)
        return data


class StreamSink:
    """Adapt an ``asyncio.StreamWriter`` to the byte sink interface."""

    def __init__(self, writer: asyncio.StreamWriter) -> None:
        self.writer = writer

    async def write_all(self, data: bytes) -> None:
        if self.writer.is_closing():
            raise TransportError("stream is closed")
        try:
            self.writer.write(data)
            await self.writer.drain()
        except (ConnectionError, OSError) as exc:
            raise TransportError(f"write failed: {exc}") from exc
        logger.debug("TX: %s", data)
