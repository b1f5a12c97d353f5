"""
Byte-stream collaborators for the protocol layer.

The protocol code only needs something to ``read`` bytes from and something
to ``write_all`` bytes to; this package defines those interfaces and a few
implementations (an in-memory pipe and asyncio stream adapters).
"""
from de1link.transports.base import ByteSink, ByteSource
from de1link.transports.pipe import DEFAULT_PIPE_CAPACITY, BytePipe
from de1link.transports.stream import StreamSink, StreamSource

__all__ = ["ByteSink", "ByteSource", "BytePipe", "DEFAULT_PIPE_CAPACITY", "StreamSink", "StreamSource"]
