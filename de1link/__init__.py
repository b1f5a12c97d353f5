from de1link.core.errors import (
    CodecError,
    De1Error,
    ParseError,
    PayloadLengthError,
    TransportError,
    UnexpectedFrame,
    UnknownCommand,
    UnsupportedMmr,
)
from de1link.parsing.commands import MAX_DATA_LENGTH, Command
from de1link.parsing.packets import Packet, PacketKind
from de1link.parsing.serial import (
    CommandFrame,
    Frame,
    FromDevice,
    LineReader,
    Subscribe,
    ToDevice,
    Unsubscribe,
    parse_frame,
)
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "CodecError",
    "Command",
    "CommandFrame",
    "De1Error",
    "Frame",
    "FromDevice",
    "LineReader",
    "MAX_DATA_LENGTH",
    "Packet",
    "PacketKind",
    "ParseError",
    "PayloadLengthError",
    "Subscribe",
    "ToDevice",
    "TransportError",
    "UnexpectedFrame",
    "UnknownCommand",
    "Unsubscribe",
    "UnsupportedMmr",
    "parse_frame",
]

try:
    __version__ = version("de1link")
except PackageNotFoundError:
    __version__ = "0.0.0"
