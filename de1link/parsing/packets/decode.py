"""
Typed decoding of frame payloads.

A :class:`Packet` is the decoded form of a :class:`Frame`: the payload of a
data frame becomes one of the records in
:mod:`de1link.parsing.packets.records`, chosen by the frame's command
character, and subscription frames carry their command character through.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from de1link.core.errors import PayloadLengthError, UnknownCommand
from de1link.parsing.commands import Command
from de1link.parsing.packets.records import (
    MmrOperation,
    Record,
    RequestedState,
    ShotFrameWrite,
    ShotHeaderWrite,
    ShotSample,
    ShotSettings,
    StateInfo,
    WaterLevels,
)
from de1link.parsing.serial.frame import (
    CommandFrame,
    Frame,
    FromDevice,
    Subscribe,
    ToDevice,
    Unsubscribe,
    parse_frame,
)


class PacketKind(str, Enum):
    REQUESTED_STATE = "requested_state"
    READ_FROM_MMR = "read_from_mmr"
    WRITE_TO_MMR = "write_to_mmr"
    SHOT_SETTINGS = "shot_settings"
    SHOT_SAMPLE = "shot_sample"
    STATE_INFO = "state_info"
    SHOT_HEADER_WRITE = "shot_header_write"
    SHOT_FRAME_WRITE = "shot_frame_write"
    WATER_LEVELS = "water_levels"
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"


# Commands with a decodable payload. Versions, FwMapRequest and Calibration
# have no schema and decode as UnknownCommand.
PAYLOAD_SCHEMAS: dict[Command, tuple[PacketKind, type]] = {
    Command.REQUESTED_STATE: (PacketKind.REQUESTED_STATE, RequestedState),
    Command.READ_FROM_MMR: (PacketKind.READ_FROM_MMR, MmrOperation),
    Command.WRITE_TO_MMR: (PacketKind.WRITE_TO_MMR, MmrOperation),
    Command.SHOT_SETTINGS: (PacketKind.SHOT_SETTINGS, ShotSettings),
    Command.SHOT_SAMPLE: (PacketKind.SHOT_SAMPLE, ShotSample),
    Command.STATE_INFO: (PacketKind.STATE_INFO, StateInfo),
    Command.HEADER_WRITE: (PacketKind.SHOT_HEADER_WRITE, ShotHeaderWrite),
    Command.FRAME_WRITE: (PacketKind.SHOT_FRAME_WRITE, ShotFrameWrite),
    Command.WATER_LEVELS: (PacketKind.WATER_LEVELS, WaterLevels),
}

KIND_COMMANDS: dict[PacketKind, Command] = {kind: command for command, (kind, _) in PAYLOAD_SCHEMAS.items()}


def _schema_for(char: str) -> tuple[Command, PacketKind, type]:
    try:
        command = Command.from_serial(char)
        kind, record_type = PAYLOAD_SCHEMAS[command]
    except KeyError:
        raise UnknownCommand(char) from None
    return command, kind, record_type


def decode_payload(command_frame: CommandFrame) -> tuple[PacketKind, Record]:
    """
    Decode the data of a command frame into its typed record.

    Raises:
        UnknownCommand: If the command character has no payload schema.
        PayloadLengthError: If the data length differs from the command's.
        CodecError: If a field holds an invalid value (e.g. an unknown state).
    """
    command, kind, record_type = _schema_for(command_frame.command)
    if len(command_frame.data) != command.data_len:
        raise PayloadLengthError(command_frame.command, command.data_len, len(command_frame.data))
    return kind, record_type.from_bytes(command_frame.data)


def encode_payload(command: Command, record: Record) -> bytes:
    """Serialize ``record`` into exactly ``command.data_len`` bytes."""
    data = record.to_bytes()
    if len(data) > command.data_len:
        raise PayloadLengthError(command.serial_command, command.data_len, len(data))
    return data.ljust(command.data_len, b"\x00")


def build_frame(command: Command, record: Record, from_device: bool = True) -> Frame:
    frame = CommandFrame(command.serial_command, encode_payload(command, record))
    return FromDevice(frame) if from_device else ToDevice(frame)


@dataclass(frozen=True)
class Packet:
    kind: PacketKind
    value: Union[Record, str]

    @classmethod
    def from_frame(cls, frame: Frame) -> "Packet":
        if isinstance(frame, (FromDevice, ToDevice)):
            kind, record = decode_payload(frame.command_frame)
            return cls(kind, record)
        if isinstance(frame, Subscribe):
            return cls(PacketKind.SUBSCRIBE, frame.command)
        if isinstance(frame, Unsubscribe):
            return cls(PacketKind.UNSUBSCRIBE, frame.command)
        raise TypeError(f"not a frame: {frame!r}")

    @classmethod
    def parse(cls, line: str) -> "Packet":
        """Parse a line and decode its payload; see :func:`parse_frame`."""
        return cls.from_frame(parse_frame(line))

    @property
    def command(self) -> Command:
        if self.kind in (PacketKind.SUBSCRIBE, PacketKind.UNSUBSCRIBE):
            return Command.from_serial(self.value)
        return KIND_COMMANDS[self.kind]

    def to_frame(self, from_device: bool = False) -> Frame:
        if self.kind is PacketKind.SUBSCRIBE:
            return Subscribe(self.value)
        if self.kind is PacketKind.UNSUBSCRIBE:
            return Unsubscribe(self.value)
        return build_frame(KIND_COMMANDS[self.kind], self.value, from_device=from_device)

    def __repr__(self) -> str:
        name = "".join(part.title() for part in self.kind.value.split("_"))
        return f"{name}({self.value!r})"


def as_dict(packet: Packet) -> dict[str, Any]:
    value = packet.value
    return {
        "kind": packet.kind.value,
        "value": value.as_dict() if isinstance(value, Record) else value,
    }


__all__ = [
    "KIND_COMMANDS",
    "PAYLOAD_SCHEMAS",
    "Packet",
    "PacketKind",
    "as_dict",
    "build_frame",
    "decode_payload",
    "encode_payload",
]
