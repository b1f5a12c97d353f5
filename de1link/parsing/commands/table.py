"""
Command table for the DE1 serial protocol.

Each command has a one-character serial identifier, the channel id used for
the same data on the BLE transport (the GATT characteristic ``0xA0xx``) and
a fixed payload length. Adding a command is a one-line change to
``COMMAND_SPECS``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from de1link.core.errors import UnknownCommand


class Command(str, Enum):
    VERSIONS = "A"
    REQUESTED_STATE = "B"
    READ_FROM_MMR = "E"
    WRITE_TO_MMR = "F"
    FW_MAP_REQUEST = "I"
    SHOT_SETTINGS = "K"
    SHOT_SAMPLE = "M"
    STATE_INFO = "N"
    HEADER_WRITE = "O"
    FRAME_WRITE = "P"
    WATER_LEVELS = "Q"
    CALIBRATION = "R"

    @classmethod
    def from_serial(cls, char: str) -> "Command":
        """Look up a command by its serial identifier."""
        try:
            return cls(char)
        except ValueError:
            raise UnknownCommand(char) from None

    @classmethod
    def from_channel_id(cls, channel_id: int) -> "Command":
        for command, spec in COMMAND_SPECS.items():
            if spec.channel_id == channel_id:
                return command
        raise UnknownCommand(f"0x{channel_id:04x}")

    @property
    def serial_command(self) -> str:
        return COMMAND_SPECS[self].serial

    @property
    def channel_id(self) -> int:
        return COMMAND_SPECS[self].channel_id

    @property
    def data_len(self) -> int:
        return COMMAND_SPECS[self].data_len


@dataclass(frozen=True)
class CommandSpec:
    serial: str
    channel_id: int
    data_len: int


# Deprecated commands (SetTime, ShotDirectory, ShotMapRequest,
# DeleteShotRange, Temperatures) are not listed.
COMMAND_SPECS: dict[Command, CommandSpec] = {
    Command.VERSIONS: CommandSpec("A", 0xA001, 18),
    Command.REQUESTED_STATE: CommandSpec("B", 0xA002, 1),
    Command.READ_FROM_MMR: CommandSpec("E", 0xA005, 20),
    Command.WRITE_TO_MMR: CommandSpec("F", 0xA006, 20),
    Command.FW_MAP_REQUEST: CommandSpec("I", 0xA009, 7),
    Command.SHOT_SETTINGS: CommandSpec("K", 0xA00B, 10),
    Command.SHOT_SAMPLE: CommandSpec("M", 0xA00D, 19),
    Command.STATE_INFO: CommandSpec("N", 0xA00E, 2),
    Command.HEADER_WRITE: CommandSpec("O", 0xA00F, 5),
    Command.FRAME_WRITE: CommandSpec("P", 0xA010, 8),
    Command.WATER_LEVELS: CommandSpec("Q", 0xA011, 4),
    Command.CALIBRATION: CommandSpec("R", 0xA012, 14),
}

MAX_DATA_LENGTH: int = max(spec.data_len for spec in COMMAND_SPECS.values())

