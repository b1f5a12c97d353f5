"""
Command table for the DE1 serial protocol.

Maps each command to its one-character serial identifier, its BLE channel id
and its fixed payload length.
"""
from de1link.parsing.commands.table import (
    COMMAND_SPECS,
    MAX_DATA_LENGTH,
    Command,
    CommandSpec,
)

__all__ = [
    "COMMAND_SPECS",
    "MAX_DATA_LENGTH",
    "Command",
    "CommandSpec",
]
