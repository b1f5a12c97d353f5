"""Tests for the command table."""
import pytest

from de1link.core.errors import UnknownCommand
from de1link.parsing.commands import COMMAND_SPECS, MAX_DATA_LENGTH, Command


def test_serial_characters_and_lengths():
    expected = {
        "A": 18,
        "B": 1,
        "E": 20,
        "F": 20,
        "I": 7,
        "K": 10,
        "M": 19,
        "N": 2,
        "O": 5,
        "P": 8,
        "Q": 4,
        "R": 14,
    }
    assert {c.serial_command: c.data_len for c in Command} == expected


def test_max_data_length():
    assert MAX_DATA_LENGTH == 20


def test_channel_ids():
    assert Command.VERSIONS.channel_id == 0xA001
    assert Command.SHOT_SAMPLE.channel_id == 0xA00D
    assert Command.CALIBRATION.channel_id == 0xA012
    assert len({c.channel_id for c in Command}) == len(Command)


def test_every_command_is_in_the_table():
    assert set(COMMAND_SPECS) == set(Command)
    for command, spec in COMMAND_SPECS.items():
        assert command.value == spec.serial


def test_from_serial():
    assert Command.from_serial("M") is Command.SHOT_SAMPLE
    assert Command.from_serial("E") is Command.READ_FROM_MMR


def test_from_serial_unknown():
    with pytest.raises(UnknownCommand) as excinfo:
        Command.from_serial("Z")
    assert excinfo.value.command == "Z"


def test_from_channel_id():
    assert Command.from_channel_id(0xA00E) is Command.STATE_INFO
    with pytest.raises(UnknownCommand):
        Command.from_channel_id(0xA003)
