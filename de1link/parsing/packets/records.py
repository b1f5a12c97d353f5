"""
Fixed-shape payload records for the DE1 commands that carry typed data.

Each record lists its fields in wire order as ``LAYOUT``: a tuple of
``(attribute, FieldCodec)`` pairs. All multi-byte values are big-endian.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Any, Callable, ClassVar, Type, TypeVar

from de1link.core.binary import (
    U4F12,
    U4F4,
    U7F1,
    U8F8,
    read_f817,
    read_u24,
    read_u8f16,
    write_f817,
    write_u24,
    write_u8f16,
)
from de1link.core.errors import CodecError


class State(IntEnum):
    SLEEP = 0x00
    GOING_TO_SLEEP = 0x01
    IDLE = 0x02
    BUSY = 0x03
    ESPRESSO = 0x04
    STEAM = 0x05
    HOT_WATER = 0x06
    SHORT_CAL = 0x07
    SELF_TEST = 0x08
    LONG_CAL = 0x09
    DESCALE = 0x0A
    FATAL_ERROR = 0x0B
    INIT = 0x0C
    NO_REQUEST = 0x0D
    SKIP_TO_NEXT = 0x0E
    HOT_WATER_RINSE = 0x0F
    STEAM_RINSE = 0x10
    REFILL = 0x11
    CLEAN = 0x12
    IN_BOOTLOADER = 0x13
    AIR_PURGE = 0x14


class SubState(IntEnum):
    NO_STATE = 0x00
    HEATING_WATER_TANK = 0x01
    HEATING_WATER_HEATER = 0x02
    STABILIZING_MIX_TEMP = 0x03
    PRE_INFUSION = 0x04
    POURING = 0x05
    FLUSHING = 0x06
    STEAMING = 0x07
    DESCALE_INIT = 0x08
    DESCALE_FILL_GROUP = 0x09
    DESCALE_RETURN = 0x0A
    DESCALE_GROUP = 0x0B
    DESCALE_STEAM = 0x0C
    CLEAN_INIT = 0x0D
    CLEAN_FILL_GROUP = 0x0E
    CLEAN_SOAK = 0x0F
    CLEAN_GROUP = 0x10
    PAUSED_REFILL = 0x11
    PAUSED_STEAM = 0x12
    ERROR_NAN = 200
    ERROR_INF = 201
    ERROR_GENERIC = 202
    ERROR_ACC = 203
    ERROR_TEMP_SENSOR = 204
    ERROR_PRESSURE_SENSOR = 205
    ERROR_WATER_LEVEL_SENSOR = 206
    ERROR_DIP = 207
    ERROR_ASSERTION = 208
    ERROR_UNSAFE = 209
    ERROR_INVALID_PARAM = 210
    ERROR_FLASH = 211
    ERROR_OOM = 212
    ERROR_DEADLINE = 213


@dataclass(frozen=True)
class FieldCodec:
    width: int
    decode: Callable[[bytes], Any]
    encode: Callable[[Any], bytes]


def _uint(width: int, mask: int | None = None) -> FieldCodec:
    limit = mask if mask is not None else (1 << (width * 8)) - 1
    return FieldCodec(
        width,
        lambda data: int.from_bytes(data, byteorder="big") & limit,
        lambda value: (int(value) & limit).to_bytes(width, byteorder="big"),
    )


def _enum(enum_type: Type[IntEnum]) -> FieldCodec:
    def decode(data: bytes) -> IntEnum:
        try:
            return enum_type(data[0])
        except ValueError:
            raise CodecError(f"invalid {enum_type.__name__} byte 0x{data[0]:02x}") from None

    return FieldCodec(1, decode, lambda value: bytes([int(value)]))


U8 = _uint(1)
U16 = _uint(2)
U24 = FieldCodec(3, read_u24, write_u24)
U10 = _uint(2, mask=0x3FF)
FIX_U4F12 = FieldCodec(U4F12.width, U4F12.decode, U4F12.encode)
FIX_U8F8 = FieldCodec(U8F8.width, U8F8.decode, U8F8.encode)
FIX_U4F4 = FieldCodec(U4F4.width, U4F4.decode, U4F4.encode)
FIX_U7F1 = FieldCodec(U7F1.width, U7F1.decode, U7F1.encode)
FIX_U8F16 = FieldCodec(3, read_u8f16, write_u8f16)
F817 = FieldCodec(1, lambda data: read_f817(data[0]), lambda value: bytes([write_f817(value)]))
MMR_DATA = FieldCodec(16, bytes, lambda value: bytes(value).ljust(16, b"\x00")[:16])

R = TypeVar("R", bound="Record")


class Record:
    """Mixin giving a dataclass ``from_bytes``/``to_bytes`` from its ``LAYOUT``."""

    LAYOUT: ClassVar[tuple[tuple[str, FieldCodec], ...]] = ()

    @classmethod
    def size(cls) -> int:
        return sum(codec.width for _, codec in cls.LAYOUT)

    @classmethod
    def from_bytes(cls: Type[R], data: bytes) -> R:
        if len(data) < cls.size():
            raise CodecError(f"{cls.__name__} needs {cls.size()} bytes, got {len(data)}")
        values = {}
        offset = 0
        for name, codec in cls.LAYOUT:
            values[name] = codec.decode(bytes(data[offset: offset + codec.width]))
            offset += codec.width
        return cls(**values)

    def to_bytes(self) -> bytes:
        out = bytearray()
        for name, codec in self.LAYOUT:
            out += codec.encode(getattr(self, name))
        return bytes(out)

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, IntEnum):
                value = value.name
            elif isinstance(value, bytes):
                value = value.hex()
            out[f.name] = value
        return out


@dataclass(frozen=True)
class RequestedState(Record):
    state: State

    LAYOUT = (("state", _enum(State)),)


@dataclass(frozen=True)
class MmrOperation(Record):
    """
    A memory-mapped register read or write.

    ``len`` does not mean the same thing in both directions: a read request
    asks for ``len + 1`` 32-bit words, while writes and read responses put
    the number of data bytes present in it.
    """
    len: int
    addr: int
    data: bytes = bytes(16)

    LAYOUT = (("len", U8), ("addr", U24), ("data", MMR_DATA))

    @property
    def byte_count(self) -> int:
        return (self.len + 1) * 4

    def __repr__(self) -> str:
        return f"MmrOperation(len={self.len}, addr=0x{self.addr:06x}, data={self.data.hex()})"


@dataclass(frozen=True)
class ShotSettings(Record):
    steam_flags: int
    target_steam_temp: int
    target_steam_length: int
    target_hot_water_temp: int
    target_hot_water_volume: int
    target_hot_water_length: int
    target_espresso_volume: int
    target_group_temp: float
    reserved: int = 0

    LAYOUT = (
        ("steam_flags", U8),
        ("target_steam_temp", U8),
        ("target_steam_length", U8),
        ("target_hot_water_temp", U8),
        ("target_hot_water_volume", U8),
        ("target_hot_water_length", U8),
        ("target_espresso_volume", U8),
        ("target_group_temp", FIX_U8F8),
        ("reserved", U8),
    )


@dataclass(frozen=True)
class ShotSample(Record):
    timer: int
    group_pressure: float
    group_flow: float
    mix_temp: float
    head_temp: float
    set_mix_temp: float
    set_head_temp: float
    set_group_pressure: float
    set_group_flow: float
    frame_number: int
    steam_temp: int

    LAYOUT = (
        ("timer", U16),
        ("group_pressure", FIX_U4F12),
        ("group_flow", FIX_U4F12),
        ("mix_temp", FIX_U8F8),
        ("head_temp", FIX_U8F16),
        ("set_mix_temp", FIX_U8F8),
        ("set_head_temp", FIX_U8F8),
        ("set_group_pressure", FIX_U4F4),
        ("set_group_flow", FIX_U4F4),
        ("frame_number", U8),
        ("steam_temp", U8),
    )


@dataclass(frozen=True)
class StateInfo(Record):
    state: State
    sub_state: SubState

    LAYOUT = (("state", _enum(State)), ("sub_state", _enum(SubState)))


@dataclass(frozen=True)
class ShotHeaderWrite(Record):
    version: int
    frames: int
    preinfuse_frames: int
    minimum_pressure: float
    minimum_flow: float

    LAYOUT = (
        ("version", U8),
        ("frames", U8),
        ("preinfuse_frames", U8),
        ("minimum_pressure", FIX_U4F4),
        ("minimum_flow", FIX_U4F4),
    )


@dataclass(frozen=True)
class ShotFrameWrite(Record):
    index: int
    flags: int
    set_value: float
    temp: float
    frame_length: float
    trigger_value: float
    max_volume: int

    # Only the low 10 bits of max_volume are significant.
    LAYOUT = (
        ("index", U8),
        ("flags", U8),
        ("set_value", FIX_U4F4),
        ("temp", FIX_U7F1),
        ("frame_length", F817),
        ("trigger_value", FIX_U4F4),
        ("max_volume", U10),
    )


@dataclass(frozen=True)
class WaterLevels(Record):
    level: float
    start_fill_level: float

    LAYOUT = (("level", FIX_U8F8), ("start_fill_level", FIX_U8F8))


__all__ = [
    "FieldCodec",
    "MmrOperation",
    "Record",
    "RequestedState",
    "ShotFrameWrite",
    "ShotHeaderWrite",
    "ShotSample",
    "ShotSettings",
    "State",
    "StateInfo",
    "SubState",
    "WaterLevels",
]
