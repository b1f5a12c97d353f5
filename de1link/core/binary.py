"""
Fixed-point transcoding helpers for DE1 payload fields.

The controller packs most analogue readings as unsigned fixed-point numbers
where the low bits carry the fraction. Every raw value of the widths used
here is exactly representable as a Python float, so decoding and then
encoding a field gives back the original bits.
"""
from __future__ import annotations

from dataclasses import dataclass


def get_bit(byte_value: int, bit_index: int) -> bool:
    if bit_index < 0 or bit_index > 7:
        raise ValueError("bit_index must be between 0 and 7")
    return bool(byte_value & (1 << bit_index))


def read_u24(data: bytes) -> int:
    """Zero-extend a 3-byte big-endian value."""
    return int.from_bytes(bytes([0]) + bytes(data[:3]), byteorder="big")


def write_u24(value: int) -> bytes:
    """Store the low 24 bits of ``value`` as 3 big-endian bytes."""
    return (value & 0xFFFFFFFF).to_bytes(4, byteorder="big")[1:]


def read_ufixed(raw: int, frac_bits: int) -> float:
    return raw / (1 << frac_bits)


def write_ufixed(value: float, int_bits: int, frac_bits: int) -> int:
    """
    Encode ``value`` as an unsigned fixed-point integer.

    Out-of-range values wrap to the field width rather than raising.
    """
    mask = (1 << (int_bits + frac_bits)) - 1
    return int(round(value * (1 << frac_bits))) & mask


@dataclass(frozen=True)
class UFixed:
    """An unsigned fixed-point layout, e.g. ``UFixed(4, 12)`` for U4F12."""
    int_bits: int
    frac_bits: int

    @property
    def width(self) -> int:
        return (self.int_bits + self.frac_bits) // 8

    def decode(self, data: bytes) -> float:
        return read_ufixed(int.from_bytes(data[: self.width], byteorder="big"), self.frac_bits)

    def encode(self, value: float) -> bytes:
        return write_ufixed(value, self.int_bits, self.frac_bits).to_bytes(self.width, byteorder="big")


U4F12 = UFixed(4, 12)
U8F8 = UFixed(8, 8)
U4F4 = UFixed(4, 4)
U7F1 = UFixed(7, 1)


def read_u8f16(data: bytes) -> float:
    """Decode a 24-bit value carrying 16 fractional bits (0..256)."""
    return read_ufixed(read_u24(data), 16)


def write_u8f16(value: float) -> bytes:
    return write_u24(write_ufixed(value, 8, 16))


F817_SCALE_BIT = 7
F817_TENTHS_MAX = 12.7


def read_f817(byte_value: int) -> float:
    """
    Decode the firmware's 1-byte hybrid format.

    Bit 7 clear: the low seven bits count tenths (0.0-12.7).
    Bit 7 set: the low seven bits are whole units (0-127).
    """
    magnitude = byte_value & 0x7F
    if get_bit(byte_value, F817_SCALE_BIT):
        return float(magnitude)
    return magnitude / 10


def write_f817(value: float) -> int:
    if value <= F817_TENTHS_MAX:
        return int(round(value * 10)) & 0x7F
    return (int(value) & 0x7F) | (1 << F817_SCALE_BIT)


__all__ = [
    "F817_TENTHS_MAX",
    "U4F12",
    "U4F4",
    "U7F1",
    "U8F8",
    "UFixed",
    "get_bit",
    "read_f817",
    "read_u24",
    "read_u8f16",
    "read_ufixed",
    "write_f817",
    "write_u24",
    "write_u8f16",
    "write_ufixed",
]
