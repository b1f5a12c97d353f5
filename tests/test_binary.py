"""Tests for the fixed-point field codecs."""
import pytest

from de1link.core.binary import (
    U4F12,
    U4F4,
    U7F1,
    U8F8,
    get_bit,
    read_f817,
    read_u24,
    read_u8f16,
    write_f817,
    write_u24,
    write_u8f16,
    write_ufixed,
)


def test_read_u24_zero_extends():
    assert read_u24(bytes([0x80, 0x38, 0x1C])) == 0x80381C
    assert read_u24(bytes([0x00, 0x00, 0x01])) == 1


def test_write_u24_drops_top_byte():
    assert write_u24(0x80381C) == bytes([0x80, 0x38, 0x1C])
    assert write_u24(0x12345678) == bytes([0x34, 0x56, 0x78])


def test_u4f12():
    assert U4F12.width == 2
    assert U4F12.decode(bytes([0x10, 0x00])) == 1.0
    assert U4F12.encode(1.8708) == (7663).to_bytes(2, "big")


def test_u8f8():
    assert U8F8.decode(bytes([0x5A, 0x00])) == 90.0
    assert U8F8.decode(bytes([0x58, 0xDA])) == 0x58DA / 256
    assert U8F8.encode(90.0) == bytes([0x5A, 0x00])


def test_u4f4_and_u7f1_are_single_byte():
    assert U4F4.width == 1
    assert U7F1.width == 1
    assert U4F4.decode(bytes([0x90])) == 9.0
    assert U4F4.encode(0.5) == bytes([0x08])
    assert U7F1.decode(bytes([0xB4])) == 90.0
    assert U7F1.encode(92.5) == bytes([0xB9])


def test_ufixed_wraps_out_of_range():
    # 16.0 does not fit in four integer bits.
    assert write_ufixed(16.0, 4, 4) == 0
    assert write_ufixed(17.5, 4, 4) == 0x18


def test_u8f16():
    raw = bytes([0x59, 0xC2, 0xE6])
    assert read_u8f16(raw) == 0x59C2E6 / 65536
    assert write_u8f16(read_u8f16(raw)) == raw
    assert write_u8f16(1.0) == bytes([0x01, 0x00, 0x00])


def test_f817_tenths():
    assert write_f817(5.0) == 0x32
    assert read_f817(0x32) == 5.0
    assert write_f817(12.7) == 0x7F
    assert read_f817(0x7F) == 12.7
    assert write_f817(0.0) == 0x00


def test_f817_whole_units():
    assert write_f817(20.0) == 0x94
    assert read_f817(0x94) == 20.0
    assert write_f817(127.0) == 0xFF
    assert read_f817(0x80) == 0.0


def test_f817_switches_scale_above_tenths_range():
    # 12.8 cannot be written in tenths, so it is truncated to whole units.
    assert write_f817(12.8) == 0x8C
    assert read_f817(0x8C) == 12.0


def test_f817_every_byte_survives_decode_encode_for_tenths():
    for raw in range(0x80):
        assert write_f817(read_f817(raw)) == raw


def test_get_bit():
    assert get_bit(0x80, 7) is True
    assert get_bit(0x7F, 7) is False
    with pytest.raises(ValueError):
        get_bit(0x01, 8)
