"""
Typed payloads for DE1 command frames.

``records`` defines the fixed-shape payload records and their field layouts;
``decode`` maps frames to :class:`Packet` values and back.
"""
from de1link.parsing.packets.decode import (
    KIND_COMMANDS,
    PAYLOAD_SCHEMAS,
    Packet,
    PacketKind,
    as_dict,
    build_frame,
    decode_payload,
    encode_payload,
)
from de1link.parsing.packets.records import (
    MmrOperation,
    Record,
    RequestedState,
    ShotFrameWrite,
    ShotHeaderWrite,
    ShotSample,
    ShotSettings,
    State,
    StateInfo,
    SubState,
    WaterLevels,
)

__all__ = [
    "KIND_COMMANDS",
    "MmrOperation",
    "PAYLOAD_SCHEMAS",
    "Packet",
    "PacketKind",
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
    "as_dict",
    "build_frame",
    "decode_payload",
    "encode_payload",
]
