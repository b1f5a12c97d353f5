"""
A fake DE1 that answers host frames and streams telemetry.

The fake owns one line reader, the subscription flags and a 16-bit shot
timer. It only wakes up when bytes arrive or when the next tick is due, and
all of its state is touched from that single task.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from de1link.core.errors import CodecError, De1Error, UnexpectedFrame, UnsupportedMmr
from de1link.fake_app.config import SimulatorSettings
from de1link.fake_app.logging import create_logger, event_log
from de1link.parsing.commands import Command
from de1link.parsing.packets import (
    MmrOperation,
    Packet,
    PacketKind,
    Record,
    ShotSample,
    State,
    StateInfo,
    SubState,
    WaterLevels,
    build_frame,
)
from de1link.parsing.serial import Frame, FromDevice, LineReader
from de1link.transports.base import ByteSink, ByteSource

TIMESTAMP_STEP = 25
TIMESTAMP_MASK = 0xFFFF

# Canned register contents returned for MMR reads, keyed by address.
MMR_REGISTERS: Dict[int, bytes] = {
    0x800008: bytes([0x14, 0x05, 0x00, 0x00, 0x04, 0x00, 0x00, 0x00, 0x35, 0x05, 0x00, 0x00]),
    0x803810: bytes([0x14, 0x00, 0x00, 0x00, 0x28, 0x00, 0x00, 0x00, 0x52, 0x03, 0x00, 0x00]),
    0x80381C: bytes([0x07, 0x00, 0x00, 0x00]),
    0x803830: bytes([0x84, 0x23, 0x00, 0x00]),
    0x803834: bytes([0x78, 0x00, 0x00, 0x00, 0x14, 0x00, 0x00, 0x00]),
    0x80385C: bytes([0x02, 0x00, 0x00, 0x00]),
}


@dataclass
class Subscriptions:
    mmr_read: bool = False
    shot_sample: bool = False
    state_info: bool = False
    water_levels: bool = False


SUBSCRIPTION_FLAGS: Dict[Command, str] = {
    Command.READ_FROM_MMR: "mmr_read",
    Command.SHOT_SAMPLE: "shot_sample",
    Command.STATE_INFO: "state_info",
    Command.WATER_LEVELS: "water_levels",
}


class FakeDe1:
    def __init__(
        self,
        source: ByteSource,
        sink: ByteSink,
        settings: Optional[SimulatorSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.source = source
        self.sink = sink
        self.settings = settings or SimulatorSettings()
        self.logger = logger or create_logger("de1link.fake", self.settings.log_ring_size)
        self.line_reader = LineReader(self.settings.line_buffer_size)
        self.subscriptions = Subscriptions()
        self.timestamp = 0
        self._handlers: Dict[PacketKind, Callable[[Packet], Awaitable[None]]] = {
            PacketKind.REQUESTED_STATE: self._ignore,
            PacketKind.READ_FROM_MMR: self.handle_read_from_mmr,
            PacketKind.WRITE_TO_MMR: self._ignore,
            PacketKind.SHOT_SETTINGS: self._ignore,
            PacketKind.SHOT_SAMPLE: self._ignore,
            PacketKind.STATE_INFO: self._ignore,
            PacketKind.SHOT_HEADER_WRITE: self._ignore,
            PacketKind.SHOT_FRAME_WRITE: self._ignore,
            PacketKind.WATER_LEVELS: self._ignore,
            PacketKind.SUBSCRIBE: self.handle_subscription,
            PacketKind.UNSUBSCRIBE: self.handle_subscription,
        }

    def log(self, event: str, details: Optional[dict] = None, level: int = logging.INFO) -> None:
        self.logger.log(level, event, extra={"details": details or {}})

    def recent_errors(self) -> List[dict]:
        """Frame and tick errors still held by the logger's event log."""
        log = event_log(self.logger)
        return log.errors() if log is not None else []

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """
        Serve until ``stop_event`` is set or the source reaches end of stream.

        Each iteration waits for whichever comes first: bytes from the source,
        the next tick deadline or the stop event. Deadlines advance by exactly
        one period from the previous deadline so ticks do not drift.
        """
        loop = asyncio.get_running_loop()
        period = self.settings.tick_period
        next_tick = loop.time() + period
        read_task: Optional[asyncio.Task] = None
        stop_task = asyncio.ensure_future(stop_event.wait()) if stop_event else None
        try:
            while True:
                if read_task is None:
                    read_task = asyncio.ensure_future(self.source.read(self.settings.read_chunk_size))
                waiters = {read_task} if stop_task is None else {read_task, stop_task}
                timeout = max(0.0, next_tick - loop.time())
                await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)

                if stop_task is not None and stop_task.done():
                    return

                if read_task.done():
                    data = read_task.result()
                    read_task = None
                    if not data:
                        self.log("source_closed")
                        return
                    await self.handle_read(data)

                if loop.time() >= next_tick:
                    next_tick += period
                    await self.handle_tick()
        finally:
            for task in (read_task, stop_task):
                if task is not None and not task.done():
                    task.cancel()

    async def handle_read(self, data: bytes) -> None:
        for byte_value in data:
            try:
                frame = self.line_reader.handle_byte(byte_value)
                if frame is not None:
                    await self.handle_frame(frame)
            except De1Error as exc:
                self.log("frame_error", {"error": str(exc), "type": type(exc).__name__}, logging.ERROR)

    async def handle_frame(self, frame: Frame) -> None:
        if isinstance(frame, FromDevice):
            raise UnexpectedFrame(frame)
        packet = Packet.from_frame(frame)
        await self._handlers[packet.kind](packet)

    async def _ignore(self, packet: Packet) -> None:
        return None

    async def handle_subscription(self, packet: Packet) -> None:
        enable = packet.kind is PacketKind.SUBSCRIBE
        command = Command.from_serial(packet.value)
        self.log("subscription", {"command": command.name, "enabled": enable})
        flag = SUBSCRIPTION_FLAGS.get(command)
        if flag is not None:
            setattr(self.subscriptions, flag, enable)

    async def handle_read_from_mmr(self, packet: Packet) -> None:
        request: MmrOperation = packet.value
        # Read requests count words; the response's len counts bytes.
        if not self.subscriptions.mmr_read:
            return
        register = MMR_REGISTERS.get(request.addr)
        if register is None:
            raise UnsupportedMmr(request.addr)
        self.log("mmr_read", {"addr": f"0x{request.addr:06x}", "words": request.len + 1})
        await self.send_mmr(request.addr, register)

    async def send_mmr(self, addr: int, data: bytes) -> None:
        if len(data) > 16:
            raise CodecError("MMR data is limited to 16 bytes")
        await self.send_record(Command.READ_FROM_MMR, MmrOperation(len=len(data), addr=addr, data=data.ljust(16, b"\x00")))

    async def send_record(self, command: Command, record: Record) -> None:
        await build_frame(command, record, from_device=True).write(self.sink)

    async def handle_tick(self) -> None:
        self.timestamp = (self.timestamp + TIMESTAMP_STEP) & TIMESTAMP_MASK
        self.log("tick", {"timestamp": self.timestamp}, logging.DEBUG)
        try:
            if self.subscriptions.shot_sample:
                await self.send_record(Command.SHOT_SAMPLE, self.sample())
            if self.subscriptions.state_info:
                await self.send_record(Command.STATE_INFO, StateInfo(State.IDLE, SubState.NO_STATE))
            if self.subscriptions.water_levels:
                await self.send_record(Command.WATER_LEVELS, WaterLevels(level=13.06, start_fill_level=5.0))
        except De1Error as exc:
            self.log("tick_error", {"error": str(exc)}, logging.ERROR)

    def sample(self) -> ShotSample:
        return ShotSample(
            timer=self.timestamp,
            group_pressure=0.0103,
            group_flow=1.8708,
            mix_temp=77.91,
            head_temp=85.79803,
            set_mix_temp=90.0,
            set_head_temp=90.0,
            set_group_pressure=0.0,
            set_group_flow=0.0,
            frame_number=5,
            steam_temp=158,
        )


__all__ = ["FakeDe1", "MMR_REGISTERS", "Subscriptions", "TIMESTAMP_STEP"]
