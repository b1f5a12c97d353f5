"""
A fake DE1 controller speaking the serial protocol.

Used to exercise host software without hardware: it answers MMR reads from a
small table of canned registers and streams telemetry for subscribed
commands once per tick.
"""
from de1link.fake_app.config import SimulatorSettings, get_settings
from de1link.fake_app.device import MMR_REGISTERS, FakeDe1, Subscriptions
from de1link.fake_app.logging import EventLog, create_logger, event_log

__all__ = [
    "FakeDe1",
    "MMR_REGISTERS",
    "EventLog",
    "SimulatorSettings",
    "Subscriptions",
    "create_logger",
    "event_log",
    "get_settings",
]
