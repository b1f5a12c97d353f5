"""
In-memory event log for the fake controller.

The simulator logs snake_case event names with a ``details`` dict. The
:class:`EventLog` handler keeps the newest of those records so a host test
can see which frames the fake rejected and why, without scraping text logs.
"""
import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional


class EventLog(logging.Handler):
    def __init__(self, max_entries: int = 200):
        super().__init__()
        self._events: Deque[Dict] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._events.maxlen

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            "event": record.getMessage(),
            "level": record.levelname,
            "levelno": record.levelno,
            "ts": record.created,
            "details": dict(getattr(record, "details", {})),
        }
        with self._lock:
            self._events.append(entry)

    def events(self, name: Optional[str] = None) -> List[Dict]:
        """Recent entries, oldest first, optionally only those named ``name``."""
        with self._lock:
            found = list(self._events)
        if name is None:
            return found
        return [entry for entry in found if entry["event"] == name]

    def errors(self) -> List[Dict]:
        """Recent entries logged at ERROR or above (rejected frames, failed ticks)."""
        return [entry for entry in self.events() if entry["levelno"] >= logging.ERROR]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def create_logger(name: str, ring_size: int) -> logging.Logger:
    """Return the named logger with an :class:`EventLog` attached once."""
    logger = logging.getLogger(name)
    if event_log(logger) is None:
        logger.setLevel(logging.INFO)
        logger.addHandler(EventLog(max_entries=ring_size))
    return logger


def event_log(logger: logging.Logger) -> Optional[EventLog]:
    for handler in logger.handlers:
        if isinstance(handler, EventLog):
            return handler
    return None
