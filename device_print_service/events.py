"""
Print Events
============

Structured events for connection changes and job lifecycle.

Job submission to a network printer does not block, so these events are the
only externally visible signal of progress. Every event is written to the
``device_print_service.events`` logger, kept in a bounded history and
handed to subscribers.
"""

import logging
import sys
import threading
from collections import deque
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional

from .config import EVENT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

# Event kinds
CONNECTED = 'connected'
DISCONNECTED = 'disconnected'
QUEUED = 'queued'
PRINT_STARTED = 'print_started'
PRINT_FINISHED = 'print_finished'
REJECTED = 'rejected'

EVENT_KINDS = (CONNECTED, DISCONNECTED, QUEUED, PRINT_STARTED, PRINT_FINISHED, REJECTED)


@dataclass
class PrintEvent:
    """A single state transition or job lifecycle event."""

    kind: str
    printer_type: str
    client_id: Optional[str] = None
    document: Optional[str] = None
    job_id: Optional[str] = None
    detail: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data

    def describe(self) -> str:
        """Human readable one-liner used as the log message."""
        parts = [f'{self.printer_type} {self.kind}']
        if self.document is not None:
            parts.append(f'document={self.document!r}')
        if self.client_id is not None:
            parts.append(f'client={self.client_id}')
        if self.job_id is not None:
            parts.append(f'job={self.job_id}')
        if self.detail:
            parts.append(f'detail={self.detail}')
        return ' '.join(parts)


Subscriber = Callable[[PrintEvent], None]


class EventLog:
    """Emits print events to the logger, a bounded history and subscribers."""

    def __init__(self, history_limit: int = EVENT_HISTORY_LIMIT):
        self._history: Deque[PrintEvent] = deque(maxlen=history_limit or None)
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def emit(self, kind: str, printer_type: str, **fields) -> PrintEvent:
        """Record an event and notify subscribers."""
        event = PrintEvent(kind=kind, printer_type=str(printer_type), **fields)
        level = logging.WARNING if kind == REJECTED else logging.INFO
        logger.log(level, event.describe(), extra={'event': event.to_dict()})

        with self._lock:
            self._history.append(event)
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.exception('Event subscriber %r failed on %s', subscriber, kind)
        return event

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber. Returns a callable that unsubscribes it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe():
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe

    def history(self, limit: Optional[int] = None, kind: Optional[str] = None) -> List[PrintEvent]:
        """Recent events, oldest first."""
        with self._lock:
            events = list(self._history)
        if kind:
            events = [e for e in events if e.kind == kind]
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def clear(self):
        with self._lock:
            self._history.clear()


class _EventFormatter(logging.Formatter):
    """Appends the structured event fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        event = getattr(record, 'event', None)
        if event:
            pairs = ' '.join(
                f'{k}={v}' for k, v in event.items()
                if v is not None and k != 'timestamp'
            )
            line = f'{line} | {pairs}'
        return line


def configure_logging(level: str = 'INFO'):
    """Install a single stream handler on the package logger."""
    package_logger = logging.getLogger('device_print_service')
    package_logger.setLevel(level)

    for handler in package_logger.handlers:
        if getattr(handler, '_dps_handler', False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_EventFormatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
    handler._dps_handler = True
    package_logger.addHandler(handler)
