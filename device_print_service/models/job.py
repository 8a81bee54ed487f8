"""
Print Job Model
===============

Represents a document submitted to a printer.
"""

import logging
import threading
import uuid
from datetime import datetime
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Callable, List

logger = logging.getLogger(__name__)

QUEUED = 'queued'
PRINTING = 'printing'
COMPLETED = 'completed'


@dataclass
class PrintJob:
    """Print job state. Identity beyond the id is its queue position."""

    # Identification
    id: str = field(default_factory=lambda: f"JOB-{str(uuid.uuid4())[:8].upper()}")
    printer_type: str = ""

    # Job details
    document: str = ""
    client_id: Optional[str] = None

    # Status
    status: str = QUEUED  # queued, printing, completed

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Completion notification
    _done: threading.Event = field(default_factory=threading.Event, init=False, repr=False, compare=False)
    _callbacks: List[Callable[['PrintJob'], None]] = field(
        default_factory=list, init=False, repr=False, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            'id': self.id,
            'printer_type': str(self.printer_type),
            'document': self.document,
            'client_id': self.client_id,
            'status': self.status,
        }
        for key in ['created_at', 'started_at', 'completed_at']:
            value = getattr(self, key)
            data[key] = value.isoformat() if value else None
        return data

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def start(self):
        """Mark job as started."""
        self.status = PRINTING
        self.started_at = datetime.now()

    def complete(self):
        """Mark job as completed and run completion callbacks."""
        self.status = COMPLETED
        self.completed_at = datetime.now()
        with self._lock:
            self._done.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            self._invoke(callback)

    def add_done_callback(self, callback: Callable[['PrintJob'], None]):
        """Call ``callback(job)`` on completion (immediately if already done)."""
        with self._lock:
            if not self._done.is_set():
                self._callbacks.append(callback)
                return
        self._invoke(callback)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the job completes. Returns False on timeout."""
        return self._done.wait(timeout)

    def _invoke(self, callback):
        try:
            callback(self)
        except Exception:
            logger.exception('Done callback %r failed for %s', callback, self.id)
