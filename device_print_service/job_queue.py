"""
Job Queue
=========

FIFO queue with a single in-flight guard, owned by one network printer.

``submit`` appends and returns at once. The drain pops the head job, marks
it in flight, and asks the scheduler to finish it after the simulated print
delay. Completion clears the guard and drains again, so jobs print one at a
time in arrival order and a job never starts before the previous job's
``print_finished`` event has been emitted.
"""

import logging
import threading
from collections import deque
from typing import Any, Deque, Dict, Optional

from .errors import QueueFullError
from .events import EventLog, QUEUED, PRINT_STARTED, PRINT_FINISHED, REJECTED
from .models import PrintJob
from .scheduler import TimerScheduler

logger = logging.getLogger(__name__)


class JobQueue:
    """Serializes print jobs for one device."""

    def __init__(self, printer_type: str, events: EventLog, scheduler=None,
                 print_delay: float = 1.0, max_pending: Optional[int] = None):
        """
        Args:
            printer_type: Tag of the owning printer (used in events)
            events: Event log receiving job lifecycle events
            scheduler: Object with ``call_later(delay, callback)``
            print_delay: Fixed simulated print time per job (seconds)
            max_pending: Waiting jobs allowed; None means unbounded
        """
        self.printer_type = printer_type
        self.events = events
        self.scheduler = scheduler or TimerScheduler()
        self.print_delay = print_delay
        self.max_pending = max_pending

        self._pending: Deque[PrintJob] = deque()
        self._in_flight: Optional[PrintJob] = None
        # Re-entrant: event subscribers may submit from inside a callback
        self._lock = threading.RLock()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def in_flight(self) -> Optional[PrintJob]:
        return self._in_flight

    @property
    def is_busy(self) -> bool:
        return self._in_flight is not None

    def submit(self, document: str) -> PrintJob:
        """Append a document to the tail of the queue. Never blocks."""
        with self._lock:
            if self.max_pending is not None and len(self._pending) >= self.max_pending:
                self.events.emit(REJECTED, self.printer_type, document=document,
                                 detail='queue full')
                raise QueueFullError(
                    'Print queue is full',
                    {'printer_type': self.printer_type, 'max_pending': self.max_pending},
                )

            job = PrintJob(printer_type=self.printer_type, document=document)
            self._pending.append(job)
            self.events.emit(QUEUED, self.printer_type, document=document, job_id=job.id,
                             detail=f'position={len(self._pending)}')
            self._drain()
        return job

    def _drain(self):
        """Start the head job unless one is already in flight."""
        with self._lock:
            if self._in_flight is not None or not self._pending:
                return

            job = self._pending.popleft()
            self._in_flight = job
            job.start()
            self.events.emit(PRINT_STARTED, self.printer_type, document=job.document,
                             job_id=job.id)
            self.scheduler.call_later(self.print_delay, self._finish, job)

    def _finish(self, job: PrintJob):
        with self._lock:
            if self._in_flight is not job:
                logger.error('Completion for %s arrived but %s is in flight', job.id,
                             self._in_flight.id if self._in_flight else None)
                return
            self.events.emit(PRINT_FINISHED, self.printer_type, document=job.document,
                             job_id=job.id)
            self._in_flight = None
            job.complete()
            self._drain()

    def snapshot(self) -> Dict[str, Any]:
        """Queue state for API responses."""
        with self._lock:
            return {
                'pending': [job.to_dict() for job in self._pending],
                'in_flight': self._in_flight.to_dict() if self._in_flight else None,
                'max_pending': self.max_pending,
                'print_delay': self.print_delay,
            }
