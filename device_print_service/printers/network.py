"""
Network Printer
===============

Shared printer reachable by any number of client machines. Jobs are queued
and printed one at a time in arrival order; submitting never blocks.
"""

from typing import Any, Dict, Optional

from .base import BasePrinter
from ..config import NETWORK_PRINT_DELAY
from ..connection import SharedConnectionState
from ..events import EventLog, CONNECTED, DISCONNECTED
from ..job_queue import JobQueue
from ..models import PrinterType, PrintJob
from ..scheduler import TimerScheduler


class NetworkPrinter(BasePrinter):
    """Printer with an asynchronous FIFO job queue."""

    printer_type = PrinterType.NETWORK

    def __init__(self, events: Optional[EventLog] = None, scheduler=None,
                 print_delay: float = NETWORK_PRINT_DELAY,
                 max_pending: Optional[int] = None):
        super().__init__(events)
        self.connection = SharedConnectionState()
        self.queue = JobQueue(
            self.printer_type.value,
            self.events,
            scheduler=scheduler or TimerScheduler(),
            print_delay=print_delay,
            max_pending=max_pending,
        )

    def connect(self, client_id: str) -> bool:
        self.connection.connect(client_id)
        self.events.emit(CONNECTED, self.printer_type.value, client_id=client_id)
        return True

    def disconnect(self, client_id: Optional[str] = None) -> bool:
        self.connection.disconnect(client_id)
        self.events.emit(DISCONNECTED, self.printer_type.value, client_id=client_id)
        return True

    def enqueue(self, document: str) -> PrintJob:
        """Add a document to the print queue."""
        return self.queue.submit(document)

    def get_status(self) -> Dict[str, Any]:
        in_flight = self.queue.in_flight
        return {
            'status': 'printing' if in_flight else 'idle',
            'connected_clients': list(self.connection.clients),
            'queue': self.queue.snapshot(),
        }

    def close(self):
        cancel_all = getattr(self.queue.scheduler, 'cancel_all', None)
        if cancel_all:
            cancel_all()
