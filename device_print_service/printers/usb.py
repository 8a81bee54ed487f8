"""
USB Printer
===========

Exclusive point-to-point printer. One client holds the link at a time and
``print_document`` returns only after the job is done; there is no buffer.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional

from .base import BasePrinter
from ..config import USB_PRINT_DELAY
from ..connection import ExclusiveConnectionState
from ..errors import PrinterError, NotConnectedError
from ..events import EventLog, CONNECTED, DISCONNECTED, PRINT_STARTED, PRINT_FINISHED, REJECTED
from ..models import PrinterType, PrintJob


class UsbPrinter(BasePrinter):
    """Printer behind an exclusive, synchronous link."""

    printer_type = PrinterType.USB

    def __init__(self, events: Optional[EventLog] = None,
                 print_delay: float = USB_PRINT_DELAY,
                 sleep: Callable[[float], None] = time.sleep):
        super().__init__(events)
        self.connection = ExclusiveConnectionState()
        self.print_delay = print_delay
        self._sleep = sleep
        self._link_lock = threading.RLock()

    @property
    def connected_client(self) -> Optional[str]:
        return self.connection.holder

    def connect(self, client_id: str) -> bool:
        try:
            self.connection.connect(client_id)
        except (PrinterError, ValueError) as e:
            self._reject('connect', e, client_id)
            raise
        self.events.emit(CONNECTED, self.printer_type.value, client_id=client_id)
        return True

    def disconnect(self, client_id: Optional[str] = None) -> bool:
        # Waits for a print in progress on the link
        with self._link_lock:
            try:
                previous = self.connection.disconnect(client_id)
            except PrinterError as e:
                self._reject('disconnect', e, client_id)
                raise
            self.events.emit(DISCONNECTED, self.printer_type.value, client_id=previous)
        return True

    def print_document(self, document: str) -> PrintJob:
        """Print immediately. Blocks the caller until the job is finished.

        Calls made while another print is running wait for it to finish.
        """
        with self._link_lock:
            client_id = self.connection.holder
            if client_id is None:
                error = NotConnectedError('USB printer is not connected to any computer',
                                          {'document': document})
                self._reject('print', error, None, document=document)
                raise error

            job = PrintJob(printer_type=self.printer_type.value, document=document,
                           client_id=client_id)
            job.start()
            self.events.emit(PRINT_STARTED, self.printer_type.value, client_id=client_id,
                             document=document, job_id=job.id)
            if self.print_delay > 0:
                self._sleep(self.print_delay)
            self.events.emit(PRINT_FINISHED, self.printer_type.value, client_id=client_id,
                             document=document, job_id=job.id)
        job.complete()
        return job

    def _reject(self, operation: str, error: Exception, client_id, document=None):
        self.events.emit(REJECTED, self.printer_type.value, client_id=client_id,
                         document=document, detail=f'{operation}: {error}')

    def get_status(self) -> Dict[str, Any]:
        return {
            'status': 'connected' if self.connection.is_connected else 'unconnected',
            'connected_client': self.connection.holder,
            'print_delay': self.print_delay,
        }
