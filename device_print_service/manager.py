"""
Printer Manager
===============

Registry of printer devices, one per type tag.

The manager is constructed explicitly and handed to whatever needs it (the
HTTP app, scripts, tests). Keep one per process; nothing enforces it.
"""

import logging
import threading
from collections import deque
from typing import Deque, Dict, List, Optional, Union

from .commands import ConnectCommand, DisconnectCommand, SubmitCommand
from .config import Settings
from .errors import PrinterNotFoundError
from .events import EventLog
from .models import PrinterType, PrintJob
from .printers import BasePrinter, create_printer
from .scheduler import TimerScheduler

logger = logging.getLogger(__name__)

PrinterTag = Union[PrinterType, str]


class PrinterManager:
    """Looks up printers by type and runs operations on them."""

    def __init__(self, events: Optional[EventLog] = None, scheduler=None,
                 settings: Optional[Settings] = None):
        self.settings = settings or Settings.from_env()
        self.events = events or EventLog(self.settings.event_history_limit)
        self.scheduler = scheduler or TimerScheduler()

        self._printers: Dict[PrinterType, BasePrinter] = {}
        self._jobs: Deque[PrintJob] = deque(maxlen=self.settings.job_history_limit or None)
        self._lock = threading.Lock()

    # =========================================================================
    # Registry
    # =========================================================================

    def add_printer(self, printer_type: PrinterTag) -> BasePrinter:
        """Create a printer for the type and register it (replaces any existing one).

        A replaced network printer is dropped from the registry but finishes
        the jobs it already accepted.
        """
        tag = PrinterType.from_tag(printer_type)
        printer = create_printer(tag, **self._printer_options(tag))

        with self._lock:
            previous = self._printers.get(tag)
            self._printers[tag] = printer
        if previous is not None:
            logger.warning('Replacing registered %s printer', tag.value)

        logger.info('Registered %s printer', tag.value)
        return printer

    def _printer_options(self, tag: PrinterType) -> dict:
        if tag is PrinterType.NETWORK:
            return {
                'events': self.events,
                'scheduler': self.scheduler,
                'print_delay': self.settings.network_print_delay,
                'max_pending': self.settings.max_pending,
            }
        return {
            'events': self.events,
            'print_delay': self.settings.usb_print_delay,
        }

    def add_default_printers(self):
        """Register the printers named in the settings."""
        for tag in self.settings.default_printers:
            self.add_printer(tag)

    def get_printer(self, printer_type: PrinterTag) -> BasePrinter:
        """Get the printer for a type. Raises PrinterNotFoundError if absent."""
        tag = PrinterType.from_tag(printer_type)
        with self._lock:
            printer = self._printers.get(tag)
        if printer is None:
            raise PrinterNotFoundError('Printer not found', {'printer_type': tag.value})
        return printer

    def printers(self) -> List[BasePrinter]:
        with self._lock:
            return list(self._printers.values())

    def __len__(self):
        with self._lock:
            return len(self._printers)

    # =========================================================================
    # Operations
    # =========================================================================

    def connect(self, printer_type: PrinterTag, client_id: str):
        ConnectCommand(self.get_printer(printer_type), client_id).execute()

    def disconnect(self, printer_type: PrinterTag, client_id: Optional[str] = None):
        DisconnectCommand(self.get_printer(printer_type), client_id).execute()

    def submit_document(self, printer_type: PrinterTag, document: str) -> PrintJob:
        """Submit a document. Network jobs come back queued, USB jobs completed."""
        command = SubmitCommand(self.get_printer(printer_type), document)
        command.execute()
        with self._lock:
            self._jobs.append(command.job)
        return command.job

    # =========================================================================
    # History
    # =========================================================================

    def jobs(self, limit: int = 50, printer_type: Optional[PrinterTag] = None) -> List[PrintJob]:
        """Recent jobs, most recent first."""
        with self._lock:
            jobs = list(self._jobs)
        if printer_type:
            tag = PrinterType.from_tag(printer_type).value
            jobs = [j for j in jobs if j.printer_type == tag]
        jobs.reverse()
        return jobs[:limit]

    def close(self):
        """Cancel pending print timers (shutdown only)."""
        for printer in self.printers():
            printer.close()
