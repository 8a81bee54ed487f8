"""
Base Printer
============

Abstract base class for printer devices.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..config import PRINTER_TYPES
from ..dispatch import dispatcher_for
from ..events import EventLog
from ..models import PrinterType, PrintJob


class BasePrinter(ABC):
    """Abstract base class for printer devices."""

    #: Variant tag; dispatch branches on this, never on the class
    printer_type: PrinterType = None

    def __init__(self, events: Optional[EventLog] = None):
        """Initialize printer with the event log it reports to."""
        self.events = events or EventLog()

    @abstractmethod
    def connect(self, client_id: str) -> bool:
        """
        Attach a client machine.

        Args:
            client_id: Requesting computer

        Returns:
            True on success
        """
        pass

    @abstractmethod
    def disconnect(self, client_id: Optional[str] = None) -> bool:
        """
        Detach a client machine.

        Returns:
            True on success
        """
        pass

    def submit(self, document: str) -> PrintJob:
        """Submit a document through the variant's dispatch route."""
        return dispatcher_for(self).submit(document)

    @abstractmethod
    def get_status(self) -> Dict[str, Any]:
        """
        Get printer state.

        Returns:
            Dict with connection and job information
        """
        pass

    def close(self):
        """Release timers (override in printers that hold any)."""

    def to_dict(self) -> Dict[str, Any]:
        """Printer info for API responses."""
        info = PRINTER_TYPES.get(self.printer_type.value, {})
        return {
            'printer_type': self.printer_type.value,
            'name': info.get('name', self.printer_type.value),
            'connection': info.get('connection'),
            'execution': info.get('execution'),
            **self.get_status(),
        }

    def __repr__(self):
        return f'{type(self).__name__}()'
