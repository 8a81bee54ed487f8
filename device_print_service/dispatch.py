"""
Dispatch
========

Routes a generic ``submit(document)`` to the printer variant's execution
mode: network printers enqueue, USB printers print immediately.

The route is picked from the printer's ``printer_type`` tag, so callers
never need to know which variant they hold.
"""

from abc import ABC, abstractmethod

from .models import PrinterType, PrintJob
from .errors import UnsupportedPrinterTypeError


class Dispatch(ABC):
    """Stateless adapter around one printer."""

    def __init__(self, printer):
        self.printer = printer

    @abstractmethod
    def submit(self, document: str) -> PrintJob:
        """Hand a document to the printer."""


class NetworkDispatch(Dispatch):
    """Enqueue and let the printer drain its queue."""

    def submit(self, document: str) -> PrintJob:
        return self.printer.enqueue(document)


class UsbDispatch(Dispatch):
    """Print synchronously over the exclusive link."""

    def submit(self, document: str) -> PrintJob:
        return self.printer.print_document(document)


# Dispatch registry
DISPATCHERS = {
    PrinterType.NETWORK: NetworkDispatch,
    PrinterType.USB: UsbDispatch,
}


def dispatcher_for(printer) -> Dispatch:
    """Get the dispatch adapter for a printer by its type tag."""
    dispatch_class = DISPATCHERS.get(printer.printer_type)
    if dispatch_class is None:
        raise UnsupportedPrinterTypeError(
            'No dispatch route for printer type',
            {'printer_type': printer.printer_type},
        )
    return dispatch_class(printer)
