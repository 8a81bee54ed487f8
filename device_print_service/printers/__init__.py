"""
Device Print Service Printers
=============================

Printer variants and the factory that builds them from a type tag.
"""

from typing import Union

from .base import BasePrinter
from .network import NetworkPrinter
from .usb import UsbPrinter
from ..models import PrinterType

__all__ = ['BasePrinter', 'NetworkPrinter', 'UsbPrinter', 'PRINTERS', 'create_printer']

# Printer registry
PRINTERS = {
    PrinterType.NETWORK: NetworkPrinter,
    PrinterType.USB: UsbPrinter,
}


def create_printer(printer_type: Union[PrinterType, str], **options) -> BasePrinter:
    """
    Create a printer for a type tag.

    Args:
        printer_type: NETWORK or USB (enum member or string)
        **options: Constructor options of the printer class

    Raises:
        UnsupportedPrinterTypeError: For unknown tags
    """
    printer_class = PRINTERS[PrinterType.from_tag(printer_type)]
    return printer_class(**options)
