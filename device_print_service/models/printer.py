"""
Printer Type Model
==================

Tag carried by every printer device. Dispatch branches on this tag.
"""

from enum import Enum
from typing import Union

from ..errors import UnsupportedPrinterTypeError


class PrinterType(str, Enum):
    """Printer variants."""

    NETWORK = 'NETWORK'
    USB = 'USB'

    def __str__(self):
        return self.value

    @classmethod
    def from_tag(cls, tag: Union['PrinterType', str]) -> 'PrinterType':
        """Resolve a tag (member or case-insensitive string)."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().upper())
        except ValueError:
            raise UnsupportedPrinterTypeError(
                'Unsupported printer type',
                {'printer_type': tag, 'valid': ','.join(t.value for t in cls)},
            ) from None
