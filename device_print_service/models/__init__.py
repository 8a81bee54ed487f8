"""
Device Print Service Models
"""

from .printer import PrinterType
from .job import PrintJob

__all__ = ['PrinterType', 'PrintJob']
