"""
Printer Errors
==============

Exceptions raised by printer devices, the factory and the manager.

All of them are synchronous and non-retryable: they are raised directly to
the caller of the violating operation and never leave a device in a
half-changed state.
"""

from typing import Any, Dict, Optional


class PrinterError(Exception):
    """Base exception for all printer-related errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """
        Initialize printer error.

        Args:
            message: Error message
            context: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self):
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Connection state violations (USB)
# =============================================================================

class AlreadyConnectedError(PrinterError):
    """Raised when an exclusive link already has a holder."""


class NotConnectedError(PrinterError):
    """Raised when an operation needs a connection that does not exist."""


class WrongClientError(PrinterError):
    """Raised when a client tries to detach a link held by another client."""


# =============================================================================
# Lookup / factory failures
# =============================================================================

class UnsupportedPrinterTypeError(PrinterError):
    """Raised for a printer type tag with no implementation."""


class PrinterNotFoundError(PrinterError):
    """Raised when no printer is registered for the requested type."""


# =============================================================================
# Queue
# =============================================================================

class QueueFullError(PrinterError):
    """Raised when a bounded job queue cannot accept another job."""
