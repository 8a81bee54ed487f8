"""
Printer Commands
================

Deferred printer operations. A command captures its target and arguments
and runs on ``execute()``. Errors raised by the printer propagate
unchanged; commands never retry.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .models import PrintJob

logger = logging.getLogger(__name__)


class Command(ABC):
    """A single deferred printer operation."""

    def __init__(self, printer):
        self.printer = printer

    @abstractmethod
    def _run(self):
        pass

    def execute(self) -> None:
        logger.debug('Executing %r', self)
        self._run()


class ConnectCommand(Command):
    def __init__(self, printer, client_id: str):
        super().__init__(printer)
        self.client_id = client_id

    def _run(self):
        self.printer.connect(self.client_id)

    def __repr__(self):
        return f'ConnectCommand({self.printer.printer_type}, client_id={self.client_id!r})'


class DisconnectCommand(Command):
    def __init__(self, printer, client_id: Optional[str] = None):
        super().__init__(printer)
        self.client_id = client_id

    def _run(self):
        self.printer.disconnect(self.client_id)

    def __repr__(self):
        return f'DisconnectCommand({self.printer.printer_type}, client_id={self.client_id!r})'


class SubmitCommand(Command):
    """Submit a document; the resulting job is left on ``self.job``."""

    def __init__(self, printer, document: str):
        super().__init__(printer)
        self.document = document
        self.job: Optional[PrintJob] = None

    def _run(self):
        self.job = self.printer.submit(self.document)

    def __repr__(self):
        return f'SubmitCommand({self.printer.printer_type}, document={self.document!r})'
