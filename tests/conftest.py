"""Shared fixtures."""

import pytest

from device_print_service.config import Settings
from device_print_service.events import EventLog
from device_print_service.manager import PrinterManager


class ManualScheduler:
    """Collects ``call_later`` requests and runs them when told to."""

    def __init__(self):
        self.now = 0.0
        self._pending = []

    def call_later(self, delay, callback, *args):
        self._pending.append((self.now + delay, len(self._pending), callback, args))

    @property
    def pending(self):
        return len(self._pending)

    def run_next(self):
        """Fire the earliest pending callback. Returns False if none."""
        if not self._pending:
            return False
        self._pending.sort(key=lambda entry: (entry[0], entry[1]))
        when, _, callback, args = self._pending.pop(0)
        self.now = when
        callback(*args)
        return True

    def cancel_all(self):
        self._pending.clear()

    def run_all(self, limit=1000):
        for _ in range(limit):
            if not self.run_next():
                return
        raise AssertionError('scheduler did not settle')


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def events():
    return EventLog(history_limit=100)


@pytest.fixture()
def settings():
    return Settings(
        network_print_delay=1.0,
        usb_print_delay=0.0,
        print_queue_max=0,
        job_history_limit=50,
        event_history_limit=200,
        default_printers=('NETWORK', 'USB'),
    )


@pytest.fixture()
def manager(events, scheduler, settings):
    manager = PrinterManager(events=events, scheduler=scheduler, settings=settings)
    manager.add_default_printers()
    return manager


@pytest.fixture()
def event_kinds(events):
    """(kind, document) pairs from the shared event log, optionally filtered."""

    def kinds(*wanted):
        return [
            (e.kind, e.document) for e in events.history()
            if not wanted or e.kind in wanted
        ]

    return kinds
