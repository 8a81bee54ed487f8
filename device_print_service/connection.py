"""
Connection State
================

Tracks which client machines hold a printer's connection slot.

A network printer is shared: any number of clients may be attached and
attach/detach calls are idempotent. A USB printer is an exclusive link with
two states, ``Unconnected`` and ``Connected(client_id)``; a rejected call
never changes the state.
"""

import threading
from typing import Optional, Set, Tuple

from .errors import AlreadyConnectedError, NotConnectedError, WrongClientError


class SharedConnectionState:
    """Unbounded set of connected clients (network printers)."""

    def __init__(self):
        self._clients: Set[str] = set()
        self._lock = threading.Lock()

    def connect(self, client_id: str) -> bool:
        with self._lock:
            self._clients.add(client_id)
        return True

    def disconnect(self, client_id: str) -> bool:
        # Absent ids are fine
        with self._lock:
            self._clients.discard(client_id)
        return True

    def is_connected(self, client_id: str) -> bool:
        with self._lock:
            return client_id in self._clients

    @property
    def clients(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._clients))

    def __len__(self):
        with self._lock:
            return len(self._clients)


class ExclusiveConnectionState:
    """At most one connected client (USB printers)."""

    def __init__(self):
        self._holder: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def holder(self) -> Optional[str]:
        return self._holder

    @property
    def is_connected(self) -> bool:
        return self._holder is not None

    def connect(self, client_id: str) -> bool:
        """Unconnected -> Connected(client_id)."""
        if not client_id:
            raise ValueError('client_id required to connect')
        with self._lock:
            if self._holder is not None:
                raise AlreadyConnectedError(
                    'Printer is already connected to another computer',
                    {'holder': self._holder, 'requested_by': client_id},
                )
            self._holder = client_id
        return True

    def disconnect(self, client_id: Optional[str] = None) -> str:
        """
        Connected(x) -> Unconnected.

        Args:
            client_id: Requesting client. Omitted (or empty) detaches
                whoever holds the link.

        Returns:
            The client id that was detached
        """
        with self._lock:
            if self._holder is None:
                raise NotConnectedError('Printer is not connected to any computer')
            if client_id and client_id != self._holder:
                raise WrongClientError(
                    'Attempting to disconnect from a different computer',
                    {'holder': self._holder, 'requested_by': client_id},
                )
            previous, self._holder = self._holder, None
        return previous
