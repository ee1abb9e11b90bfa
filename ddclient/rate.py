"""Per-client holder for the most recently observed rate-limit snapshot."""

from __future__ import annotations

import threading

from ddclient.models import Rate


class RateState:
    """Thread-safe single-value cell holding the latest :class:`Rate`.

    Writes replace the whole value; there is no merging of partial header
    sets. The lock is only held for the in-memory swap, never across I/O.
    """

    def __init__(self) -> None:
        self._rate: Rate | None = None
        self._lock = threading.Lock()

    def set(self, rate: Rate | None) -> None:
        with self._lock:
            self._rate = rate

    def get(self) -> Rate | None:
        """Return the current snapshot (an immutable copy) or *None*."""
        with self._lock:
            return self._rate
