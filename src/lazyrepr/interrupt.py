"""
Cooperative cancellation.

Long-running evaluation cannot be pre-empted, so the evaluator and the
printer poll a CancellationToken at each step. Another thread (or a signal
handler) calls trigger() to make the next poll raise Interrupted.
"""

import threading

from .errors import Interrupted


class CancellationToken:
    """A thread-safe flag polled by check()."""

    def __init__(self):
        self._event = threading.Event()

    def trigger(self) -> None:
        """Request cancellation."""
        self._event.set()

    def clear(self) -> None:
        """Reset the token so it can be reused for another run."""
        self._event.clear()

    def is_set(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        """Raise Interrupted if cancellation was requested."""
        if self._event.is_set():
            raise Interrupted()
