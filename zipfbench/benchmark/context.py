"""Cancellation and deadline signal shared between a caller and running agents."""
from __future__ import annotations

import threading
import time
from typing import Optional

CANCELLED = "cancelled"
DEADLINE_EXCEEDED = "deadline exceeded"


class RunContext:
    """Thread-safe stop signal with an optional deadline.

    Drivers poll :meth:`done` at the top of every iteration, and the same
    object is handed to the query client untouched.
    """

    def __init__(self, timeout_s: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._reason: Optional[str] = None
        self.deadline: Optional[float] = None
        if timeout_s is not None:
            self.deadline = time.monotonic() + timeout_s

    def cancel(self, reason: str = CANCELLED) -> None:
        if not self._cancelled.is_set():
            self._reason = reason
            self._cancelled.set()

    def done(self) -> bool:
        if self._cancelled.is_set():
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self.cancel(DEADLINE_EXCEEDED)
            return True
        return False

    @property
    def reason(self) -> Optional[str]:
        """Why the context stopped, or ``None`` while it is still live."""

        return self._reason if self.done() else None
