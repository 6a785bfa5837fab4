"""Explicit cancellation passed through every store operation.

Operations accept ``ctx: CancelToken | None``.  ``None`` means the call
cannot be cancelled.  Long walks (``list``) check the token between
directory entries; everything else checks once on entry.
"""

from __future__ import annotations

import threading
import time

from todoctl.domain.errors import OperationCancelled


class CancelToken:
    """Thread-safe cancellation flag with an optional monotonic deadline."""

    def __init__(self, *, deadline: float | None = None) -> None:
        self._event = threading.Event()
        self.deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancelToken:
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def raise_if_cancelled(self, operation: str = "") -> None:
        if self.cancelled:
            reason = "deadline exceeded" if not self._event.is_set() else "operation cancelled"
            raise OperationCancelled(reason, operation=operation or None)


def check(ctx: CancelToken | None, operation: str = "") -> None:
    """Raise :class:`OperationCancelled` if *ctx* has fired; no-op for ``None``."""
    if ctx is not None:
        ctx.raise_if_cancelled(operation)
