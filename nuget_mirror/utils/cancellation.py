"""
Run-scoped cancellation.

One CancellationToken is created per run and handed to every step that can
block on the network. Setting it never interrupts a publish that is already
in flight; steps check it only at their safe points.
"""

import threading
from typing import Optional

from ..exceptions import MirrorCancelled


class CancellationToken:
    """Thread-safe flag that an operator (or a signal handler) can raise."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "Cancelled by operator") -> None:
        """Request cancellation. Safe to call more than once."""
        if not self._event.is_set():
            self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def raise_if_cancelled(self, version: Optional[str] = None) -> None:
        """Raise MirrorCancelled if cancellation has been requested."""
        if self._event.is_set():
            raise MirrorCancelled(self._reason or "Cancelled", version=version)

    def sleep(self, seconds: float) -> bool:
        """
        Wait up to ``seconds``, waking early on cancellation.

        Returns:
            True if cancellation was requested while waiting
        """
        return self._event.wait(timeout=seconds)


__all__ = ["CancellationToken"]
