"""Cooperative cancellation driven by interrupt signals.

The traversal engine polls a ``CancellationToken`` at well-defined points.
``listen_for_interrupt`` installs SIGINT/SIGTERM handlers that only flip the
token, so in-flight filesystem calls are never interrupted mid-way.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import threading
from collections.abc import Iterator

logger = logging.getLogger(__name__)

_INTERRUPT_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGINT", None), getattr(signal, "SIGTERM", None)) if sig is not None
)


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@contextlib.contextmanager
def listen_for_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """Route interrupt signals to ``token`` for the duration of the block.

    Previous handlers are restored on exit. Outside the main thread signal
    handlers cannot be installed; the token is still yielded but only
    cancels when ``cancel`` is called directly.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    def _handler(signum: int, _frame: object) -> None:
        logger.debug("received signal %d, cancelling traversal", signum)
        token.cancel()

    previous: dict[int, object] = {}
    try:
        for sig in _INTERRUPT_SIGNALS:
            previous[sig] = signal.signal(sig, _handler)
        yield token
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
