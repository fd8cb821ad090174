"""
LogStream — append-only, receipt-ordered log fed by an external event source.

The stream subscribes once, keeps the whole session history (no dedupe,
filtering or truncation) and calls on_append after each append so views
can scroll to the newest line.
"""

import logging
from typing import Callable, Optional

from .backend import LogHandler, Unsubscribe

__all__ = ["LogStream"]

logger = logging.getLogger(__name__)


class LogStream:
    """Ordered message history for one engine instance."""

    def __init__(self, on_append: Optional[Callable[[str], None]] = None) -> None:
        self._entries:     list[str]              = []
        self._unsubscribe: Optional[Unsubscribe]  = None
        self._attached:    bool                   = False
        self._on_append:   Optional[Callable[[str], None]] = on_append

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, message: str) -> None:
        """Append *message* and notify the on_append callback."""
        message = str(message)
        self._entries.append(message)
        if self._on_append is None:
            return
        try:
            self._on_append(message)
        except Exception:  # noqa: BLE001
            logger.exception("Log observer failed")

    def _on_event(self, message: str) -> None:
        # Events delivered after detach() are dropped.
        if self._attached:
            self.append(message)

    def attach(self, subscribe: Callable[[LogHandler], Unsubscribe]) -> None:
        """
        Subscribe to the event source.

        Raises:
            RuntimeError: the stream is already attached.
        """
        if self._attached:
            raise RuntimeError("LogStream is already subscribed")
        self._attached = True
        try:
            self._unsubscribe = subscribe(self._on_event)
        except Exception:
            self._attached = False
            raise

    def detach(self) -> None:
        """Release the subscription; safe to call more than once."""
        self._attached = False
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is None:
            return
        try:
            unsubscribe()
        except Exception:  # noqa: BLE001
            logger.exception("Log event unsubscribe failed")
