"""
LogEventBus — in-process, ordered pub/sub for installer log lines.

publish() delivers synchronously to every subscriber in subscription order,
so receivers observe messages in exactly the order they were published.
"""

import logging
import threading
from typing import Callable

__all__ = ["LogEventBus"]

logger = logging.getLogger(__name__)

LogHandler = Callable[[str], None]


class LogEventBus:
    """Publish log messages to any number of subscribers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._handlers: dict[int, LogHandler] = {}
        self._next_id = 0

    def subscribe(self, handler: LogHandler) -> Callable[[], None]:
        """Register *handler*; return a callable that unregisters it."""
        with self._lock:
            sub_id = self._next_id
            self._next_id += 1
            self._handlers[sub_id] = handler

        def unsubscribe() -> None:
            with self._lock:
                self._handlers.pop(sub_id, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)

    def publish(self, message: str) -> None:
        with self._lock:
            handlers = [self._handlers[k] for k in sorted(self._handlers)]
        logger.debug("log event: %s", message)
        for handler in handlers:
            try:
                handler(message)
            except Exception as exc:  # noqa: BLE001
                logger.error("log event handler error: %s", exc)
