"""Cancel-and-rearm timer on the running event loop."""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RestartableTimer:
    """At most one pending callback; ``restart`` pushes the deadline out.

    Must be used from inside a running event loop.

    Example:
        timer = RestartableTimer(1.0, save)
        timer.restart()   # armed for 1s from now
        timer.restart()   # previous arm cancelled, 1s from now again
    """

    def __init__(self, delay: float, callback: Callable[[], None], name: str = "timer") -> None:
        self.delay = delay
        self.name = name
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def restart(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        logger.debug(f"{self.name} fired after {self.delay}s")
        self._callback()
