"""
Debouncer: timer-reset-on-input primitive for asyncio, dood!
"""

import asyncio
import logging
from typing import Any, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class Debouncer(Generic[T]):
    """Collapse bursts of pushed values into settled values, dood!

    Every ``push()`` (re)starts a quiet-window timer on the running event loop.
    When the window elapses without another push, the last pushed value is
    *settled*. With ``removeDuplicates`` a settled value equal to the previously
    settled one is dropped (comparison is against last emitted value, not last
    pushed one).

    Settled values are consumed as a lazy async iterator, which ends after
    ``close()``:

        >>> debouncer = Debouncer[str](0.5)
        >>> debouncer.push("N")
        >>> debouncer.push("Ne")
        >>> debouncer.push("New")
        >>> async for value in debouncer:
        ...     print(value)  # "New", once
    """

    def __init__(self, delay: float, *, removeDuplicates: bool = True, name: str = "debouncer"):
        """
        Args:
            delay: Quiet window in seconds
            removeDuplicates: Drop settled value equal to previously settled one (default: True)
            name: Name used in log messages
        """
        if delay < 0:
            raise ValueError(f"Debounce delay must be non-negative, got {delay}")
        self.delay = delay
        self.removeDuplicates = removeDuplicates
        self.name = name

        self._timer: Optional[asyncio.TimerHandle] = None
        self._settled: asyncio.Queue[Any] = asyncio.Queue()
        self._hasEmitted = False
        self._lastEmitted: Optional[T] = None
        self._closed = False

    @property
    def pending(self) -> bool:
        """Whether quiet-window timer is running"""
        return self._timer is not None

    @property
    def idle(self) -> bool:
        """No running timer and no settled value waiting for consumer"""
        return self._timer is None and self._settled.empty()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def lastEmitted(self) -> Optional[T]:
        return self._lastEmitted

    def push(self, value: T) -> None:
        """Push new input value and restart quiet window.

        Must be called from running event loop. Pushes after ``close()`` are ignored.
        """
        if self._closed:
            logger.debug(f"{self.name}: push after close ignored")
            return

        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._settle, value)

    def _settle(self, value: T) -> None:
        self._timer = None
        if self._closed:
            return

        if self.removeDuplicates and self._hasEmitted and value == self._lastEmitted:
            logger.debug(f"{self.name}: settled value {value!r} is same as last emitted, dropping")
            return

        self._hasEmitted = True
        self._lastEmitted = value
        self._settled.put_nowait(value)

    def close(self) -> None:
        """Cancel pending timer, drop unconsumed settled values and end iteration"""
        if self._closed:
            return
        self._closed = True

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        while not self._settled.empty():
            self._settled.get_nowait()
        self._settled.put_nowait(_CLOSED)
        logger.debug(f"{self.name}: closed")

    def __aiter__(self) -> "Debouncer[T]":
        return self

    async def __anext__(self) -> T:
        item = await self._settled.get()
        if item is _CLOSED:
            # Keep iteration finished for any other consumer
            self._settled.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item
