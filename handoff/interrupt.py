"""Per-thread interrupt flag.

Python threads cannot be interrupted from the outside, so each worker gets an
`InterruptFlag`. Anyone may call `interrupt()`; the worker notices it at its
next suspension point:

- while waiting inside `SharedBuffer.put` / `SharedBuffer.take`, the buffer
  registers a waker so the interrupt also wakes the condition wait
- while pausing, `sleep()` returns early

Either way the worker sees `Interrupted` and the flag is cleared again, so one
`interrupt()` call interrupts one suspension. `cancel()` is the sticky form:
every later suspension is interrupted too.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from .errors import Interrupted

Waker = Callable[[], None]


class InterruptFlag:
    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._wakers: list[Waker] = []
        self._cancelled = False

    def interrupt(self) -> None:
        """Interrupt the owning thread at (or before) its next suspension."""
        # Set first: a waiter that registers after the copy below still sees it.
        self._event.set()
        with self._lock:
            wakers = list(self._wakers)
        for wake in wakers:
            wake()

    def cancel(self) -> None:
        """Interrupt the current and every later suspension."""
        with self._lock:
            self._cancelled = True
            self._event.set()
        self.interrupt()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def is_set(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        """Raise `Interrupted` if an interrupt is pending (clearing it unless cancelled)."""
        if self._event.is_set():
            self._consume()

    def sleep(self, seconds: float) -> None:
        """Sleep for `seconds`, raising `Interrupted` if interrupted meanwhile."""
        if seconds < 0:
            raise ValueError("seconds must be >= 0")
        if self._event.wait(seconds):
            self._consume()

    def _consume(self) -> None:
        with self._lock:
            if not self._cancelled:
                self._event.clear()
        raise Interrupted()

    @contextmanager
    def waking(self, wake: Waker) -> Iterator[None]:
        """Call `wake` on every `interrupt()` while the block runs."""
        with self._lock:
            self._wakers.append(wake)
        try:
            yield
        finally:
            with self._lock:
                self._wakers.remove(wake)
