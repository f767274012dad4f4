from __future__ import annotations

# The shared single-slot buffer.
#
# This is a monitor: one lock, one condition, and predicate-wait loops.
# - `put` waits while the slot is full, stores, notifies.
# - `take` waits while the slot is empty, clears, notifies.
#
# Waiters always re-check their predicate after waking. `notify_all` wakes
# both sides (and any interrupted waiter), so a wake-up alone proves nothing.

import threading
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Callable, ContextManager

from . import messages
from .errors import Interrupted, InterruptPolicy, InterruptReport
from .interrupt import InterruptFlag
from .trace import Tracer


@dataclass(frozen=True)
class BufferStats:
    """Counters kept under the buffer lock."""

    puts: int
    takes: int
    occupancy: int
    max_occupancy: int
    interrupts: int


class SharedBuffer:
    """Capacity-one hand-off slot with blocking `put` / `take`."""

    def __init__(
        self,
        *,
        name: str = "sb",
        tracer: Tracer | None = None,
        on_interrupt: InterruptPolicy = InterruptPolicy.CONTINUE,
    ) -> None:
        if not name:
            raise ValueError("name must not be empty")
        self.name = name
        self.on_interrupt = InterruptPolicy(on_interrupt)
        self.tracer = tracer or Tracer()

        self._cond = threading.Condition()
        self._slot: str | None = None
        # Items stored and not yet taken; the protocol keeps this at 0 or 1.
        self._held = 0

        self._puts = 0
        self._takes = 0
        self._max_occupancy = 0
        self._interrupts = 0

    # -------------------- hand-off --------------------

    def put(self, item: str, *, role: str | None = None, interrupt: InterruptFlag | None = None) -> None:
        """Block until the slot is empty, then store `item`."""
        if item is None:
            raise ValueError("item must not be None")
        try:
            with self._cond:
                self._trace(role, messages.locked)
                with self._interruptible(interrupt):
                    while self._slot is not None:
                        self._wait(role, interrupt)
                self._store(item)
                self._cond.notify_all()
        finally:
            self._trace(role, messages.unlocking)

    def take(
        self,
        *,
        role: str | None = None,
        interrupt: InterruptFlag | None = None,
        report: Callable[[str], None] | None = None,
    ) -> str:
        """Block until the slot holds an item, then remove and return it.

        `report` is called with the item while the lock is still held, so its
        output lands between the `locked` and `unlocking` trace lines.
        """
        try:
            with self._cond:
                self._trace(role, messages.locked)
                with self._interruptible(interrupt):
                    while self._slot is None:
                        self._wait(role, interrupt)
                item = self._drain()
                self._cond.notify_all()
                if report is not None:
                    report(item)
                return item
        finally:
            self._trace(role, messages.unlocking)

    # -------------------- observation --------------------

    def __len__(self) -> int:
        with self._cond:
            return 0 if self._slot is None else 1

    def peek_occupied(self) -> bool:
        """True if an item is waiting to be taken."""
        with self._cond:
            return self._slot is not None

    def stats(self) -> BufferStats:
        with self._cond:
            return BufferStats(
                puts=self._puts,
                takes=self._takes,
                occupancy=self._held,
                max_occupancy=self._max_occupancy,
                interrupts=self._interrupts,
            )

    # -------------------- internals (lock held) --------------------

    def _store(self, item: str) -> None:
        self._slot = item
        self._held += 1
        self._puts += 1
        self._max_occupancy = max(self._max_occupancy, self._held)

    def _drain(self) -> str:
        item = self._slot
        if item is None:
            raise RuntimeError("take from an empty slot")
        self._slot = None
        self._held -= 1
        self._takes += 1
        return item

    def _wait(self, role: str | None, interrupt: InterruptFlag | None) -> None:
        try:
            if interrupt is not None:
                interrupt.check()
            self._cond.wait()
            if interrupt is not None:
                interrupt.check()
        except Interrupted:
            self._interrupts += 1
            # A cancelled flag aborts under either policy.
            if self.on_interrupt is InterruptPolicy.ABORT or (interrupt is not None and interrupt.cancelled):
                raise
            who = role or threading.current_thread().name
            self.tracer.emit(InterruptReport(who, "waiting", self.name).to_line())

    def _interruptible(self, interrupt: InterruptFlag | None) -> ContextManager[None]:
        if interrupt is None:
            return nullcontext()
        return interrupt.waking(self._wake)

    def _wake(self) -> None:
        with self._cond:
            self._cond.notify_all()

    def _trace(self, role: str | None, line) -> None:
        if role is not None:
            self.tracer.emit(line(role, self.name))
