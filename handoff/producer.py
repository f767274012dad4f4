from __future__ import annotations

# Producer loop.
#
# A fixed number of iterations, each one:
# - publish the current timestamp into the shared buffer (blocks while full)
# - pause outside the lock to emulate a slow producer, so the consumer can
#   take the item meanwhile

import time
from typing import TYPE_CHECKING, Callable

from . import messages
from .buffer import SharedBuffer
from .errors import InterruptReport, Interrupted
from .interrupt import InterruptFlag

if TYPE_CHECKING:
    from .trace import Tracer

Clock = Callable[[], str]


def current_timestamp() -> str:
    """Wall-clock time in milliseconds since the epoch, as text."""
    return str(time.time_ns() // 1_000_000)


def run_producer(
    buffer: SharedBuffer,
    *,
    iterations: int = 20,
    pause_seconds: float = 2.0,
    clock: Clock = current_timestamp,
    tracer: Tracer | None = None,
    interrupt: InterruptFlag | None = None,
) -> None:
    if iterations < 0:
        raise ValueError("iterations must be >= 0")
    if pause_seconds < 0:
        raise ValueError("pause_seconds must be >= 0")

    tracer = tracer or buffer.tracer
    # Pausing always goes through a flag so an interrupt can cut it short.
    flag = interrupt or InterruptFlag()

    i = 0
    while i < iterations:
        buffer.put(clock(), role=messages.PRODUCER, interrupt=flag)
        try:
            flag.sleep(pause_seconds)
        except Interrupted:
            if flag.cancelled:
                raise
            # The pause is abandoned for this iteration only.
            tracer.emit(InterruptReport(messages.PRODUCER, "pausing").to_line())
        i += 1
