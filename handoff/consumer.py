from __future__ import annotations

# Consumer loop: withdraw an item and report it, a fixed number of times.
# There is no pause; the consumer is paced by the producer. The item is
# reported while the buffer lock is still held.

from typing import TYPE_CHECKING

from . import messages
from .buffer import SharedBuffer
from .interrupt import InterruptFlag

if TYPE_CHECKING:
    from .trace import Tracer


def run_consumer(
    buffer: SharedBuffer,
    *,
    iterations: int = 20,
    tracer: Tracer | None = None,
    interrupt: InterruptFlag | None = None,
) -> None:
    if iterations < 0:
        raise ValueError("iterations must be >= 0")

    tracer = tracer or buffer.tracer

    def report(value: str) -> None:
        tracer.emit(messages.item(value, buffer.name))

    j = 0
    while j < iterations:
        buffer.take(role=messages.CONSUMER, interrupt=interrupt, report=report)
        j += 1
