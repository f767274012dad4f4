from __future__ import annotations

# Coordinator.
#
# Builds one SharedBuffer and runs the two loops against it, each in its own
# thread:
# - producer (started first, so it usually fills the buffer before the
#   consumer's first wait; nothing depends on that order)
# - consumer
#
# Then joins both without a timeout and emits `Finished` exactly once. Under
# the ABORT policy a worker whose wait was interrupted stops early and cancels
# its peer, so both threads still end.

import threading
from dataclasses import dataclass
from typing import Callable

from . import messages
from .buffer import SharedBuffer
from .consumer import run_consumer
from .errors import InterruptPolicy, Interrupted
from .interrupt import InterruptFlag
from .producer import Clock, current_timestamp, run_producer
from .trace import Tracer


@dataclass
class Worker:
    name: str
    thread: threading.Thread
    interrupt: InterruptFlag


@dataclass
class HandoffRun:
    """A started hand-off: the buffer, both workers, and the trace they share."""

    buffer: SharedBuffer
    producer: Worker
    consumer: Worker
    tracer: Tracer
    on_interrupt: InterruptPolicy = InterruptPolicy.CONTINUE
    finished: bool = False

    def join(self) -> None:
        """Wait for both workers, then emit `Finished` (once)."""
        if self.finished:
            return
        for w in (self.producer, self.consumer):
            try:
                w.thread.join()
            except KeyboardInterrupt:
                if self.on_interrupt is InterruptPolicy.ABORT:
                    raise
                # Move on to the next worker; this one is left running.
                self.tracer.emit(f"Coordinator: interrupted while joining {w.name}")
        self.finished = True
        self.tracer.emit(messages.FINISHED)


def start_handoff(
    *,
    iterations: int = 20,
    pause_seconds: float = 2.0,
    buffer_name: str = "sb",
    on_interrupt: InterruptPolicy = InterruptPolicy.CONTINUE,
    clock: Clock = current_timestamp,
    tracer: Tracer | None = None,
) -> HandoffRun:
    """Start producer and consumer threads and return without joining them."""
    if iterations < 0:
        raise ValueError("iterations must be >= 0")
    if pause_seconds < 0:
        raise ValueError("pause_seconds must be >= 0")

    policy = InterruptPolicy(on_interrupt)
    tracer = tracer or Tracer()
    buffer = SharedBuffer(name=buffer_name, tracer=tracer, on_interrupt=policy)

    producer_flag, consumer_flag = InterruptFlag(), InterruptFlag()

    def spawn(name: str, role: str, flag: InterruptFlag, peer: InterruptFlag, loop: Callable[[], None]) -> Worker:
        def target() -> None:
            try:
                loop()
            except Interrupted:
                # Stop the peer too; it would block on the slot forever.
                tracer.emit(messages.aborted(role))
                peer.cancel()

        thread = threading.Thread(target=target, name=name)
        return Worker(name=name, thread=thread, interrupt=flag)

    producer = spawn(
        "producer",
        messages.PRODUCER,
        producer_flag,
        consumer_flag,
        lambda: run_producer(
            buffer,
            iterations=iterations,
            pause_seconds=pause_seconds,
            clock=clock,
            tracer=tracer,
            interrupt=producer_flag,
        ),
    )
    consumer = spawn(
        "consumer",
        messages.CONSUMER,
        consumer_flag,
        producer_flag,
        lambda: run_consumer(buffer, iterations=iterations, tracer=tracer, interrupt=consumer_flag),
    )

    producer.thread.start()
    consumer.thread.start()

    return HandoffRun(
        buffer=buffer,
        producer=producer,
        consumer=consumer,
        tracer=tracer,
        on_interrupt=policy,
    )


def run_handoff(
    *,
    iterations: int = 20,
    pause_seconds: float = 2.0,
    buffer_name: str = "sb",
    on_interrupt: InterruptPolicy = InterruptPolicy.CONTINUE,
    clock: Clock = current_timestamp,
    tracer: Tracer | None = None,
) -> HandoffRun:
    """Run a complete hand-off and return it once `Finished` was emitted."""
    run = start_handoff(
        iterations=iterations,
        pause_seconds=pause_seconds,
        buffer_name=buffer_name,
        on_interrupt=on_interrupt,
        clock=clock,
        tracer=tracer,
    )
    run.join()
    return run
