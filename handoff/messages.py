"""Diagnostic line helpers.

We keep line construction in one place so the buffer, the loops and the tests
agree on the wording.

Lines emitted during a run (buffer named `sb`):
- `Producer: locked sb`
- `Producer: unlocking sb`
- `Consumer: locked sb`
- `sb: <value>`
    The transferred item, reported by the consumer.
- `Consumer: unlocking sb`
- `Finished`
    Emitted exactly once, after both threads were joined.
"""

from __future__ import annotations

PRODUCER = "Producer"
CONSUMER = "Consumer"
FINISHED = "Finished"


def locked(role: str, buffer_name: str = "sb") -> str:
    return f"{role}: locked {buffer_name}"


def unlocking(role: str, buffer_name: str = "sb") -> str:
    return f"{role}: unlocking {buffer_name}"


def item(value: str, buffer_name: str = "sb") -> str:
    """The line the consumer emits for each item it withdrew."""
    return f"{buffer_name}: {value}"


def parse_item(line: str, buffer_name: str = "sb") -> str | None:
    """Return the value carried by an item line, or None for any other line."""
    prefix = f"{buffer_name}: "
    if not line.startswith(prefix):
        return None
    return line[len(prefix):]


def aborted(role: str) -> str:
    """Emitted when a worker stops early because its wait was aborted."""
    return f"{role}: aborted"
