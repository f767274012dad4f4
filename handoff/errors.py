"""Interruption errors and reports.

We keep interruption handling consistent across buffer, producer and consumer.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Interrupted(Exception):
    """Raised when a waiting or pausing thread is interrupted."""


class InterruptPolicy(str, enum.Enum):
    """What a blocked `put`/`take` does when its thread is interrupted."""

    # Log and go back to waiting on the predicate.
    CONTINUE = "continue"
    # Raise `Interrupted` to the caller.
    ABORT = "abort"


@dataclass(frozen=True)
class InterruptReport:
    role: str
    action: str
    target: str | None = None

    def to_line(self) -> str:
        line = f"{self.role}: interrupted while {self.action}"
        if self.target is not None:
            line += f" on {self.target}"
        return line
