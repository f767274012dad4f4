from __future__ import annotations

# Diagnostic trace stream.
#
# Both worker threads and the coordinator write here. Lines go to stderr by
# default (stdout would interleave differently with the traces of the two
# threads), one `print` per line under a lock so two threads never split a line.

import sys
import threading
from typing import TextIO


class Tracer:
    """Thread-safe line writer."""

    def __init__(self, stream: TextIO | None = None, *, record: bool = False) -> None:
        # None means "whatever sys.stderr is at write time" (plays well with
        # pytest's capture and with callers that redirect stderr).
        self._stream = stream
        self._lock = threading.Lock()
        self._record = record
        self._lines: list[str] = []

    def emit(self, line: str) -> None:
        with self._lock:
            if self._record:
                self._lines.append(line)
            print(line, file=self._stream or sys.stderr, flush=True)

    @property
    def lines(self) -> list[str]:
        """Copy of the recorded lines (empty unless `record=True`)."""
        with self._lock:
            return list(self._lines)
