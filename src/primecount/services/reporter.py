from __future__ import annotations
import sys
import threading
from typing import List, Optional, TextIO


class Reporter:
    """
    Writes the final `<n> primes.` line. One Reporter belongs to one run;
    a second report means the completion check fired twice.
    """

    SUFFIX = " primes."

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.lines: List[str] = []
        self.value: Optional[int] = None
        self._lock = threading.Lock()

    def __call__(self, primes: int) -> str:
        line = f"{primes}{self.SUFFIX}"
        with self._lock:
            if self.lines:
                raise RuntimeError(f"duplicate_report:{line} after {self.lines[0]}")
            self.lines.append(line)
            self.value = primes
            out = self.stream or sys.stdout
            out.write(line + "\n")
            out.flush()
        return line

    @property
    def reported(self) -> bool:
        return bool(self.lines)
