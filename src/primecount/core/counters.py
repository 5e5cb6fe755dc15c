from __future__ import annotations
import threading
from typing import Tuple


class Counters:
    """
    Aggregation state shared by every batch of one run.

    Both counters only move through increment_* or merge(), which read and
    write under one lock and hand back post-update values. Completion
    detection relies on exactly one caller observing the terminal `processed`
    value, together with the primes total from the same critical section.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._processed = 0
        self._primes = 0

    def increment_primes(self, delta: int) -> int:
        with self._lock:
            self._primes += delta
            return self._primes

    def increment_processed(self, delta: int) -> int:
        with self._lock:
            self._processed += delta
            return self._processed

    def merge(self, primes: int, processed: int) -> Tuple[int, int]:
        """
        Fold one batch in under a single lock acquisition and return
        (global_primes, global_processed). Whoever sees processed reach the
        span also sees every other batch's primes.
        """
        with self._lock:
            self._primes += primes
            self._processed += processed
            return self._primes, self._processed

    def snapshot(self) -> Tuple[int, int]:
        """(processed, primes) as seen at one instant."""
        with self._lock:
            return self._processed, self._primes
