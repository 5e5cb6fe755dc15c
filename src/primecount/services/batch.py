from __future__ import annotations
import threading
from dataclasses import dataclass
from typing import Callable

import structlog

from ..core.counters import Counters
from ..core.models import Range
from ..core.oracle import is_prime

log = structlog.get_logger(__name__)


@dataclass
class BatchTask:
    range: Range
    counters: Counters
    span: int                          # LAST - FIRST of the whole run
    report: Callable[[int], object]

    def scan(self) -> int:
        local = 0
        for i in self.range:
            if is_prime(i):
                local += 1
        return local

    def __call__(self) -> None:
        local = self.scan()
        global_primes, global_processed = self.counters.merge(local, self.range.size)
        log.debug(
            "batch_merged",
            first=self.range.first,
            last=self.range.last,
            primes=local,
            processed=global_processed,
            thread=threading.current_thread().name,
        )
        # sizes of all batches sum to span, so only the last merge can match
        if global_processed == self.span:
            self.report(global_primes)
