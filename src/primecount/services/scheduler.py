from __future__ import annotations
from typing import Callable, Iterator

import structlog

from ..core.counters import Counters
from ..core.models import ConfigurationError, Range, RunConfig
from ..executor.base import Executor
from .batch import BatchTask

log = structlog.get_logger(__name__)


def partition(first: int, last: int, batch_size: int) -> Iterator[Range]:
    """
    Lazily tile [first, last) into contiguous ranges of batch_size;
    the final range is clipped to `last`.
    """
    if batch_size <= 0:
        raise ConfigurationError(f"batch_size must be >= 1, got {batch_size}")
    i = first
    while i < last:
        yield Range(i, min(i + batch_size, last))
        i += batch_size


class Scheduler:
    def __init__(self, config: RunConfig, counters: Counters, report: Callable[[int], object]):
        self.config = config.validate()
        self.counters = counters
        self.report = report
        self.dispatched = 0

    def tasks(self) -> Iterator[BatchTask]:
        c = self.config
        for r in partition(c.first, c.last, c.batch_size):
            yield BatchTask(range=r, counters=self.counters, span=c.span, report=self.report)

    def dispatch(self, executor: Executor) -> int:
        """Submit every batch as soon as it is built. Returns the batch count."""
        for task in self.tasks():
            executor.submit(task)
            self.dispatched += 1
            log.debug("batch_dispatched", first=task.range.first, last=task.range.last)
        return self.dispatched
