from __future__ import annotations

from ..core.models import ConfigurationError, Strategy
from .base import Executor
from .deferred import DeferredExecutor, EventLoopExecutor
from .immediate import ImmediateExecutor
from .threaded import WorkerPoolExecutor


def make_executor(strategy: str, workers: int = 4) -> Executor:
    try:
        kind = Strategy(strategy)
    except ValueError:
        raise ConfigurationError(f"unknown strategy: {strategy!r}") from None
    if kind is Strategy.IMMEDIATE:
        return ImmediateExecutor()
    if kind is Strategy.DEFERRED:
        return DeferredExecutor()
    if kind is Strategy.EVENT_LOOP:
        return EventLoopExecutor()
    return WorkerPoolExecutor(workers=workers)
