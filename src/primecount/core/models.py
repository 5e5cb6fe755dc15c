from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ConfigurationError(ValueError):
    """Raised before scheduling when a run is configured with bad bounds."""


class Strategy(str, Enum):
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    EVENT_LOOP = "event_loop"
    THREADS = "threads"


@dataclass(frozen=True)
class Range:
    first: int
    last: int  # exclusive

    def __post_init__(self):
        if self.first > self.last:
            raise ValueError(f"range_inverted:[{self.first},{self.last})")

    @property
    def size(self) -> int:
        return self.last - self.first

    def __iter__(self):
        return iter(range(self.first, self.last))


@dataclass(frozen=True)
class RunConfig:
    first: int = 2
    last: int = 1_000_000
    batch_size: int = 1000
    strategy: str = Strategy.IMMEDIATE.value
    workers: int = 4

    @property
    def span(self) -> int:
        return self.last - self.first

    def validate(self) -> "RunConfig":
        if self.batch_size <= 0:
            raise ConfigurationError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.first < 0:
            raise ConfigurationError(f"first must be non-negative, got {self.first}")
        if self.first >= self.last:
            raise ConfigurationError(f"first must be < last, got [{self.first},{self.last})")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        try:
            Strategy(self.strategy)
        except ValueError:
            raise ConfigurationError(f"unknown strategy: {self.strategy!r}") from None
        return self


@dataclass
class RunResult:
    primes: int
    processed: int
    batches: int
    strategy: str
    elapsed_ms: int

    @property
    def report(self) -> str:
        return f"{self.primes} primes."
