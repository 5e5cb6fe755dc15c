from __future__ import annotations
import time
from typing import Callable, List, Optional, TextIO

import structlog

from ..core.counters import Counters
from ..core.models import RunConfig, RunResult
from ..core.utils import elapsed_ms, new_run_id
from ..executor.base import Executor
from ..executor.factory import make_executor
from .reporter import Reporter
from .run_store import Run, RunStore
from .scheduler import Scheduler

log = structlog.get_logger(__name__)


class PrimeCountService:
    """
    Wires one run together: fresh Counters + Reporter, a Scheduler over the
    configured range, and the executor for the configured strategy.
    With a RunStore attached, submit()/run() also keep a record per run.
    """

    def __init__(
        self,
        store: Optional[RunStore] = None,
        stream: Optional[TextIO] = None,
        executor_factory: Callable[[str, int], Executor] = make_executor,
    ):
        self.store = store
        self.stream = stream
        self.executor_factory = executor_factory

    def count(self, config: RunConfig) -> RunResult:
        config.validate()
        executor = self.executor_factory(config.strategy, config.workers)
        counters = Counters()
        reporter = Reporter(self.stream)
        scheduler = Scheduler(config, counters, reporter)

        log.info(
            "run_started", first=config.first, last=config.last,
            batch_size=config.batch_size, strategy=config.strategy,
        )
        start = time.perf_counter()
        try:
            batches = scheduler.dispatch(executor)
            executor.join()
        finally:
            executor.shutdown()

        processed, primes = counters.snapshot()
        if not reporter.reported:
            raise RuntimeError(f"run_incomplete:processed={processed} span={config.span}")

        res = RunResult(
            primes=reporter.value, processed=processed, batches=batches,
            strategy=config.strategy, elapsed_ms=elapsed_ms(start),
        )
        log.info("run_completed", primes=res.primes, batches=batches, elapsed_ms=res.elapsed_ms)
        return res

    # ---- recorded runs ----

    def _store(self) -> RunStore:
        if self.store is None:
            raise RuntimeError("run_store_not_configured")
        return self.store

    def submit(self, config: RunConfig) -> str:
        config.validate()
        return self._store().create(new_run_id(), config).id

    def run(self, run_id: str) -> RunResult:
        store = self._store()
        run = store.get(run_id)
        if not run:
            raise ValueError("run_not_found")

        run = store.start(run)
        try:
            res = self.count(run.run_config())
        except Exception as e:
            store.fail(run, str(e))
            log.error("run_failed", run_id=run_id, reason=str(e))
            raise
        store.finish(run, res)
        return res

    def get_status(self, run_id: str) -> Run:
        run = self._store().get(run_id)
        if not run:
            raise ValueError("run_not_found")
        return run

    def recent(self, limit: int = 20) -> List[Run]:
        return self._store().recent(limit)
