from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, Field, create_engine, select, Session
from enum import Enum
from datetime import datetime, timezone
from typing import List, Optional

from ..core.models import RunConfig, RunResult


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RunStatus(str, Enum):
    QUEUED = "QUEUED"; RUNNING = "RUNNING"
    FINISHED = "FINISHED"; FAILED = "FAILED"


class Run(SQLModel, table=True):
    id: str = Field(primary_key=True)
    status: RunStatus
    first: int
    last: int
    batch_size: int
    strategy: str = "immediate"
    workers: int = 4
    primes: Optional[int] = None
    elapsed_ms: Optional[int] = None
    reason: Optional[str] = None
    created_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def run_config(self) -> RunConfig:
        return RunConfig(
            first=self.first, last=self.last, batch_size=self.batch_size,
            strategy=self.strategy, workers=self.workers,
        )


class RunStore:
    """Final run records only; batches never touch the store."""

    def __init__(self, url="sqlite:///./primecount.db"):
        self.engine = create_engine(url, connect_args={"check_same_thread": False})
        SQLModel.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, class_=Session, expire_on_commit=False)

    def create(self, run_id: str, config: RunConfig) -> Run:
        run = Run(
            id=run_id, status=RunStatus.QUEUED, created_at=_now(),
            first=config.first, last=config.last, batch_size=config.batch_size,
            strategy=config.strategy, workers=config.workers,
        )
        with self.SessionLocal() as s:
            s.add(run)
            s.commit()
        return run

    def get(self, run_id: str) -> Optional[Run]:
        with self.SessionLocal() as s:
            return s.get(Run, run_id)

    def recent(self, limit: int = 20) -> List[Run]:
        with self.SessionLocal() as s:
            stmt = select(Run).order_by(Run.created_at.desc()).limit(limit)
            return list(s.exec(stmt))

    def _save(self, run: Run) -> Run:
        with self.SessionLocal() as s:
            db_run = s.merge(run)
            s.commit()
            return db_run

    def start(self, run: Run) -> Run:
        run.status = RunStatus.RUNNING; run.started_at = _now()
        return self._save(run)

    def finish(self, run: Run, res: RunResult) -> Run:
        run.status = RunStatus.FINISHED
        run.primes = res.primes; run.elapsed_ms = res.elapsed_ms
        run.finished_at = _now()
        return self._save(run)

    def fail(self, run: Run, reason: str) -> Run:
        run.status = RunStatus.FAILED; run.reason = reason
        run.finished_at = _now()
        return self._save(run)
