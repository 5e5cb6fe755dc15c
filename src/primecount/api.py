from __future__ import annotations
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from .core.models import ConfigurationError
from .services.run_service import PrimeCountService
from .services.run_store import Run, RunStatus, RunStore
from .logging import setup_logging
from .settings import Settings, load_settings


# --------- Schemas ---------
class CreateRunReq(BaseModel):
    first: Optional[int] = None
    last: Optional[int] = None
    batch_size: Optional[int] = None
    strategy: Optional[str] = None
    workers: Optional[int] = None


class CreateRunRes(BaseModel):
    run_id: str


class RunRunRes(BaseModel):
    ok: bool
    primes: Optional[int] = None
    report: Optional[str] = None
    elapsed_ms: Optional[int] = None
    reason: Optional[str] = None


class RunStatusRes(BaseModel):
    id: str
    status: str
    first: int
    last: int
    batch_size: int
    strategy: str
    workers: int
    primes: Optional[int] = None
    elapsed_ms: Optional[int] = None
    reason: Optional[str] = None


def create_app(settings: Optional[Settings] = None, store: Optional[RunStore] = None) -> FastAPI:
    s = settings or load_settings()
    setup_logging(s.log_level)
    svc = PrimeCountService(store=store or RunStore(s.db_url))
    app = FastAPI(title="Prime Count API")

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.post("/runs", response_model=CreateRunRes, status_code=201)
    def create_run(req: CreateRunReq):
        try:
            run_id = svc.submit(s.run_config(**req.model_dump()))
        except ConfigurationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return CreateRunRes(run_id=run_id)

    @app.post("/runs/{run_id}/run", response_model=RunRunRes)
    def run_run(run_id: str):
        if not svc.store.get(run_id):
            raise HTTPException(status_code=404, detail="run_not_found")
        try:
            res = svc.run(run_id)
        except Exception as e:
            return RunRunRes(ok=False, reason=str(e))
        return RunRunRes(ok=True, primes=res.primes, report=res.report, elapsed_ms=res.elapsed_ms)

    @app.get("/runs", response_model=List[RunStatusRes])
    def list_runs(limit: int = 20):
        return [_status(r) for r in svc.recent(limit)]

    @app.get("/runs/{run_id}", response_model=RunStatusRes)
    def get_run(run_id: str):
        try:
            run = svc.get_status(run_id)
        except ValueError:
            raise HTTPException(status_code=404, detail="run_not_found")
        return _status(run)

    return app


def _status(run: Run) -> RunStatusRes:
    return RunStatusRes(
        id=run.id, status=RunStatus(run.status).value, first=run.first, last=run.last,
        batch_size=run.batch_size, strategy=run.strategy, workers=run.workers,
        primes=run.primes, elapsed_ms=run.elapsed_ms, reason=run.reason,
    )
