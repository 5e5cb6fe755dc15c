from __future__ import annotations
import time
import uuid


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


def elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
