from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.models import ConfigurationError, RunConfig


class Settings(BaseSettings):
    # ---- run ----
    first: int = 2
    last: int = 1_000_000
    batch_size: int = 1000
    strategy: str = "immediate"
    workers: int = 4

    # ---- ambient ----
    db_url: str = "sqlite:///./primecount.db"
    log_level: str = "INFO"
    conf_file: Path = Path("conf/primes.yaml")

    # env prefix PRIMES_*
    model_config = SettingsConfigDict(env_prefix="PRIMES_", extra="ignore")

    def run_config(self, **overrides: Any) -> RunConfig:
        values = {
            "first": self.first,
            "last": self.last,
            "batch_size": self.batch_size,
            "strategy": self.strategy,
            "workers": self.workers,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig(**values)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"unreadable config file {path}: {e}") from e
    return data if isinstance(data, dict) else {}


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def load_settings() -> Settings:
    # 0) base from env PRIMES_*
    try:
        s = Settings()
    except ValidationError as e:
        raise ConfigurationError(f"invalid PRIMES_* environment: {e}") from e

    # 1) conf/primes.yaml (or PRIMES_CONF); env wins over the file
    conf = Path(os.environ.get("PRIMES_CONF", str(s.conf_file)))
    data = _read_yaml(conf)
    run = data.get("run") or {}
    if not isinstance(run, dict):
        run = {}

    update: Dict[str, Any] = {"conf_file": conf}
    for key in ("first", "last", "batch_size", "workers"):
        if key in run and f"PRIMES_{key.upper()}" not in os.environ:
            update[key] = _as_int(f"run.{key}", run[key])
    if "strategy" in run and "PRIMES_STRATEGY" not in os.environ:
        update["strategy"] = str(run["strategy"])
    if "db_url" in data and "PRIMES_DB_URL" not in os.environ:
        update["db_url"] = str(data["db_url"])

    # 2) legacy BATCH_PARAM override, only when PRIMES_BATCH_SIZE is absent
    if os.getenv("BATCH_PARAM") and "PRIMES_BATCH_SIZE" not in os.environ:
        update["batch_size"] = _as_int("BATCH_PARAM", os.environ["BATCH_PARAM"])

    return s.model_copy(update=update)
