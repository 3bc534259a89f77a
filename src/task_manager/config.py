"""Application settings loaded from TASKMGR_* environment variables."""

import os
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

ENV_PREFIX = "TASKMGR"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


class Settings(BaseModel):
    """Runtime configuration.

    Environment variables:
        TASKMGR_DATA_DIR: base directory for local data (default "data")
        TASKMGR_DB_PATH: key-value database file (default <data>/task_manager.db)
        TASKMGR_LOG_FORMAT: "dev" or "json"
        TASKMGR_LOG_LEVEL: stdlib level name
        TASKMGR_SESSION_TTL_DAYS: login session lifetime
        TASKMGR_LOGIN_TIMEOUT_S: how long the login page waits before giving up
        TASKMGR_HOST / TASKMGR_PORT / TASKMGR_RELOAD: uvicorn options
    """

    data_dir: Path = Field(default=Path("data"))
    db_path: Path = Field(default=Path("data") / "task_manager.db")
    log_format: Literal["dev", "json"] = "dev"
    log_level: str = "INFO"
    session_ttl_days: int = Field(default=7, ge=1)
    login_timeout_s: float = Field(default=5.0, gt=0)
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("invalid_int_config", env_var=name, value=raw, fallback=default)
        return default
    if minimum is not None and value < minimum:
        log.warning("int_config_below_minimum", env_var=name, value=value, fallback=default)
        return default
    return value


def _env_float(name: str, default: float, positive: bool = False) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("invalid_float_config", env_var=name, value=raw, fallback=default)
        return default
    if positive and not value > 0:
        log.warning("float_config_not_positive", env_var=name, value=value, fallback=default)
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def load_settings() -> Settings:
    """Build Settings from the environment, falling back to defaults."""
    data_dir = Path(os.environ.get(_k("DATA_DIR"), "data")).expanduser()
    kwargs: dict = {
        "data_dir": data_dir,
        "db_path": Path(
            os.environ.get(_k("DB_PATH"), str(data_dir / "task_manager.db"))
        ).expanduser(),
        "session_ttl_days": _env_int(_k("SESSION_TTL_DAYS"), 7, minimum=1),
        "login_timeout_s": _env_float(_k("LOGIN_TIMEOUT_S"), 5.0, positive=True),
        "port": _env_int(_k("PORT"), 8000),
        "reload": _env_bool(_k("RELOAD"), False),
    }

    if val := os.environ.get(_k("LOG_FORMAT")):
        kwargs["log_format"] = "json" if val.strip().lower() == "json" else "dev"

    if val := os.environ.get(_k("LOG_LEVEL")):
        kwargs["log_level"] = val.strip().upper()

    if val := os.environ.get(_k("HOST")):
        kwargs["host"] = val

    return Settings(**kwargs)
