from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    log_dir: str = ".logs"
    log_max_bytes: int = 1048576  # 1MB
    log_backups: int = 5
    log_to_file: bool = True
    default_strategy: str = "cycle-marking"


def load_settings() -> Settings:
    """Read settings from ``NC_*`` environment variables.

    Read on every call so that a changed environment (tests, subprocesses)
    is picked up without reloading the module.
    """
    return Settings(
        log_dir=os.environ.get("NC_LOG_DIR", ".logs"),
        log_max_bytes=_env_int("NC_LOG_MAX_BYTES", 1048576),
        log_backups=_env_int("NC_LOG_BACKUPS", 5),
        log_to_file=_env_bool("NC_LOG_TO_FILE", True),
        default_strategy=os.environ.get("NC_DEFAULT_STRATEGY", "cycle-marking"),
    )
