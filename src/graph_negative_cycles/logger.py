from __future__ import annotations

import json
import math
import os
import sys
from datetime import datetime, timezone
from typing import Any

from .config import Settings, load_settings


REDACT_KEYS = {"token", "auth", "authorization", "password", "secret", "api_key"}


def _clean(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: ("<redacted>" if str(k).lower() in REDACT_KEYS else _clean(v)) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_clean(v) for v in obj]
    # JSON has no infinities; keep records parseable
    if isinstance(obj, float) and (math.isinf(obj) or math.isnan(obj)):
        return str(obj)
    return obj


def _rotate(path: str, backups: int) -> None:
    for i in range(backups, 0, -1):
        older = f"{path}.{i}"
        newer = f"{path}.{i-1}" if i > 1 else path
        if os.path.exists(older):
            os.remove(older)
        if os.path.exists(newer):
            os.rename(newer, older)


def _write_file_line(line: str, settings: Settings) -> None:
    try:
        os.makedirs(settings.log_dir, exist_ok=True)
        path = os.path.join(settings.log_dir, "events.log")
        if os.path.exists(path) and os.path.getsize(path) > settings.log_max_bytes:
            _rotate(path, settings.log_backups)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError:
        # file sink is best effort, stdout already has the record
        pass


def log_event(event: str, **fields: Any) -> None:
    settings = load_settings()
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        **_clean(fields),
    }
    line = json.dumps(record, ensure_ascii=False)
    sys.stdout.write(line + "\n")
    sys.stdout.flush()
    if settings.log_to_file:
        _write_file_line(line, settings)
