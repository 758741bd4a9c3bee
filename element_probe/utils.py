# utils.py
import os
import time
from datetime import datetime, timezone


def elapsed_ms(start: float) -> int:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - start) * 1000)


def ensure_directories_exist(*paths: str):
    for path in paths:
        os.makedirs(path, exist_ok=True)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def timestamped_name(prefix: str, extension: str) -> str:
    stamp = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H-%M-%S-%f')
    return f"{prefix}-{stamp}.{extension}"
