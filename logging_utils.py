"""Utility helpers for feature-flagged debug logging."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

import config

LOG_FILE_PATH = Path(config.LOG_FILE_PATH)


def log_line(message: Any) -> None:
    """Append a timestamped debug entry when logging is enabled."""
    if not config.LOG_ENABLED:
        return
    LOG_FILE_PATH.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().isoformat(timespec="milliseconds")
    with LOG_FILE_PATH.open("a", encoding="utf-8") as log_file:
        log_file.write(f"{timestamp} {message}\n")


def log_loop(header: str, items: Iterable[Any]) -> None:
    """Emit each item on its own line for detailed tracing when enabled."""
    if not config.LOG_ENABLED:
        return
    log_line(header)
    for entry in items:
        log_line(f"  {entry}")
