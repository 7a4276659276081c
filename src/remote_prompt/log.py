"""Structured JSON logging for remote prompting sessions.

Logs wire exchanges and session outcomes in JSON format
so a misbehaving peer can be diagnosed after the fact.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # Merge extra structured data
        if hasattr(record, "data"):
            entry["data"] = record.data  # type: ignore[attr-defined]
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    log_dir: Path | None = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure structured logging for remote_prompt.

    Args:
        log_dir: Directory for log files. If None, logs to stderr only.
        level: Logging level.

    Returns:
        The root 'remote_prompt' logger.
    """
    logger = logging.getLogger("remote_prompt")
    logger.setLevel(level)

    # Avoid duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    fmt = JSONFormatter()

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "prompt.jsonl", encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(level)
        logger.addHandler(fh)

    # Stderr handler (only warnings+)
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    sh.setLevel(logging.WARNING)
    logger.addHandler(sh)

    return logger


def log_exchange(
    direction: str,
    frame_type: str,
    size: int,
    names: list[str] | None = None,
):
    """Log one frame written to or read from the peer."""
    logger = logging.getLogger("remote_prompt.wire")
    logger.info(
        "frame",
        extra={"data": {
            "direction": direction,
            "type": frame_type,
            "bytes": size,
            "names": names or [],
        }},
    )


def log_session(
    mode: str,
    state: str,
    answer_count: int,
    elapsed_s: float,
    error: str = "",
):
    """Log a finished prompting session."""
    logger = logging.getLogger("remote_prompt.session")
    level = logging.WARNING if error else logging.INFO
    logger.log(
        level,
        "session_end",
        extra={"data": {
            "mode": mode,
            "state": state,
            "answers": answer_count,
            "elapsed_s": round(elapsed_s, 3),
            "error": error,
        }},
    )
