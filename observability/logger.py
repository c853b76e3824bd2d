"""Event logging for practice sessions and grading.

Every event is one human-readable line on stdout. With file logs enabled the
same event is also written as a JSON line and as a human line to rotating
files next to ``LOG_FILE``.
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
from typing import Any, Dict

from config.settings import settings

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = logging.getLogger("practice")
_logger.propagate = False
_json_logger = logging.getLogger("practice.events")
_json_logger.propagate = False


def _rotating(path: str, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def _human_file_name(path: str) -> str:
    root, ext = os.path.splitext(path)
    return f"{root}-human{ext or '.log'}"


def _ensure_handlers() -> None:
    if _logger.handlers:
        return

    level = settings.LOG_LEVEL.upper()
    _logger.setLevel(level)
    _json_logger.setLevel(level)
    human = logging.Formatter(HUMAN_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(stream=sys.stdout)
    console.setFormatter(human)
    _logger.addHandler(console)

    if not settings.ENABLE_FILE_LOGS:
        return
    log_dir = os.path.dirname(settings.LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    _logger.addHandler(_rotating(_human_file_name(settings.LOG_FILE), human))
    _json_logger.addHandler(_rotating(settings.LOG_FILE, logging.Formatter("%(message)s")))


def _format_human(event: Dict[str, Any]) -> str:
    extras = " ".join(
        f"{key}={value}" for key, value in event.items() if key not in ("ts", "kind", "session_id") and value is not None
    )
    line = f"{event['kind']} session={event['session_id']}"
    return f"{line} {extras}" if extras else line


def log_event(kind: str, session_id: str, **fields: Any) -> None:
    """Log one named event with its structured fields."""

    _ensure_handlers()
    event: Dict[str, Any] = {"ts": round(time.time(), 3), "kind": kind, "session_id": session_id}
    event.update(fields)

    _logger.info(_format_human(event))
    if settings.ENABLE_FILE_LOGS:
        _json_logger.info(json.dumps(event, ensure_ascii=False, default=str))


__all__ = ["log_event"]
