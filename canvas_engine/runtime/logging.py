"""Root logger wiring for the canvas app.

Console output is synchronous. When a log file is configured, every handler
moves behind a `QueueListener` so file writes never stall the frame loop.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from canvas_engine.api.logging import LoggingConfig
from canvas_engine.runtime.config import resolve_log_level_name

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "taskName"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; `extra=` fields are nested under `fields`."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        }
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers according to `config`."""
    global _QUEUE_LISTENER

    shutdown_logging()
    handlers = _build_handlers(config)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level(config.level_name))

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(records, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Stop the file listener if one is running; queued records are flushed."""
    global _QUEUE_LISTENER

    listener, _QUEUE_LISTENER = _QUEUE_LISTENER, None
    if listener is not None:
        listener.stop()


def setup_logging() -> None:
    """Install console logging at `CANVAS_LOG_LEVEL` unless the host already did."""
    if logging.getLogger().handlers:
        return
    configure_logging(LoggingConfig(level_name=resolve_log_level_name(default="INFO")))


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        return [console]
    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sink = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    sink.setFormatter(_formatter(config.file_format))
    return [console, sink]


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)
