from __future__ import annotations

import contextvars
import json
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional, Union

request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)
game_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar("game_id", default=None)

_CONTEXT_ATTRS = ("request_id", "correlation_id", "game_id")

_RESERVED_ATTRS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "message",
    "module",
    "msecs",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
    *_CONTEXT_ATTRS,
}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in _CONTEXT_ATTRS:
            payload[attr] = getattr(record, attr, None)

        payload.update(
            {
                key: value
                for key, value in record.__dict__.items()
                if key not in _RESERVED_ATTRS and not key.startswith("_")
            }
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _install_record_factory() -> None:
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "_chess_coach", False):
        return

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        record.request_id = request_id_ctx.get()
        record.correlation_id = correlation_id_ctx.get()
        record.game_id = game_id_ctx.get()
        return record

    record_factory._chess_coach = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(record_factory)


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    if level is None:
        from chess_coach.core.config import get_settings

        level = get_settings().log_level

    _install_record_factory()

    logger = logging.getLogger()
    if logger.handlers:
        logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)


@contextmanager
def bind_game_id(game_id: Optional[str]) -> Iterator[None]:
    token = game_id_ctx.set(game_id)
    try:
        yield
    finally:
        game_id_ctx.reset(token)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
