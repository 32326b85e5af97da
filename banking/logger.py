"""Structured application logging to stdout and rotating files."""

from __future__ import annotations

import gzip
import json
import logging
import os
import shutil
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from banking.trace import KEY, get_trace_id

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}
_MAX_BYTES = 100 * 1024 * 1024
_BACKUP_COUNT = 3


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


def _fields(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "fields", {})


class _JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _level_name(record),
            "ts": record.created,
            "caller": f"{record.filename}:{record.lineno}",
            "msg": record.getMessage(),
        }
        entry.update(_fields(record))
        return json.dumps(entry, default=str, ensure_ascii=False)


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        moment = datetime.fromtimestamp(record.created).astimezone()
        parts = [
            moment.isoformat(timespec="milliseconds"),
            _level_name(record).upper(),
            f"{record.filename}:{record.lineno}",
            record.getMessage(),
        ]
        extra = _fields(record)
        if extra:
            parts.append(json.dumps(extra, default=str, ensure_ascii=False))
        return "\t".join(parts)


def _gzip_namer(name: str) -> str:
    return name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as src, gzip.open(dest, "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.remove(source)


def _rotating_file(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.namer = _gzip_namer
    handler.rotator = _gzip_rotator
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


class _FieldLogger:
    """A logger that attaches key/value fields to every entry."""

    def __init__(self, base: logging.Logger, fields: dict[str, Any] | None = None) -> None:
        self._base = base
        self._fields = dict(fields or {})

    def bind(self, **fields: Any) -> _FieldLogger:
        return _FieldLogger(self._base, {**self._fields, **fields})

    def _log(self, level: int, msg: str, fields: dict[str, Any]) -> None:
        # stacklevel points past this method and its public caller to the user's frame.
        self._base.log(
            level, msg, extra={"fields": {**self._fields, **fields}}, stacklevel=3
        )

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, fields)

    def warn(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, fields)

    def fatal(self, msg: str, **fields: Any) -> None:
        """Log at fatal level, then exit with status 1."""
        self._log(logging.CRITICAL, msg, fields)
        raise SystemExit(1)


_base = logging.getLogger("banking")
_base.setLevel(logging.DEBUG)
_base.propagate = False
_base.addHandler(logging.NullHandler())
_current = _FieldLogger(_base)


def init(level: str, fmt: str, log_dir: str) -> None:
    """Configure output; ``fmt`` is "json" or console, ``log_dir`` enables log files."""
    log_level = _LEVELS.get(level, logging.INFO)
    formatter: logging.Formatter = _JSONFormatter() if fmt == "json" else _ConsoleFormatter()

    handlers: list[logging.Handler] = []
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    console.setFormatter(formatter)
    handlers.append(console)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_file(directory / "app.log", log_level, formatter))
        handlers.append(_rotating_file(directory / "error.log", logging.ERROR, formatter))

    for old in list(_base.handlers):
        _base.removeHandler(old)
        old.close()
    for handler in handlers:
        _base.addHandler(handler)


def get_logger() -> _FieldLogger:
    return _current


def with_trace_id() -> _FieldLogger:
    """Return the logger, bound to the current trace id when there is one."""
    trace_id = get_trace_id()
    if not trace_id:
        return _current
    return _current.bind(**{KEY: trace_id})


def info(msg: str, **kwargs: Any) -> None:
    _current._log(logging.INFO, msg, kwargs)


def debug(msg: str, **kwargs: Any) -> None:
    _current._log(logging.DEBUG, msg, kwargs)


def warn(msg: str, **kwargs: Any) -> None:
    _current._log(logging.WARNING, msg, kwargs)


def error(msg: str, **kwargs: Any) -> None:
    _current._log(logging.ERROR, msg, kwargs)


def fatal(msg: str, **kwargs: Any) -> None:
    """Log at fatal level, then exit with status 1."""
    _current._log(logging.CRITICAL, msg, kwargs)
    raise SystemExit(1)