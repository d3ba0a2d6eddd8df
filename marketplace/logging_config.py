"""Logging configuration helpers."""

from __future__ import annotations

import logging
import re
from contextlib import suppress
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable


_EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)
_PHONE_RE = re.compile(r"\b\+?\d{9,15}\b")
_TOKEN_RE = re.compile(r"(?P<key>(?:token|bearer)\s*[=:]?\s*)(?P<secret>[A-Za-z0-9._-]{8,})", re.IGNORECASE)

# Logger filters do not reach child loggers, so every store logger is listed.
_SCRUBBED_LOGGERS = ("store", "store.http", "store.snapshot", "rebalance")


def scrub_text(value: str) -> str:
    """Mask emails, phone numbers and API tokens in ``value``."""

    if not value:
        return value

    value = _EMAIL_RE.sub("<email>", value)
    value = _PHONE_RE.sub("<phone>", value)
    value = _TOKEN_RE.sub(lambda m: f"{m.group('key')}<token>", value)
    return value


class PiiScrubbingFilter(logging.Filter):
    """Filter that scrubs seller contact data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - standard logging hook
        message = record.getMessage()
        record.msg = scrub_text(message)
        record.args = ()
        return True


def _close_handlers(handlers: Iterable[Handler]) -> None:
    for handler in handlers:
        logging.getLogger().removeHandler(handler)
        with suppress(Exception):  # pragma: no cover - best effort cleanup
            handler.close()


def _rotating(path: Path, level: int, formatter: logging.Formatter, *, max_bytes: int, backups: int) -> Handler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_dir: str = "logs", level: int | str = logging.INFO) -> None:
    """Configure console and rotating file handlers for the engine."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        _close_handlers(list(root.handlers))

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    root.addHandler(
        _rotating(log_path / "engine.log", level, formatter, max_bytes=5_000_000, backups=5)
    )

    error_handler = _rotating(
        log_path / "errors.log", logging.WARNING, formatter, max_bytes=2_000_000, backups=3
    )
    error_handler.addFilter(PiiScrubbingFilter())
    root.addHandler(error_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    pii_filter = PiiScrubbingFilter()
    for logger_name in _SCRUBBED_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.filters = [
            existing for existing in logger.filters if not isinstance(existing, PiiScrubbingFilter)
        ]
        logger.addFilter(pii_filter)

    root.info("logging initialized, level=%s dir=%s", logging.getLevelName(level), log_path.resolve())


__all__ = ["PiiScrubbingFilter", "scrub_text", "setup_logging"]
