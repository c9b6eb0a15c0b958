"""
Logging configuration for the portfolio dashboard.

Human-readable output for the terminal by default, JSON lines when
LOG_FORMAT=json (handy when the refresher runs under a process supervisor).

Usage:
    from logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)

    logger.info("Refresh finished", extra={'updated': 14, 'stale': 2})
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

# LogRecord attributes that are not user-supplied `extra=` fields
_RECORD_FIELDS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'taskName', 'message',
}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_FIELDS}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message + extras."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(timespec='milliseconds'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for key, value in _extras(record).items():
            log_obj.setdefault(key, value)

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """
    2026-10-18 10:30:00 INFO  [orchestrator] Refresh finished (updated=14, stale=2)
    """

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        level = record.levelname.ljust(5)
        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelname, '')
            level = f"{color}{level}{self.RESET}"

        extras = [f"{key}={value}" for key, value in _extras(record).items()]
        extra_str = f" ({', '.join(extras)})" if extras else ""

        output = f"{timestamp} {level} [{record.name}] {record.getMessage()}{extra_str}"
        if record.exc_info:
            output += f"\n{self.formatException(record.exc_info)}"
        return output


def setup_logging(
    json_format: Optional[bool] = None,
    level: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        json_format: JSON lines (True) or human-readable (False).
                     Defaults to LOG_FORMAT=json in the environment.
        level:       DEBUG / INFO / WARNING / ERROR. Defaults to LOG_LEVEL or INFO.
    """
    if json_format is None:
        json_format = os.getenv('LOG_FORMAT', '').lower() == 'json'
    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')
    level_no = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_no)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level_no)
    handler.setFormatter(JsonFormatter() if json_format else HumanFormatter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
