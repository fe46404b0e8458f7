"""Logging setup for the ``spritekeys`` logger tree.

Library modules only call ``logging.getLogger(__name__)``. Handlers are
installed once, by the command line entry point or an embedding
application, through :func:`configure_logging`. Every record carries the id
of the discovery run (or command) it belongs to; ``-`` outside of a run.
"""
import json
import logging
import logging.handlers
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

PACKAGE_LOGGER = 'spritekeys'
LOG_FILE_NAME = 'spritekeys.log'
CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(correlation_id)s - %(message)s'

# Discovery copies the context into pool workers, so the id follows each trial
correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# LogRecord attributes that are not caller supplied ``extra`` values
_STANDARD_ATTRIBUTES = set(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {
    'message', 'asctime', 'correlation_id', 'taskName',
}


class CorrelationIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or '-'
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values go under ``"extra"``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'correlation_id': getattr(record, 'correlation_id', '-'),
            'thread': record.threadName,
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        extra = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRIBUTES}
        if extra:
            entry['extra'] = extra
        return json.dumps(entry, default=str)


class LoggingManager:
    """Owns the handlers attached to the package logger."""

    def __init__(self):
        self._handlers: List[logging.Handler] = []

    @property
    def configured(self) -> bool:
        return bool(self._handlers)

    def configure(
        self,
        log_level: str = 'INFO',
        log_dir: Optional[Union[str, Path]] = None,
        enable_file_logging: bool = False,
        enable_console_logging: bool = True,
        structured_logging: bool = False,
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        stream=None,
    ) -> None:
        """Attach console and/or rotating file handlers; a no-op when already done.

        Args:
            log_level: Level name for the package logger and its handlers
            log_dir: Directory of ``spritekeys.log``, ``logs`` when omitted
            enable_file_logging: Also write to a rotating log file
            enable_console_logging: Write to ``stream``
            structured_logging: JSON lines instead of the plain text format
            max_file_size: Bytes before the log file is rotated
            backup_count: Rotated files kept
            stream: Console stream, ``sys.stderr`` when omitted
        """
        if self.configured:
            return

        level = logging.getLevelName(log_level.upper())
        if structured_logging:
            formatter: logging.Formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(CONSOLE_FORMAT)

        handlers: List[logging.Handler] = []
        if enable_console_logging:
            handlers.append(logging.StreamHandler(stream or sys.stderr))
        if enable_file_logging:
            directory = Path(log_dir or 'logs')
            directory.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                directory / LOG_FILE_NAME, maxBytes=max_file_size,
                backupCount=backup_count, encoding='utf-8'))

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(level)
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            handler.addFilter(CorrelationIDFilter())
            package_logger.addHandler(handler)
        self._handlers = handlers

        package_logger.debug(f"Logging configured at {log_level} with {len(handlers)} handler(s)")

    def clear_correlation_id(self) -> None:
        correlation_id.set(None)

    def shutdown(self) -> None:
        """Detach and close all handlers installed by :meth:`configure`."""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []


logging_manager = LoggingManager()


def configure_logging(**kwargs) -> None:
    logging_manager.configure(**kwargs)


def get_correlation_id() -> Optional[str]:
    return correlation_id.get()


class CorrelationContext:
    """Tag every record logged inside the block with one id.

    A fresh 12 character id is generated when none is given; the previous
    id is restored on exit.
    """

    def __init__(self, corr_id: Optional[str] = None):
        self.corr_id = corr_id or uuid.uuid4().hex[:12]
        self._token = None

    def __enter__(self) -> str:
        self._token = correlation_id.set(self.corr_id)
        return self.corr_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        correlation_id.reset(self._token)
