"""Logging setup for the ``pyomdb`` package logger."""

import json
import logging
import logging.handlers
import re
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import colorlog


PACKAGE_LOGGER = 'pyomdb'

CONSOLE_FORMAT = '%(log_color)s%(asctime)s %(levelname)-8s %(name)s: %(message)s%(reset)s'
PLAIN_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

_API_KEY_PATTERN = re.compile(r'(apikey=)[^&\s"\']+', re.IGNORECASE)


def redact_api_key(text: str) -> str:
    """Mask the value of every ``apikey=`` query parameter in ``text``."""
    return _API_KEY_PATTERN.sub(r'\1***', text)


class LogLevel(Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def number(self) -> int:
        return getattr(logging, self.value)


class JsonFormatter(logging.Formatter):
    """
    Writes each record as one JSON object per line.

    Fields passed with ``extra=`` (the error handler's ``context`` for one)
    are included. API keys are masked in the final line.
    """

    _RESERVED = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'lineno', 'funcName', 'created',
        'msecs', 'relativeCreated', 'thread', 'threadName',
        'processName', 'process', 'exc_info', 'exc_text',
        'stack_info', 'taskName', 'message', 'asctime',
    }

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in self._RESERVED
        )

        return redact_api_key(json.dumps(entry, ensure_ascii=False, default=str))


class LoggingConfig:
    """
    Handlers for the package logger.

    Records go to stderr, colored when the terminal supports it. When
    ``log_file`` is set they are also written as JSON lines to a rotating file.
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_file: Optional[Union[str, Path]] = None,
        colored_console: Optional[bool] = None,
        max_file_size_mb: int = 5,
        backup_count: int = 3
    ):
        """
        Args:
            log_level: Minimum level for both handlers
            log_file: Path of the JSON log file, or None for console only
            colored_console: Force colors on or off (None follows ``isatty``)
            max_file_size_mb: Size at which the log file is rotated
            backup_count: Rotated files to keep
        """
        self.log_level = log_level
        self.log_file = Path(log_file) if log_file else None
        self.colored_console = sys.stderr.isatty() if colored_console is None else colored_console
        self.max_file_size_bytes = max_file_size_mb * 1024 * 1024
        self.backup_count = backup_count

    def apply(self, logger_name: str = PACKAGE_LOGGER) -> logging.Logger:
        """Replace the handlers of ``logger_name`` with this configuration's."""
        logger = logging.getLogger(logger_name)

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        logger.setLevel(self.log_level.number)
        logger.propagate = False
        logger.addHandler(self._console_handler())

        if self.log_file is not None:
            logger.addHandler(self._file_handler())

        return logger

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        if self.colored_console:
            handler.setFormatter(colorlog.ColoredFormatter(
                fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS
            ))
        else:
            handler.setFormatter(logging.Formatter(fmt=PLAIN_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def _file_handler(self) -> logging.Handler:
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filename=self.log_file,
            maxBytes=self.max_file_size_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        handler.setFormatter(JsonFormatter())
        return handler


def setup_application_logging(
    log_level: LogLevel = LogLevel.INFO,
    log_file: Optional[Union[str, Path]] = None,
    colored_console: Optional[bool] = None
) -> LoggingConfig:
    """
    Configure the ``pyomdb`` logger; used by the CLI.

    Returns:
        The LoggingConfig that was applied
    """
    config = LoggingConfig(log_level=log_level, log_file=log_file, colored_console=colored_console)
    config.apply(PACKAGE_LOGGER)
    return config


def get_logger(name: str) -> logging.Logger:
    """Module logger, normally ``get_logger(__name__)``."""
    return logging.getLogger(name)
