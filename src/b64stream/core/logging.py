# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Logging configuration.

All loggers live under 'b64stream' and share one handler on stderr, formatted
according to `logging.style` (or an explicit `logging.format`). Records from
the codec carry the label of the alphabet in use as `%(alphabet)s`; other
records show '-' in that field.
"""


# type annotations
from __future__ import annotations
from typing import Dict, Any

# standard libraries
import sys
import uuid
import socket
import logging

# external libs
from cmdkit.app import exit_status
from cmdkit.config import ConfigurationError

# internal libs
from b64stream.core.ansi import Ansi
from b64stream.core.config import config, blame
from b64stream.core.exceptions import write_traceback

# public interface
__all__ = ['Logger', 'LogRecord', 'AlphabetFilter', 'StreamHandler', 'TRACE', 'HOSTNAME', 'INSTANCE',
           'level_from_name', 'build_handler', ]


# Cached for later use
HOSTNAME = socket.gethostname()


# Unique for every run of b64stream
INSTANCE = str(uuid.uuid4())


TRACE: int = logging.DEBUG - 5
logging.addLevelName(TRACE, 'TRACE')


# Canonical colors for logging messages
level_color: Dict[str, Ansi] = {
    'TRACE': Ansi.CYAN,
    'DEBUG': Ansi.BLUE,
    'INFO': Ansi.GREEN,
    'WARNING': Ansi.YELLOW,
    'ERROR': Ansi.RED,
    'CRITICAL': Ansi.MAGENTA
}


class Logger(logging.Logger):
    """Extend Logger to implement TRACE level."""

    def trace(self, msg: str, *args, **kwargs):
        """Log 'msg % args' with severity 'TRACE'."""
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    @classmethod
    def with_name(cls: Logger, name: str) -> Logger:
        """Shorthand for `log: Logger = logging.getLogger(name)`."""
        return logging.getLogger(name)


# Inject class back into logging library
logging.setLoggerClass(Logger)


class LogRecord(logging.LogRecord):
    """
    Extends LogRecord with the hostname, run identifier, and ANSI codes.

    Every `Ansi` member is available as `ansi_<name>` (e.g., `%(ansi_bold)s`)
    and `%(ansi_level)s` is the color for the level of the record.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.app_id = INSTANCE
        self.hostname = HOSTNAME
        self.ansi_level = level_color.get(self.levelname, Ansi.NULL).value
        for member in Ansi:
            setattr(self, f'ansi_{member.name.lower()}', member.value)


# Inject factory back into logging library
logging.setLogRecordFactory(LogRecord)


class AlphabetFilter(logging.Filter):
    """Supply the `alphabet` field for records logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'alphabet'):
            record.alphabet = '-'
        return True


class StreamHandler(logging.StreamHandler):
    """A StreamHandler that panics on exceptions in the logging configuration."""

    def handleError(self, record: LogRecord) -> None:
        """Pretty-print message and write traceback to file."""
        err_type, err_val, tb = sys.exc_info()
        write_traceback(err_val, module=__name__)
        sys.exit(exit_status.bad_config)


def level_from_name(name: Any, source: str = 'logging.level') -> int:
    """Get level value from `name`."""
    label = blame(config, *source.split('.'))
    if not isinstance(name, str):
        raise ConfigurationError(f'Expected string for logging level, given \'{name}\' ({label})')
    name = name.upper()
    if name == 'TRACE':
        return TRACE
    elif name in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return getattr(logging, name)
    else:
        raise ConfigurationError(f'Unsupported logging level \'{name}\' ({label})')


def build_handler(fmt: str, datefmt: str, stream: Any = None) -> StreamHandler:
    """Handler writing formatted records to `stream` (default: stderr)."""
    handler = StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    handler.addFilter(AlphabetFilter())
    return handler


try:
    level = level_from_name(config.logging.level)
    handler = build_handler(config.logging.format, config.logging.datefmt)
except Exception as error:
    write_traceback(error, module=__name__)
    sys.exit(exit_status.bad_config)


b64stream_logger = logging.getLogger('b64stream')
b64stream_logger.setLevel(level)
b64stream_logger.addHandler(handler)
