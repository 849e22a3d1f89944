# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Common exceptions and error handling."""


# type annotations
from __future__ import annotations
from typing import Callable, Optional

# standard libs
import os
import sys
import logging
import datetime
import traceback

# internal libs
from b64stream.core.ansi import Ansi
from b64stream.core.platform import default_path

# public interface
__all__ = ['log_exception', 'handle_exception', 'write_traceback', ]


def log_exception(exc: Exception, logger: Callable[[str], None], status: int) -> int:
    """Log the exception and exit with `status`."""
    logger(str(exc))
    return status


def handle_exception(exc: Exception, logger: logging.Logger, status: int) -> int:
    """Log the exception, write the traceback to file, and return `status`."""
    msg = str(exc).replace('\n', ' - ')
    logger.critical(f'{exc.__class__.__name__}: {msg}')
    path = write_traceback(exc, quiet=True)
    if path is not None:
        logger.critical(f'Exception traceback written to {path}')
    return status


def write_traceback(exc: Exception, module: str = None, quiet: bool = False) -> Optional[str]:
    """
    Write exception traceback to a file in the log directory.

    This is used before logging is configured (e.g., a bad configuration file)
    so the message is printed directly to stderr unless `quiet` is set.
    Returns the path of the written file, or None if it could not be written.
    """
    timestamp = datetime.datetime.now().strftime('%Y%m%d-%H%M%S')
    path = os.path.join(default_path.log, f'exception-{timestamp}.log')
    try:
        os.makedirs(default_path.log, exist_ok=True)
        with open(path, mode='w') as stream:
            print(''.join(traceback.format_exception(type(exc), exc, exc.__traceback__)), file=stream)
    except OSError:
        path = None
    if not quiet:
        label = f'{Ansi.BOLD.value}{Ansi.MAGENTA.value}CRITICAL{Ansi.RESET.value}'
        where = '' if module is None else f' {Ansi.FAINT.value}[{module}]{Ansi.RESET.value}'
        print(f'{label}{where} {exc.__class__.__name__}: {exc}', file=sys.stderr)
        if path is not None:
            print(f'{label}{where} Exception traceback written to {path}', file=sys.stderr)
    return path
