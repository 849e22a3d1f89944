# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Encode a file as base64."""


# type annotations
from __future__ import annotations
from typing import Optional

# standard libs
import sys
from functools import partial

# external libs
from cmdkit.app import Application, exit_status
from cmdkit.cli import Interface
from cmdkit.config import ConfigurationError

# internal libs
from b64stream.core.logging import Logger
from b64stream.core.exceptions import log_exception, handle_exception
from b64stream.codec import encode, EncodeSource, InvalidAlphabet, InvalidTerminator
from b64stream.apps import load_codec, open_input, open_output

# public interface
__all__ = ['EncodeApp', ]

# application logger
log = Logger.with_name('b64stream')


PROGRAM = 'b64stream encode'
USAGE = f"""\
usage: {PROGRAM} [-h] [FILE] [-o FILE] [-a ALPHABET] [-t CHAR | --no-padding]
{__doc__}\
"""

HELP = f"""\
{USAGE}

arguments:
FILE                       Input file (default: stdin).

options:
-o, --output        FILE   Output file (default: stdout).
-a, --alphabet      NAME   Alphabet name or 64 symbols (default from config).
-t, --terminator    CHAR   Padding symbol (overrides alphabet's own).
    --no-padding           Do not pad the final group.
-h, --help                 Show this message and exit.\
"""


class EncodeApp(Application):
    """Application class for encode command."""

    interface = Interface(PROGRAM, USAGE, HELP)
    ALLOW_NOARGS = True

    source: str = '-'
    interface.add_argument('source', nargs='?', default='-')

    output: str = '-'
    interface.add_argument('-o', '--output', default='-')

    alphabet: Optional[str] = None
    interface.add_argument('-a', '--alphabet', default=None)

    terminator: Optional[str] = None
    no_padding: bool = False
    padding_interface = interface.add_mutually_exclusive_group()
    padding_interface.add_argument('-t', '--terminator', default=None)
    padding_interface.add_argument('--no-padding', action='store_true')

    exceptions = {
        InvalidAlphabet: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        InvalidTerminator: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        ConfigurationError: partial(log_exception, logger=log.critical, status=exit_status.bad_config),
        FileNotFoundError: partial(log_exception, logger=log.critical, status=exit_status.runtime_error),
        IsADirectoryError: partial(log_exception, logger=log.critical, status=exit_status.runtime_error),
        PermissionError: partial(log_exception, logger=log.critical, status=exit_status.runtime_error),
        OSError: partial(handle_exception, logger=log, status=exit_status.runtime_error),
        **Application.exceptions,
    }

    def run(self) -> None:
        """Business logic for `b64stream encode`."""
        codec = load_codec(self.alphabet, self.terminator, self.no_padding)
        log.debug(f'Encoding {self.source} with {codec}')
        with open_input(self.source) as source, open_output(self.output) as output:
            encode(EncodeSource(source), output, codec=codec)
            if self.output == '-' and sys.stdout.isatty():
                output.write(b'\n')
