# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Decode a base64 file."""


# type annotations
from __future__ import annotations
from typing import Optional

# standard libs
from functools import partial

# external libs
from cmdkit.app import Application, exit_status
from cmdkit.cli import Interface
from cmdkit.config import ConfigurationError

# internal libs
from b64stream.core.logging import Logger
from b64stream.core.exceptions import log_exception, handle_exception
from b64stream.codec import decode, DecodeSource, InvalidAlphabet, InvalidTerminator
from b64stream.apps import load_codec, load_chunksize, open_input, open_output

# public interface
__all__ = ['DecodeApp', ]

# application logger
log = Logger.with_name('b64stream')


PROGRAM = 'b64stream decode'
USAGE = f"""\
usage: {PROGRAM} [-h] [FILE] [-o FILE] [-a ALPHABET] [-t CHAR | --no-padding] [--chunksize N]
{__doc__}\
"""

HELP = f"""\
{USAGE}

Characters outside the alphabet (whitespace, line breaks, punctuation)
are skipped. A truncated final group is dropped without error.

arguments:
FILE                       Input file (default: stdin).

options:
-o, --output        FILE   Output file (default: stdout).
-a, --alphabet      NAME   Alphabet name or 64 symbols (default from config).
-t, --terminator    CHAR   Padding symbol (overrides alphabet's own).
    --no-padding           Input is not padded.
    --chunksize     N      Bytes read per pull (default from config).
-h, --help                 Show this message and exit.\
"""


class DecodeApp(Application):
    """Application class for decode command."""

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

    chunksize: Optional[int] = None
    interface.add_argument('--chunksize', type=int, default=None)

    exceptions = {
        InvalidAlphabet: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        InvalidTerminator: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        ValueError: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        ConfigurationError: partial(log_exception, logger=log.critical, status=exit_status.bad_config),
        FileNotFoundError: partial(log_exception, logger=log.critical, status=exit_status.runtime_error),
        IsADirectoryError: partial(log_exception, logger=log.critical, status=exit_status.runtime_error),
        PermissionError: partial(log_exception, logger=log.critical, status=exit_status.runtime_error),
        OSError: partial(handle_exception, logger=log, status=exit_status.runtime_error),
        **Application.exceptions,
    }

    def run(self) -> None:
        """Business logic for `b64stream decode`."""
        codec = load_codec(self.alphabet, self.terminator, self.no_padding)
        chunksize = load_chunksize(self.chunksize)
        log.debug(f'Decoding {self.source} with {codec} (chunksize={chunksize})')
        with open_input(self.source) as source, open_output(self.output) as output:
            decode(DecodeSource(source, codec, chunksize=chunksize), output)
