# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Show the effective alphabet and terminator."""


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
from b64stream.core.ansi import bold, faint
from b64stream.core.logging import Logger
from b64stream.core.exceptions import log_exception
from b64stream.codec import Codec, Registry, ALIASES, InvalidAlphabet, InvalidTerminator
from b64stream.apps import load_codec

# public interface
__all__ = ['AlphabetApp', ]

# application logger
log = Logger.with_name('b64stream')


PROGRAM = 'b64stream alphabet'
USAGE = f"""\
usage: {PROGRAM} [-h] [ALPHABET] [-t CHAR | --no-padding] [--all]
{__doc__}\
"""

HELP = f"""\
{USAGE}

Validates the alphabet and prints it on the first line and the
terminator on the second (empty if there is none).

arguments:
ALPHABET                   Alphabet name or 64 symbols (default from config).

options:
-t, --terminator    CHAR   Padding symbol (overrides alphabet's own).
    --no-padding           No padding symbol.
    --all                  List all known alphabets.
-h, --help                 Show this message and exit.\
"""


class AlphabetApp(Application):
    """Application class for alphabet command."""

    interface = Interface(PROGRAM, USAGE, HELP)
    ALLOW_NOARGS = True

    alphabet: Optional[str] = None
    interface.add_argument('alphabet', nargs='?', default=None)

    terminator: Optional[str] = None
    no_padding: bool = False
    padding_interface = interface.add_mutually_exclusive_group()
    padding_interface.add_argument('-t', '--terminator', default=None)
    padding_interface.add_argument('--no-padding', action='store_true')

    show_all: bool = False
    interface.add_argument('--all', action='store_true', dest='show_all')

    exceptions = {
        InvalidAlphabet: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        InvalidTerminator: partial(log_exception, logger=log.critical, status=exit_status.bad_argument),
        ConfigurationError: partial(log_exception, logger=log.critical, status=exit_status.bad_config),
        **Application.exceptions,
    }

    def run(self) -> None:
        """Business logic for `b64stream alphabet`."""
        if self.show_all:
            self.show_known()
        else:
            codec = load_codec(self.alphabet, self.terminator, self.no_padding)
            print(codec.alphabet.text)
            print(codec.alphabet.terminator_text)

    @staticmethod
    def show_known() -> None:
        """Print each known alphabet with its aliases and terminator."""
        tty = sys.stdout.isatty()
        for name in Registry.names():
            aliases = [alias for alias, target in ALIASES.items() if target == name]
            codec = Codec.from_name(name)
            label = f'{", ".join([name, *aliases]):<28}'
            terminator = repr(codec.alphabet.terminator_text)
            if tty:
                label, terminator = bold(label), faint(terminator)
            print(f'{label} {codec.alphabet.text} {terminator}')
