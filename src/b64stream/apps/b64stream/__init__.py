# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Entry-point for b64stream command-line interface."""


# standard libs
import sys

# external libs
from cmdkit.app import Application, ApplicationGroup
from cmdkit.cli import Interface

# internal libs
from b64stream.__meta__ import (__version__, __description__,
                                __copyright__, __developer__, __website__)
from b64stream.core.logging import Logger
from b64stream.apps.b64stream import encode, decode, alphabet

# public interface
__all__ = ['B64StreamApp', 'main', ]


PROGRAM = 'b64stream'
USAGE = f"""\
usage: {PROGRAM} [-h] [-v] <command> [<args>...]
{__description__}\
"""

EPILOG = f"""\
Documentation and issue tracking at:
{__website__}

Copyright {__copyright__}
{__developer__}\
"""

HELP = f"""\
{USAGE}

commands:
encode                 {encode.__doc__}
decode                 {decode.__doc__}
alphabet               {alphabet.__doc__}

options:
-h, --help             Show this message and exit.
-v, --version          Show the version and exit.

Use the -h/--help flag with the above commands to
learn more about their usage.

{EPILOG}\
"""


# initialize application logger
log = Logger.with_name('b64stream')


# logging setup for command-line interface
Application.log_critical = log.critical
Application.log_exception = log.exception


class B64StreamApp(ApplicationGroup):
    """Top-level application class for b64stream."""

    interface = Interface(PROGRAM, USAGE, HELP)
    interface.add_argument('command')
    interface.add_argument('-v', '--version', action='version', version=__version__)

    command = None
    commands = {'encode': encode.EncodeApp,
                'decode': decode.DecodeApp,
                'alphabet': alphabet.AlphabetApp,
                }


def main() -> int:
    """Entry-point for `b64stream` console application."""
    return B64StreamApp.main(sys.argv[1:])
