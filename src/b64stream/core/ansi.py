# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""ANSI escape sequences for colorizing text output."""


# standard libs
import functools
from enum import Enum

# public interface
__all__ = ['Ansi', 'colorize', 'bold', 'faint', ]


class Ansi(Enum):
    """ANSI escape sequences for formatting and foreground colors."""

    NULL = ''
    RESET = '\033[0m'
    BOLD = '\033[1m'
    FAINT = '\033[2m'
    ITALIC = '\033[3m'
    UNDERLINE = '\033[4m'
    BLACK = '\033[30m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'


def colorize(text: str, color: str) -> str:
    """Apply an ANSI `color` (or format) code to the given `text`."""
    return Ansi[color.upper()].value + text + Ansi.RESET.value


# named formats
bold = functools.partial(colorize, color='bold')
faint = functools.partial(colorize, color='faint')
