# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Tolerant, streaming base64 encoding and decoding.

This package provides a base64 transcoding engine with support for the
standard and URL-safe alphabets as well as fully custom alphabets, operating
on whole buffers or on streams in bounded memory.
"""


# standard libs
import sys

# external libs
from rich.traceback import install as enable_rich_tracebacks

# internal libs (forced initialization)
from b64stream.__meta__ import (__appname__, __version__, __authors__, __developer__, __contact__,
                                __license__, __website__, __copyright__, __description__, __keywords__)
from b64stream.core.config import config
from b64stream.core import logging

# public interface
__all__ = ['__appname__', '__version__', '__authors__', '__developer__', '__contact__',
           '__license__', '__website__', '__copyright__', '__description__', '__keywords__', ]


# Enable rich tracebacks for interactive shells
if sys.stdout.isatty() and hasattr(sys, 'ps1'):
    enable_rich_tracebacks()
