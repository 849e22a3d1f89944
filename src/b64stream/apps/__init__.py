# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Console application infrastructure."""


# type annotations
from __future__ import annotations
from typing import IO, Iterator, Optional

# standard libs
import sys
from contextlib import contextmanager

# internal libs
from b64stream.codec import Codec
from b64stream.codec.stream import configured_chunksize

# public interface
__all__ = ['load_codec', 'load_chunksize', 'open_input', 'open_output', ]


def load_codec(alphabet: Optional[str] = None, terminator: Optional[str] = None,
               no_padding: bool = False) -> Codec:
    """
    Build codec from command-line options, falling back on configuration.

    With no alphabet given, the configured alphabet (and terminator) apply.
    An explicit terminator or `no_padding` overrides either.
    """
    if no_padding:
        terminator = ''
    base = Codec.from_config()
    if alphabet is None:
        if terminator is None:
            return base
        return Codec.from_name(base.alphabet.name or base.alphabet.text, terminator, lookback=base.lookback)
    return Codec.from_name(alphabet, terminator, lookback=base.lookback)


def load_chunksize(chunksize: Optional[int] = None) -> int:
    """Chunk size from command-line option, falling back on configuration."""
    if chunksize is not None:
        return chunksize
    return configured_chunksize()


@contextmanager
def open_input(path: str) -> Iterator[IO[bytes]]:
    """Open `path` for binary reading ('-' is standard input)."""
    if path == '-':
        yield sys.stdin.buffer
    else:
        with open(path, mode='rb') as stream:
            yield stream


@contextmanager
def open_output(path: str) -> Iterator[IO[bytes]]:
    """Open `path` for binary writing ('-' is standard output)."""
    if path == '-':
        yield sys.stdout.buffer
        sys.stdout.buffer.flush()
    else:
        with open(path, mode='wb') as stream:
            yield stream
