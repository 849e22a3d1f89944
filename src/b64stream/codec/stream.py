# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Pull-based adapters over external byte streams.

The adapters let the engines work on open files (or anything with a `read`
method) in bounded memory. Both are lazy, finite, and non-restartable; a
caller abandons an operation simply by no longer pulling from the adapter.
"""


# type annotations
from __future__ import annotations
from typing import Iterator, Optional, Protocol, Union

# external libs
from cmdkit.config import ConfigurationError

# internal libs
from b64stream.core.config import config, blame
from b64stream.core.logging import Logger
from b64stream.codec.alphabet import Codec, registry
from b64stream.codec.decode import decode_group, decode_tail
from b64stream.codec.errors import UnsupportedInvocation

# public interface
__all__ = ['ByteStream', 'EncodeSource', 'DecodeSource', 'DEFAULT_CHUNKSIZE', 'configured_chunksize', ]

# initialize module level logger
log = Logger.with_name(__name__)


DEFAULT_CHUNKSIZE = 2048


def configured_chunksize() -> int:
    """Chunk size for stream decoding from `codec.chunksize` in the configuration."""
    label = blame(config, 'codec', 'chunksize')
    try:
        value = int(config.codec.get('chunksize', DEFAULT_CHUNKSIZE))
    except (TypeError, ValueError) as error:
        raise ConfigurationError(f'Expected integer for `codec.chunksize` ({label})') from error
    if value < 1:
        raise ConfigurationError(f'Expected positive `codec.chunksize` ({label})')
    return value


class ByteStream(Protocol):
    """Anything that can read up to `size` bytes (empty at end of stream)."""

    def read(self, size: int) -> Union[bytes, str]: ...


class EncodeSource:
    """
    Pull successive 3-byte groups from a binary stream for encoding.

    Iteration stops at the first incomplete group; the 0-2 bytes left over
    are then available as `tail`.

    Example:
        >>> source = EncodeSource(io.BytesIO(b'abcdefgh'))
        >>> list(source)
        [b'abc', b'def']
        >>> source.tail
        b'gh'
    """

    _stream: ByteStream
    _tail: bytes
    _exhausted: bool

    def __init__(self, stream: ByteStream) -> None:
        """Wrap an open binary `stream`."""
        self._stream = stream
        self._tail = b''
        self._exhausted = False

    @property
    def tail(self) -> bytes:
        """Leftover bytes after the last complete group (valid once exhausted)."""
        return self._tail

    @property
    def exhausted(self) -> bool:
        """True once the end of the stream has been reached."""
        return self._exhausted

    def __iter__(self) -> EncodeSource:
        return self

    def __next__(self) -> bytes:
        if self._exhausted:
            raise StopIteration
        group = self._read_group()
        if len(group) == 3:
            return group
        self._tail = group
        self._exhausted = True
        raise StopIteration

    def _read(self, size: int) -> bytes:
        data = self._stream.read(size)
        if isinstance(data, str):
            raise UnsupportedInvocation('Encoding requires a binary stream (found text)')
        return data or b''

    def _read_group(self) -> bytes:
        """Read exactly three bytes unless the stream ends first."""
        group = self._read(3)
        while 0 < len(group) < 3:
            more = self._read(3 - len(group))
            if not more:
                break
            group += more
        return group


class DecodeSource:
    """
    Lazily decode a stream of base64 symbols, one group at a time.

    Each pull reads at most one chunk (`chunksize` bytes) from the stream.
    Only a few symbols are retained between chunks: the symbols of a group
    split across a chunk boundary and the last three symbols or terminators
    (to find the final group). Unlike decoding a whole buffer, the final
    group is located exactly, without a lookback bound.

    The codec is captured on construction (defaults to the active codec).
    The chunk size defaults to `codec.chunksize` from the configuration.

    Example:
        >>> source = DecodeSource(io.BytesIO(b'SGVs\\nbG8='))
        >>> b''.join(source)
        b'Hello'
    """

    _stream: ByteStream
    _codec: Codec
    _chunksize: int
    _chunks: Iterator[bytes]

    def __init__(self, stream: ByteStream, codec: Optional[Codec] = None,
                 chunksize: Optional[int] = None) -> None:
        """Wrap an open `stream` (binary or text)."""
        if chunksize is None:
            chunksize = configured_chunksize()
        if not isinstance(chunksize, int) or chunksize < 1:
            raise ValueError(f'Expected positive integer for chunksize, found {chunksize!r}')
        self._stream = stream
        self._codec = codec if codec is not None else registry.active
        self._chunksize = chunksize
        self._chunks = self._generate()

    @property
    def codec(self) -> Codec:
        """The codec used for decoding."""
        return self._codec

    @property
    def chunksize(self) -> int:
        """Bytes read from the stream per pull."""
        return self._chunksize

    def __iter__(self) -> DecodeSource:
        return self

    def __next__(self) -> bytes:
        return next(self._chunks)

    def _read(self) -> bytes:
        data = self._stream.read(self._chunksize)
        if isinstance(data, str):
            # non-8-bit characters can never be symbols
            return data.encode('latin-1', errors='ignore')
        return data or b''

    def _generate(self) -> Iterator[bytes]:
        codec = self._codec
        invalid = codec.pattern.invalid
        terminator = codec.terminator
        residue = b''   # symbols not yet forming a full group
        trailing = b''  # last three symbols or terminators seen
        final = b''     # most recent three symbols followed by a terminator
        count = 0
        while True:
            chunk = self._read()
            if not chunk:
                break
            count += 1
            valid = invalid.sub(b'', chunk)
            if terminator:
                window = trailing + valid
                index = window.rfind(terminator)
                if index >= 3:
                    final = window[index - 3:index + 1]
                trailing = window[-3:]
                symbols = residue + valid.replace(terminator, b'')
            else:
                symbols = residue + valid
            end = len(symbols) - len(symbols) % 4
            for start in range(0, end, 4):
                yield decode_group(codec, symbols[start:start + 4])
            residue = symbols[end:]
        log.trace(f'Decoded {count} chunks from stream', extra={'alphabet': codec.label})
        if terminator:
            if not final and residue:
                log.debug(f'Dropped {len(residue)} trailing symbol(s) without terminator',
                          extra={'alphabet': codec.label})
        else:
            final = residue
        tail = decode_tail(codec, final)
        if tail:
            yield tail
