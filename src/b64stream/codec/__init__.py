# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Base64 encoding and decoding with selectable alphabets.

Both `encode` and `decode` accept either an in-memory buffer or a stream,
and either return the assembled result or push chunks to a sink:

    >>> encode(b'This is a string')
    b'VGhpcyBpcyBhIHN0cmluZw=='
    >>> decode('RHVkZSEgV2hlcmUgaXMgbXkgY2FyPz8/Cg==')
    b'Dude! Where is my car???\\n'
    >>> with open('data.bin', mode='rb') as source, open('data.b64', mode='wb') as output:
    ...     encode(source, output)

Without an explicit `codec`, the active codec of the default registry
(see `select_alphabet`) is captured once when the operation starts.
"""


# type annotations
from __future__ import annotations
from typing import Any, Callable, Iterable, Optional, Union

# internal libs
from b64stream.codec.errors import CodecError, InvalidAlphabet, InvalidTerminator, UnsupportedInvocation
from b64stream.codec.alphabet import (Alphabet, ScanPattern, Codec, Registry, registry, select_alphabet,
                                      KNOWN_ALPHABETS, ALIASES, DEFAULT_ALPHABET, DEFAULT_LOOKBACK)
from b64stream.codec.encode import iter_encode, iter_encode_groups
from b64stream.codec.decode import iter_decode
from b64stream.codec.stream import EncodeSource, DecodeSource, DEFAULT_CHUNKSIZE

# public interface
__all__ = ['encode', 'decode', 'select_alphabet', 'Alphabet', 'ScanPattern', 'Codec', 'Registry', 'registry',
           'EncodeSource', 'DecodeSource', 'CodecError', 'InvalidAlphabet', 'InvalidTerminator',
           'UnsupportedInvocation', 'KNOWN_ALPHABETS', 'ALIASES', 'DEFAULT_ALPHABET', 'DEFAULT_LOOKBACK',
           'DEFAULT_CHUNKSIZE', ]


Sink = Callable[[bytes], Any]
BUFFER_TYPES = (bytes, bytearray, memoryview)


def _resolve_sink(sink: Any) -> Optional[Sink]:
    """Accept a callable or anything with a `write` method."""
    if sink is None or callable(sink):
        return sink
    if callable(getattr(sink, 'write', None)):
        return sink.write
    raise UnsupportedInvocation(f'Expected callable or writable sink, found {sink.__class__.__name__}')


def _deliver(chunks: Iterable[bytes], sink: Optional[Sink]) -> Optional[bytes]:
    """Push `chunks` to `sink`, or assemble them if there is none."""
    if sink is None:
        return b''.join(chunks)
    for chunk in chunks:
        sink(chunk)
    return None


def encode(source: Union[bytes, str, EncodeSource, Any], sink: Any = None,
           codec: Codec = None) -> Optional[bytes]:
    """
    Encode `source` as base64.

    Args:
        source: Raw bytes, a string (text, encoded as UTF-8 first), an
            `EncodeSource`, or an open binary stream. To encode the bytes
            0xFB 0xFF, pass `b'\\xfb\\xff'` rather than `'\\xfb\\xff'`.
        sink: Callable or writable receiving each chunk of symbols. Required
            for stream sources. If omitted, the full result is returned.
        codec: Codec to use instead of the active one.

    Raises:
        UnsupportedInvocation: Stream source without sink, or unknown
            source or sink type.
    """
    codec = codec if codec is not None else registry.active
    sink = _resolve_sink(sink)
    if isinstance(source, str):
        source = source.encode('utf-8')
    if isinstance(source, BUFFER_TYPES):
        return _deliver(iter_encode(codec, bytes(source)), sink)
    if not isinstance(source, EncodeSource):
        if not callable(getattr(source, 'read', None)):
            raise UnsupportedInvocation(f'Cannot encode from {source.__class__.__name__}')
        source = EncodeSource(source)
    if sink is None:
        raise UnsupportedInvocation('Encoding from a stream requires an output sink')
    _deliver(iter_encode_groups(codec, source), sink)
    return None


def decode(source: Union[bytes, str, DecodeSource, Any], sink: Any = None,
           codec: Codec = None) -> Optional[bytes]:
    """
    Decode base64 `source` back to raw bytes.

    Args:
        source: Encoded bytes or string (noise is skipped, as is any
            character above U+00FF), a `DecodeSource`, or an open stream.
        sink: Callable or writable receiving each chunk of decoded bytes.
            Required for stream sources. If omitted, the full result is returned.
        codec: Codec to use instead of the active one. A `DecodeSource`
            already carries its own codec.

    Raises:
        UnsupportedInvocation: Stream source without sink, unknown source or
            sink type, or a `DecodeSource` with a different codec.
    """
    sink = _resolve_sink(sink)
    if isinstance(source, DecodeSource):
        if codec is not None and codec != source.codec:
            raise UnsupportedInvocation('DecodeSource was built for a different codec')
        codec = source.codec
    codec = codec if codec is not None else registry.active
    if isinstance(source, str):
        # non-8-bit characters can never be symbols
        source = source.encode('latin-1', errors='ignore')
    if isinstance(source, BUFFER_TYPES):
        return _deliver(iter_decode(codec, bytes(source)), sink)
    if not isinstance(source, DecodeSource):
        if not callable(getattr(source, 'read', None)):
            raise UnsupportedInvocation(f'Cannot decode from {source.__class__.__name__}')
        source = DecodeSource(source, codec)
    if sink is None:
        raise UnsupportedInvocation('Decoding from a stream requires an output sink')
    _deliver(source, sink)
    return None
