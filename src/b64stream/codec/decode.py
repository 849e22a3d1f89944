# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Decode base64 symbols back to raw bytes.

Decoding is tolerant: any byte that is not a symbol of the alphabet
(whitespace, line breaks, punctuation) is skipped wherever it occurs, and
every four symbols found form one group of three bytes.

The final group of a buffer is found differently depending on the alphabet.
With a terminator, it is the rightmost three symbols (or terminators)
followed by a terminator, searched for only within the last `lookback`
bytes of the buffer. Without a terminator, it is the one to three symbols
remaining after the last full group. Trailing fragments that cannot form a
byte are dropped, not rejected.

Noise is stripped in a single pass before grouping, so decoding time is
linear in the size of the input however much noise it contains.
"""


# type annotations
from __future__ import annotations
from typing import Iterator

# internal libs
from b64stream.core.logging import Logger
from b64stream.codec.alphabet import Codec

# public interface
__all__ = ['decode_group', 'decode_tail', 'locate_tail', 'iter_decode', ]

# initialize module level logger
log = Logger.with_name(__name__)


def decode_group(codec: Codec, symbols: bytes) -> bytes:
    """Decode exactly four alphabet symbols as three bytes."""
    reverse = codec.reverse
    value = ((reverse[symbols[0]] << 18) | (reverse[symbols[1]] << 12) |
             (reverse[symbols[2]] << 6) | reverse[symbols[3]])
    return value.to_bytes(3, 'big')


def decode_tail(codec: Codec, symbols: bytes) -> bytes:
    """
    Decode the final group of a stream.

    Only the symbols before the first terminator count: two symbols give one
    byte, three symbols give two bytes. Anything shorter gives nothing.
    """
    if codec.terminator:
        index = symbols.find(codec.terminator)
        if index != -1:
            symbols = symbols[:index]
    if len(symbols) not in (2, 3):
        if symbols:
            log.debug(f'Dropped final group with {len(symbols)} usable symbol(s)', extra={'alphabet': codec.label})
        return b''
    reverse = codec.reverse
    indices = [reverse[value] for value in symbols]
    if min(indices) < 0:
        log.debug('Dropped final group with symbols outside the alphabet', extra={'alphabet': codec.label})
        return b''
    indices += [0] * (4 - len(indices))
    value = (indices[0] << 18) | (indices[1] << 12) | (indices[2] << 6) | indices[3]
    return value.to_bytes(3, 'big')[:len(symbols) - 1]


def locate_tail(codec: Codec, data: bytes) -> bytes:
    """
    Find the final group of `data` (noise removed).

    With a terminator, this is the last terminator together with the three
    symbols or terminators before it, searched for within the last `lookback`
    bytes only. Without one, it is whatever symbols follow the last full group.
    """
    if not codec.terminator:
        symbols = codec.pattern.noise.sub(b'', data)
        return symbols[len(symbols) - len(symbols) % 4:]
    window = data
    if codec.lookback is not None and len(data) > codec.lookback:
        window = data[-codec.lookback:]
    valid = codec.pattern.invalid.sub(b'', window)
    index = valid.rfind(codec.terminator)
    if index < 3:
        return b''
    return valid[index - 3:index + 1]


def iter_decode(codec: Codec, data: bytes) -> Iterator[bytes]:
    """Decode an in-memory buffer, yielding one chunk of bytes per group."""
    symbols = codec.pattern.noise.sub(b'', data)
    end = len(symbols) - len(symbols) % 4
    for start in range(0, end, 4):
        yield decode_group(codec, symbols[start:start + 4])
    if codec.terminator:
        final = locate_tail(codec, data)
        if not final and end < len(symbols):
            log.debug(f'Dropped {len(symbols) - end} trailing symbol(s) without terminator',
                      extra={'alphabet': codec.label})
    else:
        final = symbols[end:]
    tail = decode_tail(codec, final)
    if tail:
        yield tail
