# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Encode raw bytes as base64 symbols.

Every group of three bytes becomes four symbols:

                 7             0 7             0 7             0
    bytes       [a a a a a a a a|b b b b b b b b|c c c c c c c c]
    symbols     [a a a a a a|a a b b b b|b b b b c c|c c c c c c]

A final group of one or two bytes is zero-filled, cut short to two or three
symbols, and padded with the terminator (if the alphabet has one).
"""


# type annotations
from __future__ import annotations
from typing import Iterator, Protocol

# internal libs
from b64stream.core.logging import Logger
from b64stream.codec.alphabet import Codec

# public interface
__all__ = ['GroupSource', 'encode_group', 'encode_tail', 'iter_encode', 'iter_encode_groups', ]

# initialize module level logger
log = Logger.with_name(__name__)


class GroupSource(Protocol):
    """Iterable of 3-byte groups with the 0-2 leftover bytes available afterward."""

    def __iter__(self) -> Iterator[bytes]: ...

    @property
    def tail(self) -> bytes: ...


def encode_group(codec: Codec, group: bytes) -> bytes:
    """Encode exactly three bytes as four symbols."""
    value = int.from_bytes(group, 'big')
    table = codec.forward_12bit
    return table[value >> 12] + table[value & 0xFFF]


def encode_tail(codec: Codec, tail: bytes) -> bytes:
    """Encode the final one or two bytes with terminator padding."""
    if not tail:
        return b''
    if len(tail) > 2:
        raise ValueError(f'Expected at most 2 tail bytes, found {len(tail)}')
    forward = codec.forward
    value = int.from_bytes(tail.ljust(3, b'\x00'), 'big')
    if len(tail) == 1:
        return bytes((forward[value >> 18], forward[(value >> 12) & 0x3F])) + codec.terminator * 2
    else:
        return bytes((forward[value >> 18], forward[(value >> 12) & 0x3F],
                      forward[(value >> 6) & 0x3F])) + codec.terminator


def iter_encode(codec: Codec, data: bytes) -> Iterator[bytes]:
    """Encode an in-memory buffer, yielding one chunk of symbols per group."""
    remainder = len(data) % 3
    end = len(data) - remainder
    table = codec.forward_12bit
    for start in range(0, end, 3):
        value = int.from_bytes(data[start:start + 3], 'big')
        yield table[value >> 12] + table[value & 0xFFF]
    if remainder:
        yield encode_tail(codec, data[end:])


def iter_encode_groups(codec: Codec, source: GroupSource) -> Iterator[bytes]:
    """Encode groups pulled from `source`, finishing with its tail."""
    count = 0
    for group in source:
        count += 1
        yield encode_group(codec, group)
    log.trace(f'Encoded {count} groups from source (tail={len(source.tail)})', extra={'alphabet': codec.label})
    if source.tail:
        yield encode_tail(codec, source.tail)
