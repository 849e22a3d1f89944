# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Fixtures for unit tests."""


# type annotations
from __future__ import annotations
from typing import Dict, Iterator, Optional, Tuple, Union

# external libs
import pytest

# internal libs
from b64stream.codec import Codec, registry


# Alphabet configurations exercised by property tests (name: (alphabet, terminator))
CODEC_CONFIGS: Dict[str, Tuple[Union[str, bytes], Optional[str]]] = {
    'standard': ('base64', None),
    'urlsafe': ('base64url', None),
    'urlsafe-padded': ('base64url', '='),
    'standard-unpadded': ('base64', ''),
    'punctuation': (bytes(range(33, 97)), '~'),   # regex metacharacters as symbols
    'high-bytes': (bytes(range(160, 224)), ''),   # 8-bit symbols, no terminator
}


def build_codec(name: str, lookback: Optional[int] = 100) -> Codec:
    """Build codec from one of the named test configurations."""
    alphabet, terminator = CODEC_CONFIGS[name]
    return Codec.from_name(alphabet, terminator, lookback=lookback)


def noise_for(codec: Codec) -> bytes:
    """All byte values that are neither symbols nor the terminator."""
    return bytes(value for value in range(256)
                 if codec.reverse[value] < 0 and bytes([value]) != codec.terminator)


@pytest.fixture
def restore_registry() -> Iterator[None]:
    """Tests that select an alphabet must not leak it into other tests."""
    active = registry.active
    yield
    registry.activate(active)
