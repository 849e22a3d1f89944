# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""
Alphabets, derived lookup tables, and the registry of the active codec.

A `Codec` captures an `Alphabet` together with everything derived from it:
the forward table (6-bit index to symbol), the reverse table (symbol to
6-bit index), and the scan patterns used to pick valid symbols out of noisy
input. Codecs are immutable; selecting a different alphabet builds a new one.

Example:
    >>> codec = Codec.from_name('base64url')
    >>> codec.alphabet.terminator
    b''
    >>> select_alphabet('base64')
    ('ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/', '=')
"""


# type annotations
from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional, Pattern, Tuple, Type, Union

# standard libs
import re
import sys

# external libs
from cmdkit.app import exit_status
from cmdkit.config import Namespace, ConfigurationError

# internal libs
from b64stream.core.config import config, blame
from b64stream.core.logging import Logger
from b64stream.core.exceptions import write_traceback
from b64stream.codec.errors import CodecError, InvalidAlphabet, InvalidTerminator

# public interface
__all__ = ['Alphabet', 'ScanPattern', 'Codec', 'Registry', 'registry', 'select_alphabet',
           'KNOWN_ALPHABETS', 'ALIASES', 'DEFAULT_ALPHABET', 'DEFAULT_LOOKBACK', ]

# initialize module level logger
log = Logger.with_name(__name__)


STANDARD_SYMBOLS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/'
URLSAFE_SYMBOLS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_'


KNOWN_ALPHABETS: Dict[str, Tuple[str, str]] = {
    'base64': (STANDARD_SYMBOLS, '='),     # RFC 2045 (without the line length limit)
    'base64url': (URLSAFE_SYMBOLS, ''),    # RFC 4648 'base64url'
}


ALIASES: Dict[str, str] = {
    'standard': 'base64',
    'urlsafe': 'base64url',
    'url-safe': 'base64url',
}


DEFAULT_ALPHABET = 'base64'
DEFAULT_LOOKBACK = 100


SymbolsType = Union[str, bytes, bytearray]


def _to_bytes(value: SymbolsType, error: Type[CodecError], label: str) -> bytes:
    """Coerce `value` to bytes, requiring every symbol to fit in 8 bits."""
    if isinstance(value, str):
        try:
            return value.encode('latin-1')
        except UnicodeEncodeError as exc:
            raise error(f'Symbols in {label} must be 8-bit, found {value[exc.start]!r}') from exc
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise error(f'Expected str or bytes for {label}, found {value.__class__.__name__}({value!r})')


class Alphabet(NamedTuple):
    """The 64 ordered symbols and the optional terminator."""

    symbols: bytes
    terminator: bytes = b''
    name: Optional[str] = None

    @classmethod
    def from_symbols(cls, symbols: SymbolsType, terminator: Optional[SymbolsType] = None,
                     name: str = None) -> Alphabet:
        """Validate and build from explicit `symbols` and `terminator`."""
        symbols = _to_bytes(symbols, InvalidAlphabet, 'alphabet')
        if len(symbols) != 64:
            raise InvalidAlphabet(f'Expected 64 symbols in alphabet, found {len(symbols)}')
        duplicates = sorted({value for value in symbols if symbols.count(value) > 1})
        if duplicates:
            listing = ', '.join(repr(chr(value)) for value in duplicates)
            raise InvalidAlphabet(f'Duplicate symbols in alphabet: {listing}')
        terminator = b'' if terminator is None else _to_bytes(terminator, InvalidTerminator, 'terminator')
        if len(terminator) > 1:
            raise InvalidTerminator(f'Expected zero or one terminator symbol, found {len(terminator)}')
        if terminator and terminator in symbols:
            raise InvalidTerminator(f'Terminator {chr(terminator[0])!r} must not exist in alphabet')
        return cls(symbols, terminator, name)

    @classmethod
    def from_name(cls, name_or_symbols: SymbolsType, terminator: Optional[SymbolsType] = None) -> Alphabet:
        """
        Look up a known alphabet by name or build from explicit symbols.

        For a known name, `terminator=None` keeps that alphabet's own terminator.
        For explicit symbols, `terminator=None` means no terminator.
        """
        if isinstance(name_or_symbols, str):
            key = name_or_symbols.lower()
            key = ALIASES.get(key, key)
            if key in KNOWN_ALPHABETS:
                symbols, own_terminator = KNOWN_ALPHABETS[key]
                return cls.from_symbols(symbols, own_terminator if terminator is None else terminator, name=key)
        return cls.from_symbols(name_or_symbols, terminator)

    @property
    def text(self) -> str:
        """The symbols as a string."""
        return self.symbols.decode('latin-1')

    @property
    def terminator_text(self) -> str:
        """The terminator as a string (empty if none)."""
        return self.terminator.decode('latin-1')


def _char_class(values: bytes, negate: bool = False) -> bytes:
    """Regular expression character class matching exactly `values`."""
    body = b''.join(b'\\x%02x' % value for value in values)
    return b'[^' + body + b']' if negate else b'[' + body + b']'


class ScanPattern(NamedTuple):
    """
    Compiled patterns for stripping noise from input in a single pass.

    `invalid` matches runs of bytes that are neither symbols nor the
    terminator; removing them leaves what the final group is searched in.
    `noise` also matches the terminator; removing it leaves only symbols.
    Neither pattern backtracks, so stripping is linear in the input.
    """

    invalid: Pattern[bytes]
    noise: Pattern[bytes]

    @classmethod
    def from_alphabet(cls, alphabet: Alphabet) -> ScanPattern:
        """Derive all patterns from `alphabet`."""
        valid = alphabet.symbols + alphabet.terminator
        return cls(invalid=re.compile(_char_class(valid, negate=True) + b'+'),
                   noise=re.compile(_char_class(alphabet.symbols, negate=True) + b'+'))


class Codec:
    """
    An alphabet with all derived lookup tables and scan patterns.

    Codecs are immutable values. Every encode and decode operation uses exactly
    one codec for its whole duration.

    Args:
        alphabet (Alphabet):
            Validated alphabet and terminator.
        lookback (int):
            Number of bytes searched from the end of a buffer for the final
            (terminated) group when decoding. Inputs with more trailing noise
            than this after the real final group lose that group. Use `None`
            to search the whole buffer.
    """

    __slots__ = ('_alphabet', '_lookback', '_forward', '_forward_12bit', '_reverse', '_pattern')

    def __init__(self, alphabet: Alphabet, lookback: Optional[int] = DEFAULT_LOOKBACK) -> None:
        """Build all tables for `alphabet`."""
        if lookback is not None and (not isinstance(lookback, int) or lookback < 1):
            raise ValueError(f'Expected positive integer or None for lookback, found {lookback!r}')
        forward = alphabet.symbols
        reverse = [-1] * 256
        for index, value in enumerate(forward):
            reverse[value] = index
        self._alphabet = alphabet
        self._lookback = lookback
        self._forward = forward
        self._forward_12bit = tuple(bytes((forward[value >> 6], forward[value & 0x3F]))
                                    for value in range(4096))
        self._reverse = tuple(reverse)
        self._pattern = ScanPattern.from_alphabet(alphabet)
        log.trace(f'Built codec ({self})', extra={'alphabet': self.label})

    @classmethod
    def from_name(cls, name_or_symbols: SymbolsType, terminator: Optional[SymbolsType] = None,
                  lookback: Optional[int] = DEFAULT_LOOKBACK) -> Codec:
        """Build codec from a known alphabet name or explicit symbols."""
        return cls(Alphabet.from_name(name_or_symbols, terminator), lookback=lookback)

    @classmethod
    def from_config(cls, cfg: Union[dict, Namespace] = None) -> Codec:
        """
        Build codec from the 'codec' section of the configuration.

        A `lookback` of zero disables the bound on the tail search.
        """
        section = cfg if cfg is not None else config.codec

        def label(name: str) -> str:
            return '' if cfg is not None else f' ({blame(config, "codec", name)})'

        try:
            lookback = int(section.get('lookback', DEFAULT_LOOKBACK))
        except (TypeError, ValueError) as error:
            raise ConfigurationError(f'Expected integer for `codec.lookback`{label("lookback")}') from error
        if lookback < 0:
            raise ConfigurationError(f'Expected non-negative `codec.lookback`{label("lookback")}')
        try:
            return cls.from_name(section.get('alphabet', DEFAULT_ALPHABET),
                                 section.get('terminator', None),
                                 lookback=lookback or None)
        except InvalidAlphabet as error:
            raise ConfigurationError(f'{error}{label("alphabet")}') from error
        except InvalidTerminator as error:
            raise ConfigurationError(f'{error}{label("terminator")}') from error

    @property
    def alphabet(self) -> Alphabet:
        """The alphabet and terminator of this codec."""
        return self._alphabet

    @property
    def label(self) -> str:
        """Short name for log messages ('custom' for explicit symbols)."""
        return self._alphabet.name or 'custom'

    @property
    def terminator(self) -> bytes:
        """Terminator symbol (empty if none)."""
        return self._alphabet.terminator

    @property
    def lookback(self) -> Optional[int]:
        """Bound on the tail search in buffer mode."""
        return self._lookback

    @property
    def forward(self) -> bytes:
        """Symbol for each 6-bit index."""
        return self._forward

    @property
    def forward_12bit(self) -> Tuple[bytes, ...]:
        """Pair of symbols for each 12-bit value."""
        return self._forward_12bit

    @property
    def reverse(self) -> Tuple[int, ...]:
        """6-bit index for each byte value, -1 if not in the alphabet."""
        return self._reverse

    @property
    def pattern(self) -> ScanPattern:
        """Scan patterns derived from the alphabet."""
        return self._pattern

    def __eq__(self, other: Codec) -> bool:
        if not isinstance(other, Codec):
            return NotImplemented
        return (self._alphabet.symbols, self.terminator, self._lookback) == \
               (other._alphabet.symbols, other.terminator, other._lookback)

    def __hash__(self) -> int:
        return hash((self._alphabet.symbols, self.terminator, self._lookback))

    def __repr__(self) -> str:
        """Interactive representation."""
        return (f'<{self.__class__.__name__}({self.label}, alphabet={self._alphabet.text!r}, '
                f'terminator={self._alphabet.terminator_text!r}, lookback={self._lookback})>')


class Registry:
    """Holds the active codec used when an operation is not given one."""

    _active: Codec

    def __init__(self, codec: Codec = None) -> None:
        """Initialize with `codec` (defaults to the standard alphabet)."""
        self._active = codec if codec is not None else Codec.from_name(DEFAULT_ALPHABET)

    @classmethod
    def from_config(cls, cfg: Union[dict, Namespace] = None) -> Registry:
        """Initialize with the codec described by the configuration."""
        return cls(Codec.from_config(cfg))

    @property
    def active(self) -> Codec:
        """The most recently selected codec."""
        return self._active

    def activate(self, codec: Codec) -> Codec:
        """Make an already built `codec` the active one."""
        if not isinstance(codec, Codec):
            raise TypeError(f'Expected Codec, found {codec.__class__.__name__}')
        self._active = codec
        log.debug(f'Selected alphabet (terminator={codec.alphabet.terminator_text!r})',
                  extra={'alphabet': codec.label})
        return codec

    def select(self, name_or_symbols: SymbolsType, terminator: Optional[SymbolsType] = None) -> Codec:
        """
        Replace the active codec with one built for the given alphabet.

        Raises InvalidAlphabet or InvalidTerminator immediately, leaving the
        active codec untouched. Operations already in progress keep the codec
        they started with.
        """
        return self.activate(Codec.from_name(name_or_symbols, terminator, lookback=self._active.lookback))

    @staticmethod
    def names() -> List[str]:
        """Known alphabet names (without aliases)."""
        return list(KNOWN_ALPHABETS)


# process-wide default registry starts from the configured alphabet
try:
    registry = Registry.from_config()
except ConfigurationError as error:
    write_traceback(error, module=__name__)
    sys.exit(exit_status.bad_config)


def select_alphabet(name_or_symbols: SymbolsType, terminator: Optional[SymbolsType] = None) -> Tuple[str, str]:
    """
    Select the active alphabet for subsequent operations on the default registry.

    Returns the effective alphabet and terminator as strings.
    """
    codec = registry.select(name_or_symbols, terminator)
    return codec.alphabet.text, codec.alphabet.terminator_text
