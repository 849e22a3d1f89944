# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for alphabets, codecs, and the registry."""


# standard libs
import io
import logging

# external libs
import pytest
from cmdkit.config import Namespace, Configuration, ConfigurationError

# internal libs
from b64stream.codec import (Alphabet, Codec, Registry, registry, select_alphabet, encode, decode,
                             InvalidAlphabet, InvalidTerminator, DecodeSource)
from b64stream.codec.alphabet import STANDARD_SYMBOLS, URLSAFE_SYMBOLS


class TestAlphabet:
    """Unit tests for Alphabet validation."""

    @staticmethod
    def test_known_standard() -> None:
        alphabet = Alphabet.from_name('base64')
        assert alphabet.symbols == STANDARD_SYMBOLS.encode()
        assert alphabet.terminator == b'='
        assert alphabet.name == 'base64'

    @staticmethod
    def test_known_urlsafe_is_unpadded() -> None:
        alphabet = Alphabet.from_name('base64url')
        assert alphabet.symbols == URLSAFE_SYMBOLS.encode()
        assert alphabet.terminator == b''

    @staticmethod
    def test_aliases() -> None:
        assert Alphabet.from_name('standard') == Alphabet.from_name('base64')
        assert Alphabet.from_name('URL-safe') == Alphabet.from_name('base64url')
        assert Alphabet.from_name('urlsafe') == Alphabet.from_name('base64url')

    @staticmethod
    def test_known_with_terminator_override() -> None:
        alphabet = Alphabet.from_name('base64url', '=')
        assert alphabet.terminator == b'='
        assert Alphabet.from_name('base64', '').terminator == b''

    @staticmethod
    def test_custom_without_terminator() -> None:
        alphabet = Alphabet.from_name(STANDARD_SYMBOLS[::-1])
        assert alphabet.symbols == STANDARD_SYMBOLS[::-1].encode()
        assert alphabet.terminator == b''
        assert alphabet.name is None

    @staticmethod
    def test_custom_bytes() -> None:
        alphabet = Alphabet.from_name(bytes(range(64)), b'\xff')
        assert alphabet.symbols == bytes(range(64))
        assert alphabet.text == ''.join(chr(value) for value in range(64))
        assert alphabet.terminator_text == '\xff'

    @staticmethod
    def test_too_few_symbols() -> None:
        with pytest.raises(InvalidAlphabet) as exc_info:
            Alphabet.from_name(STANDARD_SYMBOLS[:-1])
        message, = exc_info.value.args
        assert message == 'Expected 64 symbols in alphabet, found 63'

    @staticmethod
    def test_too_many_symbols() -> None:
        with pytest.raises(InvalidAlphabet):
            Alphabet.from_name(STANDARD_SYMBOLS + '-')

    @staticmethod
    def test_duplicate_symbols() -> None:
        with pytest.raises(InvalidAlphabet) as exc_info:
            Alphabet.from_name(STANDARD_SYMBOLS[:-1] + 'A')
        message, = exc_info.value.args
        assert message == 'Duplicate symbols in alphabet: \'A\''

    @staticmethod
    def test_non_8bit_symbols() -> None:
        with pytest.raises(InvalidAlphabet):
            Alphabet.from_name(STANDARD_SYMBOLS[:-1] + '€')

    @staticmethod
    def test_wrong_type() -> None:
        with pytest.raises(InvalidAlphabet):
            Alphabet.from_name(42)  # noqa: wrong type

    @staticmethod
    def test_long_terminator() -> None:
        with pytest.raises(InvalidTerminator) as exc_info:
            Alphabet.from_name('base64', '==')
        message, = exc_info.value.args
        assert message == 'Expected zero or one terminator symbol, found 2'

    @staticmethod
    def test_terminator_in_alphabet() -> None:
        with pytest.raises(InvalidTerminator) as exc_info:
            Alphabet.from_name(STANDARD_SYMBOLS, 'A')
        message, = exc_info.value.args
        assert message == 'Terminator \'A\' must not exist in alphabet'

    @staticmethod
    def test_urlsafe_rejects_dash_terminator() -> None:
        with pytest.raises(InvalidTerminator):
            Alphabet.from_name('base64url', '-')


class TestCodec:
    """Unit tests for derived tables."""

    @staticmethod
    def test_tables_are_inverse() -> None:
        codec = Codec.from_name('base64')
        for index, value in enumerate(codec.forward):
            assert codec.reverse[value] == index
        assert len(codec.reverse) == 256
        assert sum(1 for index in codec.reverse if index < 0) == 192

    @staticmethod
    def test_12bit_table() -> None:
        codec = Codec.from_name('base64')
        assert len(codec.forward_12bit) == 4096
        assert codec.forward_12bit[0] == b'AA'
        assert codec.forward_12bit[4095] == b'//'
        assert codec.forward_12bit[64] == b'BA'

    @staticmethod
    def test_rebuild_is_identical() -> None:
        first, second = Codec.from_name('base64'), Codec.from_name('base64')
        assert first == second
        assert hash(first) == hash(second)
        assert first.forward == second.forward
        assert first.reverse == second.reverse
        assert first.pattern.invalid.pattern == second.pattern.invalid.pattern
        assert first.pattern.noise.pattern == second.pattern.noise.pattern

    @staticmethod
    def test_scan_patterns() -> None:
        codec = Codec.from_name('base64')
        assert codec.pattern.noise.sub(b'', b'QU JD\n=!') == b'QUJD'
        assert codec.pattern.invalid.sub(b'', b'QU JD\n=!') == b'QUJD='

    @staticmethod
    def test_invalid_lookback() -> None:
        with pytest.raises(ValueError):
            Codec.from_name('base64', lookback=0)
        assert Codec.from_name('base64', lookback=None).lookback is None

    @staticmethod
    def test_repr() -> None:
        assert repr(Codec.from_name('base64url')) == (
            f'<Codec(base64url, alphabet=\'{URLSAFE_SYMBOLS}\', terminator=\'\', lookback=100)>')

    @staticmethod
    def test_from_config() -> None:
        codec = Codec.from_config({'alphabet': 'base64url', 'terminator': '=', 'lookback': 0})
        assert codec.alphabet.symbols == URLSAFE_SYMBOLS.encode()
        assert codec.terminator == b'='
        assert codec.lookback is None

    @staticmethod
    def test_from_config_defaults() -> None:
        codec = Codec.from_config({})
        assert codec == Codec.from_name('base64')

    @staticmethod
    def test_from_config_bad_alphabet() -> None:
        with pytest.raises(ConfigurationError):
            Codec.from_config({'alphabet': 'not-an-alphabet'})

    @staticmethod
    def test_from_config_bad_terminator() -> None:
        with pytest.raises(ConfigurationError):
            Codec.from_config({'alphabet': 'base64', 'terminator': 'xx'})

    @staticmethod
    def test_from_config_bad_lookback() -> None:
        with pytest.raises(ConfigurationError):
            Codec.from_config({'lookback': 'far'})
        with pytest.raises(ConfigurationError):
            Codec.from_config({'lookback': -1})


@pytest.mark.usefixtures('restore_registry')
class TestRegistry:
    """Unit tests for alphabet selection."""

    @staticmethod
    def test_select_returns_effective_alphabet() -> None:
        assert select_alphabet('base64') == (STANDARD_SYMBOLS, '=')
        assert select_alphabet('base64url') == (URLSAFE_SYMBOLS, '')
        assert select_alphabet(STANDARD_SYMBOLS[::-1], '.') == (STANDARD_SYMBOLS[::-1], '.')

    @staticmethod
    def test_select_changes_active() -> None:
        select_alphabet('base64url')
        assert registry.active == Codec.from_name('base64url')
        assert encode(b'\xfb\xff') == b'-_8'

    @staticmethod
    def test_select_is_idempotent() -> None:
        select_alphabet('base64')
        first = registry.active
        output = encode(b'idempotent')
        select_alphabet('base64')
        assert registry.active == first
        assert registry.active.forward == first.forward
        assert registry.active.reverse == first.reverse
        assert encode(b'idempotent') == output

    @staticmethod
    def test_failed_select_keeps_active() -> None:
        select_alphabet('base64url')
        with pytest.raises(InvalidAlphabet):
            select_alphabet('ABC')
        with pytest.raises(InvalidTerminator):
            select_alphabet('base64', 'A')
        assert registry.active == Codec.from_name('base64url')

    @staticmethod
    def test_in_flight_decode_keeps_codec() -> None:
        select_alphabet('base64')
        source = DecodeSource(io.BytesIO(b'SGVsbG8s' + b' ' * 4096 + b'IHdvcmxk'), chunksize=16)
        first = next(source)
        select_alphabet(STANDARD_SYMBOLS[::-1])
        assert first + b''.join(source) == b'Hello, world'

    @staticmethod
    def test_separate_registry() -> None:
        local = Registry(Codec.from_name('base64url'))
        local.select('base64')
        assert local.active == Codec.from_name('base64')
        assert registry.active == Codec.from_name('base64')
        assert Registry.names() == ['base64', 'base64url']

    @staticmethod
    def test_explicit_codec_overrides_active() -> None:
        select_alphabet('base64url')
        assert encode(b'\xfb\xff', codec=Codec.from_name('base64')) == b'+/8='
        assert decode(b'+/8=', codec=Codec.from_name('base64')) == b'\xfb\xff'

    @staticmethod
    def test_activate() -> None:
        codec = Codec.from_name('base64url', '=')
        assert registry.activate(codec) is codec
        assert registry.active is codec
        assert encode(b'\xfb\xff') == b'-_8='

    @staticmethod
    def test_activate_wrong_type() -> None:
        with pytest.raises(TypeError) as exc_info:
            registry.activate('base64url')  # noqa: wrong type
        message, = exc_info.value.args
        assert message == 'Expected Codec, found str'
        assert registry.active == Codec.from_name('base64')

    @staticmethod
    def test_activate_logs_alphabet(caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger='b64stream'):
            select_alphabet('base64url')
        record, = [record for record in caplog.records if record.name == 'b64stream.codec.alphabet'
                   and record.getMessage().startswith('Selected alphabet')]
        assert record.alphabet == 'base64url'


class TestRegistryConfig:
    """The default registry follows the configuration."""

    @staticmethod
    def test_default_registry_is_configured() -> None:
        assert registry.active == Codec.from_config()

    @staticmethod
    def test_from_config() -> None:
        local = Registry.from_config({'alphabet': 'base64url', 'lookback': 0})
        assert local.active == Codec.from_name('base64url', lookback=None)
        local.select('base64')
        assert local.active.lookback is None

    @staticmethod
    def test_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr('b64stream.codec.alphabet.config',
                            Configuration(default=Namespace({'codec': {'alphabet': 'base64'}}),
                                          env=Namespace({'codec': {'alphabet': 'base64url'}})))
        assert Registry.from_config().active == Codec.from_name('base64url')

    @staticmethod
    def test_from_config_error_names_source(monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr('b64stream.codec.alphabet.config',
                            Configuration(env=Namespace({'codec': {'alphabet': 'ABC'}})))
        with pytest.raises(ConfigurationError) as exc_info:
            Registry.from_config()
        message, = exc_info.value.args
        assert message.endswith('(from: B64STREAM_CODEC_ALPHABET)')
