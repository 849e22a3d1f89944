# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for top-level encode/decode invocation rules."""


# standard libs
import io

# external libs
import pytest

# internal libs
from b64stream.codec import Codec, DecodeSource, EncodeSource, encode, decode, UnsupportedInvocation


STANDARD = Codec.from_name('base64')
URLSAFE = Codec.from_name('base64url')


def test_decode_source_with_matching_codec() -> None:
    output = io.BytesIO()
    decode(DecodeSource(io.BytesIO(b'-_8'), URLSAFE), output, codec=Codec.from_name('base64url'))
    assert output.getvalue() == b'\xfb\xff'


def test_decode_source_with_other_codec() -> None:
    with pytest.raises(UnsupportedInvocation) as exc_info:
        decode(DecodeSource(io.BytesIO(b'-_8'), URLSAFE), io.BytesIO(), codec=STANDARD)
    message, = exc_info.value.args
    assert message == 'DecodeSource was built for a different codec'


def test_decode_source_without_sink() -> None:
    with pytest.raises(UnsupportedInvocation) as exc_info:
        decode(DecodeSource(io.BytesIO(b'TWFu'), STANDARD))
    message, = exc_info.value.args
    assert message == 'Decoding from a stream requires an output sink'


def test_encode_stream_without_sink() -> None:
    with pytest.raises(UnsupportedInvocation) as exc_info:
        encode(EncodeSource(io.BytesIO(b'Man')), codec=STANDARD)
    message, = exc_info.value.args
    assert message == 'Encoding from a stream requires an output sink'


def test_unknown_source() -> None:
    with pytest.raises(UnsupportedInvocation) as exc_info:
        decode([b'TWFu'], codec=STANDARD)  # noqa: wrong type
    message, = exc_info.value.args
    assert message == 'Cannot decode from list'


def test_unknown_sink() -> None:
    with pytest.raises(UnsupportedInvocation) as exc_info:
        decode(b'TWFu', object(), codec=STANDARD)
    message, = exc_info.value.args
    assert message == 'Expected callable or writable sink, found object'


def test_text_stream_encoding_rejected() -> None:
    with pytest.raises(UnsupportedInvocation):
        encode(io.StringIO('Man'), io.BytesIO(), codec=STANDARD)


def test_nothing_written_without_input() -> None:
    output = io.BytesIO()
    assert encode(io.BytesIO(b''), output, codec=STANDARD) is None
    assert decode(io.BytesIO(b''), output, codec=STANDARD) is None
    assert output.getvalue() == b''
