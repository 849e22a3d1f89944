# SPDX-FileCopyrightText: 2014-2026 b64stream developers
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the codec."""


# public interface
__all__ = ['CodecError', 'InvalidAlphabet', 'InvalidTerminator', 'UnsupportedInvocation', ]


class CodecError(Exception):
    """Generic error raised by the codec."""


class InvalidAlphabet(CodecError):
    """The alphabet does not have exactly 64 unique 8-bit symbols."""


class InvalidTerminator(CodecError):
    """The terminator is longer than one symbol or collides with the alphabet."""


class UnsupportedInvocation(CodecError):
    """Incompatible combination of source and sink given to encode/decode."""
