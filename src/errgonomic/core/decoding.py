"""Pluggable decoding capability for Codepoint-mode parsing.

The engine never validates encodings itself. A decoder turns raw bytes
into a str of code points, or raises DecodeError carrying the byte offset
of the first invalid encoding unit. Any callable with that contract can
be passed to parse(..., decoder=...).

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import Protocol

from errgonomic.diagnostics import DecodeError, ErrorTemplate

__all__ = ["Decoder", "utf8_decoder"]

logger = logging.getLogger(__name__)


class Decoder(Protocol):
    """Callable that decodes a whole input buffer.

    Contract:
        - Returns the fully decoded text on success
        - Raises DecodeError(offset=...) at the first invalid byte
        - Must not return partially decoded text
    """

    def __call__(self, data: bytes, /) -> str: ...


def utf8_decoder(data: bytes, /) -> str:
    """Strict UTF-8 decoder (default).

    Delegates validation to the interpreter's UTF-8 codec, which rejects
    overlong forms, surrogates and truncated sequences.

    Args:
        data: Raw input bytes

    Returns:
        Decoded text

    Raises:
        DecodeError: At the offset of the first invalid byte

    Example:
        >>> utf8_decoder(b"caf\\xc3\\xa9")
        'café'
        >>> utf8_decoder(b"ab\\xff")
        Traceback (most recent call last):
        ...
        errgonomic.diagnostics.errors.DecodeError: Cannot decode input at byte 2: invalid start byte
    """
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug("UTF-8 decoding failed at byte %d: %s", e.start, e.reason)
        raise DecodeError(
            ErrorTemplate.decode_failed(e.start, e.reason), offset=e.start, reason=e.reason
        ) from e
