# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Character emitters, including the escaped single-quoted literal writer.

All emitters write UTF-8. :func:`write_encoded_rune` renders one character
as a debug literal such as ``'\\n'``, ``'\\x01'`` or ``'A'``.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from ._handles import Handle
from ._logging import get_logger

__all__ = [
    "write_byte",
    "write_encoded_rune",
    "write_rune",
    "write_string",
]

logger = get_logger(__name__)

_MAX_RUNE: Final[int] = 0x10FFFF
_SURROGATES: Final[range] = range(0xD800, 0xE000)
_QUOTE: Final[bytes] = b"'"

_NAMED_ESCAPES: Final[Mapping[int, bytes]] = MappingProxyType(
    {
        0x07: b"\\a",
        0x08: b"\\b",
        0x1B: b"\\e",
        0x0C: b"\\f",
        0x0A: b"\\n",
        0x0D: b"\\r",
        0x09: b"\\t",
        0x0B: b"\\v",
    }
)


def _scalar_value(rune: int | str) -> int:
    if isinstance(rune, str):
        if len(rune) != 1:
            msg = f"Expected a single character, got {len(rune)}: {rune!r}"
            raise ValueError(msg)
        rune = ord(rune)
    if rune < 0 or rune > _MAX_RUNE or rune in _SURROGATES:
        msg = f"Not a Unicode scalar value: {rune:#x}"
        raise ValueError(msg)
    return rune


def _encode_literal_body(value: int) -> bytes:
    named = _NAMED_ESCAPES.get(value)
    if named is not None:
        return named
    if value < 32:
        return b"\\x%02X" % value
    return chr(value).encode("utf-8")


def write_byte(handle: Handle, value: int) -> int:
    """Write a single byte (``0 <= value < 256``)."""
    return handle.write(bytes((value,)))


def write_string(handle: Handle, text: str) -> int:
    """Write the UTF-8 encoding of ``text`` with one primitive call."""
    return handle.write(text.encode("utf-8"))


def write_rune(handle: Handle, rune: int | str) -> int:
    """Write one character as UTF-8, one byte for ASCII."""
    value = _scalar_value(rune)
    if value < 0x80:
        return write_byte(handle, value)
    return handle.write(chr(value).encode("utf-8"))


def write_encoded_rune(handle: Handle, rune: int | str) -> int:
    """Write ``rune`` as a single-quoted, backslash-escaped literal.

    Named control characters use their two-character escape, other control
    codes below 32 use ``\\xHH`` with two uppercase hex digits, and every
    other character is written as its UTF-8 bytes.

    The first failing write stops emission of the body; the closing quote is
    still attempted. The first error is re-raised with
    ``characters_written`` set to the bytes written by this call, including
    the closing quote when it went through.

    Returns:
        Total bytes written.

    Raises:
        ValueError: ``rune`` is not a Unicode scalar value. Nothing is written.
        OSError: The first error raised by a primitive write.
    """
    body = _encode_literal_body(_scalar_value(rune))

    n = 0
    error: OSError | None = None
    for chunk in (_QUOTE, body):
        try:
            n += handle.write(chunk)
        except OSError as exc:
            error = exc
            break

    try:
        n += handle.write(_QUOTE)
    except OSError as exc:
        if error is None:
            error = exc
        else:
            logger.debug(
                "Closing quote failed after an earlier write error.",
                event="write_encoded_rune.closing_quote_failed",
                context={"error": repr(exc), "bytes_written": n},
            )

    if error is not None:
        error.characters_written = n
        raise error
    return n
