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

"""Base exception hierarchy for :mod:`fullio`.

Errors raised by the primitive layer (the ``OSError`` family) are never
wrapped. The classes below only describe conditions this package detects
itself: a destination too small for the requested minimum, a source that
stopped producing bytes, and a destination that stopped accepting them.
"""

from __future__ import annotations


class FullIOError(Exception):
    """Base class for all fullio exceptions.

    Subclasses also inherit from the closest builtin exception type, so a
    caller can catch ``EOFError`` or ``ValueError`` without importing this
    module.

    Example:
        Catch any fullio-specific error::

            try:
                read_full(handle, buffer)
            except FullIOError as e:
                logger.error("Read failed: %s", e)
    """


class ShortBufferError(FullIOError, ValueError):
    """Raised when a destination buffer is smaller than the requested minimum.

    This is a caller contract violation. It is detected before any read is
    attempted, so the handle position is unchanged.

    Attributes:
        buffer_size: Length of the destination buffer.
        minimum: Number of bytes the caller asked for.
    """

    def __init__(self, buffer_size: int, minimum: int) -> None:
        self.buffer_size = buffer_size
        self.minimum = minimum
        super().__init__(
            f"Short buffer: need at least {minimum} bytes, buffer holds {buffer_size}"
        )


class EndOfFileError(FullIOError, EOFError):
    """Raised when a read returns zero bytes before the demand is met.

    Covers both a true end of file and a source that made no progress.
    The bytes read before the stall remain in the caller's buffer.

    Attributes:
        bytes_read: Bytes accumulated before the zero-length read.
        minimum: Number of bytes the caller asked for.

    Example::

        try:
            read_full(handle, buffer)
        except EndOfFileError as e:
            partial = buffer[: e.bytes_read]
    """

    def __init__(self, bytes_read: int, minimum: int) -> None:
        self.bytes_read = bytes_read
        self.minimum = minimum
        super().__init__(
            f"Unexpected end of file: read {bytes_read} of {minimum} bytes"
        )

    @property
    def unexpected(self) -> bool:
        """True when some bytes arrived before the stream ended."""
        return self.bytes_read > 0


class ShortWriteError(FullIOError, OSError):
    """Raised by strict writers when a write accepts zero bytes.

    Attributes:
        bytes_written: Bytes committed before the stalled write.
        expected: Total bytes the caller asked to write.
    """

    def __init__(self, bytes_written: int, expected: int) -> None:
        self.bytes_written = bytes_written
        self.expected = expected
        super().__init__(f"Short write: wrote {bytes_written} of {expected} bytes")


__all__ = [
    "EndOfFileError",
    "FullIOError",
    "ShortBufferError",
    "ShortWriteError",
]
