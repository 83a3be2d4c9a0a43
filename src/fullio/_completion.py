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

"""Completion loops over short-transfer primitives.

Primitive reads and writes may move fewer bytes than requested. The helpers
here keep calling the primitive over the untransferred remainder until the
target is met, the source or destination stops making progress, or the
primitive raises.
"""

from __future__ import annotations

from collections.abc import Buffer, Iterator
from contextlib import contextmanager

from ._handles import Handle
from .errors import EndOfFileError, ShortBufferError, ShortWriteError

__all__ = [
    "read_at_least",
    "read_full",
    "write_full",
]


def read_at_least(handle: Handle, buffer: Buffer, minimum: int) -> int:
    """Read from ``handle`` into ``buffer`` until ``minimum`` bytes arrived.

    Each primitive read targets the unfilled tail of ``buffer``, so the
    result never exceeds ``len(buffer)``.

    Args:
        handle: Borrowed handle; left open.
        buffer: Writable destination.
        minimum: Bytes that must arrive for the call to succeed.

    Returns:
        Bytes read, at least ``minimum``.

    Raises:
        ShortBufferError: ``minimum`` exceeds ``len(buffer)``. Nothing is read.
        EndOfFileError: A read returned zero bytes before ``minimum`` was
            reached. ``bytes_read`` holds the partial count.
        OSError: Propagated unchanged from the primitive read.
    """
    with _byte_view(buffer) as view:
        if minimum > len(view):
            raise ShortBufferError(len(view), minimum)

        n = 0
        while n < minimum:
            with view[n:] as tail:
                count = handle.readinto(tail)
            if count == 0:
                raise EndOfFileError(n, minimum)
            n += count
        return n


def read_full(handle: Handle, buffer: Buffer) -> int:
    """Fill ``buffer`` completely; see :func:`read_at_least`."""
    with memoryview(buffer) as view:
        size = view.nbytes
    return read_at_least(handle, buffer, size)


def write_full(handle: Handle, data: Buffer) -> int:
    """Write every byte of ``data``, retrying over short writes.

    Returns:
        ``len(data)`` in bytes.

    Raises:
        ShortWriteError: A write accepted zero bytes before completion.
        OSError: Propagated unchanged from the primitive write.
    """
    with _byte_view(data) as view:
        total = len(view)
        n = 0
        while n < total:
            with view[n:] as tail:
                count = handle.write(tail)
            if count == 0:
                raise ShortWriteError(n, total)
            n += count
        return n


@contextmanager
def _byte_view(buffer: Buffer) -> Iterator[memoryview]:
    # All views are released on exit, so ``buffer`` stays resizable even
    # while a traceback still references this frame.
    with memoryview(buffer) as raw, raw.cast("B") as view:
        yield view
