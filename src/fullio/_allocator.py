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

"""Injectable allocation strategy for whole-file reads."""

from __future__ import annotations

from typing import Final, Protocol, runtime_checkable

__all__ = [
    "DEFAULT_ALLOCATOR",
    "Allocator",
    "DefaultAllocator",
]


@runtime_checkable
class Allocator(Protocol):
    """Produces and releases the buffers used by whole-file reads.

    A buffer must be released through the same allocator instance that
    allocated it.
    """

    def allocate(self, size: int) -> bytearray:
        """Return a zero-filled buffer of exactly ``size`` bytes.

        Raises:
            MemoryError: If the buffer cannot be provided.
        """
        ...

    def release(self, buffer: bytearray) -> None:
        """Give ``buffer`` back; the caller must not use it afterwards."""
        ...


class DefaultAllocator:
    """Allocator backed by the interpreter's own ``bytearray`` storage."""

    __slots__ = ()

    def allocate(self, size: int) -> bytearray:
        if size < 0:
            msg = f"Cannot allocate a negative size: {size}"
            raise ValueError(msg)
        return bytearray(size)

    def release(self, buffer: bytearray) -> None:
        # Shrinking in place frees the storage even if other references remain.
        buffer.clear()


DEFAULT_ALLOCATOR: Final[Allocator] = DefaultAllocator()
