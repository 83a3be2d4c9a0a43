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

"""Primitive handle protocol and the OS file-descriptor implementation.

Everything above this module talks to a :class:`Handle`. The
:class:`FileDescriptor` implementation is a thin veneer over the ``os``
module: one method per system call, no buffering, no retries. Short reads
and short writes are reported exactly as the operating system returns them.
"""

from __future__ import annotations

import os
from collections.abc import Buffer
from dataclasses import dataclass, field
from typing import Final, Protocol, Self, runtime_checkable

__all__ = [
    "DEFAULT_FILE_MODE",
    "O_CREAT",
    "O_RDONLY",
    "O_TRUNC",
    "O_WRONLY",
    "FileDescriptor",
    "Handle",
]

O_RDONLY: Final[int] = os.O_RDONLY
O_WRONLY: Final[int] = os.O_WRONLY
O_CREAT: Final[int] = os.O_CREAT
O_TRUNC: Final[int] = os.O_TRUNC

#: Owner read/write, group read, other read.
DEFAULT_FILE_MODE: Final[int] = 0o644

# Binary mode only exists on Windows; elsewhere it is zero.
_O_BINARY: Final[int] = getattr(os, "O_BINARY", 0)


@runtime_checkable
class Handle(Protocol):
    """Borrowed reference to an open file resource.

    Each method maps onto a single primitive call. Implementations raise
    ``OSError`` for failures and never retry on their own.
    """

    def readinto(self, buffer: memoryview) -> int:
        """Read up to ``len(buffer)`` bytes into ``buffer``.

        Returns:
            Number of bytes stored. Zero means end of file or no progress.
        """
        ...

    def write(self, data: Buffer) -> int:
        """Write bytes from ``data``.

        Returns:
            Number of bytes accepted, which may be less than ``len(data)``.
        """
        ...

    def size(self) -> int:
        """Total size of the underlying file in bytes."""
        ...

    def close(self) -> None:
        """Release the underlying resource."""
        ...


@dataclass(slots=True)
class FileDescriptor:
    """Handle implementation backed by a raw OS file descriptor."""

    fd: int
    path: str = ""
    _closed: bool = field(default=False, init=False)

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        flags: int = O_RDONLY,
        mode: int = DEFAULT_FILE_MODE,
    ) -> FileDescriptor:
        """Open ``path`` with ``os.open``.

        Args:
            path: File to open.
            flags: Combination of the ``O_*`` flag constants.
            mode: Permission bits used when the file is created. Platforms
                without POSIX permissions ignore it.

        Raises:
            OSError: Whatever ``os.open`` raises (not found, permission
                denied, ...).
        """
        fd = os.open(path, flags | _O_BINARY, mode)
        return cls(fd=fd, path=os.fspath(path))

    @property
    def closed(self) -> bool:
        """True if the descriptor has been closed."""
        return self._closed

    def _check_closed(self) -> None:
        if self._closed:
            msg = "I/O operation on closed file"
            raise ValueError(msg)

    def readinto(self, buffer: memoryview) -> int:
        """Read up to ``len(buffer)`` bytes with one ``os.read`` call."""
        self._check_closed()
        data = os.read(self.fd, len(buffer))
        count = len(data)
        buffer[:count] = data
        return count

    def write(self, data: Buffer) -> int:
        """Write with one ``os.write`` call; may be short."""
        self._check_closed()
        return os.write(self.fd, data)

    def size(self) -> int:
        """Size reported by ``os.fstat``."""
        self._check_closed()
        return os.fstat(self.fd).st_size

    def close(self) -> None:
        """Close the descriptor. Safe to call more than once."""
        if not self._closed:
            self._closed = True
            os.close(self.fd)

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, closing the descriptor."""
        self.close()
