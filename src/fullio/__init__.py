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

"""Whole-buffer and whole-file I/O over short-transfer primitives.

Operating system reads and writes may move fewer bytes than asked for.
This package layers dependable semantics on top of them:

- ``read_at_least`` / ``read_full`` keep reading until a byte target is met.
- ``read_entire_file`` sizes a buffer to the file and fills it, never
  handing back a partially filled buffer.
- ``write_entire_file`` creates or truncates a file and writes a buffer.
- ``write_encoded_rune`` writes one character as an escaped debug literal.

Example usage::

    from fullio import read_entire_file, write_entire_file

    if write_entire_file("out.bin", b"payload"):
        data, ok = read_entire_file("out.bin")
"""

from __future__ import annotations

from ._allocator import DEFAULT_ALLOCATOR, Allocator, DefaultAllocator
from ._completion import read_at_least, read_full, write_full
from ._handles import (
    DEFAULT_FILE_MODE,
    O_CREAT,
    O_RDONLY,
    O_TRUNC,
    O_WRONLY,
    FileDescriptor,
    Handle,
)
from ._logging import StructuredLogger, configure_logging, get_logger
from ._platform import Platform, current_platform
from ._runes import write_byte, write_encoded_rune, write_rune, write_string
from ._whole_file import (
    EntireFile,
    file_size_from_path,
    read_entire_file,
    read_entire_file_from_handle,
    read_entire_file_from_path,
    write_entire_file,
)
from .errors import EndOfFileError, FullIOError, ShortBufferError, ShortWriteError

__all__ = [
    "DEFAULT_ALLOCATOR",
    "DEFAULT_FILE_MODE",
    "O_CREAT",
    "O_RDONLY",
    "O_TRUNC",
    "O_WRONLY",
    "Allocator",
    "DefaultAllocator",
    "EndOfFileError",
    "EntireFile",
    "FileDescriptor",
    "FullIOError",
    "Handle",
    "Platform",
    "ShortBufferError",
    "ShortWriteError",
    "StructuredLogger",
    "configure_logging",
    "current_platform",
    "file_size_from_path",
    "get_logger",
    "read_at_least",
    "read_entire_file",
    "read_entire_file_from_handle",
    "read_entire_file_from_path",
    "read_full",
    "write_byte",
    "write_encoded_rune",
    "write_entire_file",
    "write_full",
    "write_rune",
    "write_string",
]
