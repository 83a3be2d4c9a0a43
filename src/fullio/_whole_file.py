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

"""Whole-file read and write conveniences.

These functions trade error detail for a simple go/no-go answer: failures
are logged at DEBUG level and reported as ``False``. Callers that need the
precise error should use :func:`~fullio.read_full` on their own handle.

Example::

    contents = read_entire_file("config.bin")
    if contents.success:
        parse(contents.data)

    data, ok = read_entire_file(handle)
"""

from __future__ import annotations

import os
import stat
from collections.abc import Buffer
from typing import NamedTuple

from ._allocator import DEFAULT_ALLOCATOR, Allocator
from ._completion import read_full, write_full
from ._handles import (
    DEFAULT_FILE_MODE,
    O_CREAT,
    O_RDONLY,
    O_TRUNC,
    O_WRONLY,
    FileDescriptor,
    Handle,
)
from ._logging import StructuredLogger, get_logger
from ._platform import current_platform
from .errors import EndOfFileError

__all__ = [
    "EntireFile",
    "file_size_from_path",
    "read_entire_file",
    "read_entire_file_from_handle",
    "read_entire_file_from_path",
    "write_entire_file",
]

logger = get_logger(__name__)

type PathSource = str | os.PathLike[str]


class EntireFile(NamedTuple):
    """Outcome of a whole-file read.

    ``data`` is empty whenever ``success`` is false; a partially filled
    buffer is never handed out.
    """

    data: bytearray
    success: bool


def _failed(source: object, error: BaseException) -> EntireFile:
    logger.debug(
        "Whole-file read failed.",
        event="read_entire_file.failed",
        context={"source": repr(source), "error": repr(error)},
    )
    return EntireFile(bytearray(), False)


def read_entire_file_from_handle(
    handle: Handle, allocator: Allocator | None = None
) -> EntireFile:
    """Read everything from an already open handle.

    The handle is borrowed and left open. The buffer comes from
    ``allocator`` (default: :data:`~fullio.DEFAULT_ALLOCATOR`) and is
    released through the same allocator if the read fails.
    """
    alloc = DEFAULT_ALLOCATOR if allocator is None else allocator

    try:
        length = handle.size()
    except OSError as exc:
        return _failed(handle, exc)
    if length == 0:
        return EntireFile(bytearray(), True)

    try:
        data = alloc.allocate(length)
    except MemoryError as exc:
        return _failed(handle, exc)

    try:
        bytes_read = read_full(handle, data)
    except (OSError, EndOfFileError) as exc:
        alloc.release(data)
        return _failed(handle, exc)

    del data[bytes_read:]
    return EntireFile(data, True)


def read_entire_file_from_path(
    path: PathSource, allocator: Allocator | None = None
) -> EntireFile:
    """Open ``path`` read-only, read all of it, and close it again."""
    try:
        handle = FileDescriptor.open(path, O_RDONLY)
    except OSError as exc:
        return _failed(path, exc)
    try:
        result = read_entire_file_from_handle(handle, allocator)
    finally:
        _close_quietly(
            handle, logger.bind(path=handle.path), "read_entire_file.close_failed"
        )
    return result


def read_entire_file(
    source: PathSource | Handle, allocator: Allocator | None = None
) -> EntireFile:
    """Read a whole file from a path or an open handle.

    Raises:
        TypeError: ``source`` is neither a path nor a handle.
    """
    if isinstance(source, (str, os.PathLike)):
        return read_entire_file_from_path(source, allocator)
    if isinstance(source, Handle):
        return read_entire_file_from_handle(source, allocator)
    msg = f"Expected a path or a Handle, got {type(source).__name__}"
    raise TypeError(msg)


def file_size_from_path(path: PathSource) -> int:
    """Size in bytes of the file at ``path``, or ``-1`` if it cannot be read."""
    try:
        with FileDescriptor.open(path, O_RDONLY) as handle:
            return handle.size()
    except OSError as exc:
        logger.debug(
            "File size query failed.",
            event="file_size_from_path.failed",
            context={"path": os.fspath(path), "error": repr(exc)},
        )
        return -1


def write_entire_file(
    path: PathSource,
    data: Buffer,
    truncate: bool = True,
    *,
    mode: int = DEFAULT_FILE_MODE,
    strict: bool = False,
) -> bool:
    """Create or overwrite ``path`` with ``data``.

    By default one primitive write is issued and a short write that raises
    nothing still counts as success. Pass ``strict=True`` to keep writing
    until every byte is committed.

    With ``truncate=False`` existing bytes past ``len(data)`` are kept.

    Args:
        path: Destination file; created if missing.
        data: Bytes to write.
        truncate: Drop existing content before writing.
        mode: Permission bits for a newly created file. Platforms without
            POSIX permissions always get owner read/write instead.
        strict: Complete short writes instead of accepting them.

    Returns:
        True if the file was opened, written and closed without error.
    """
    flags = O_WRONLY | O_CREAT
    if truncate:
        flags |= O_TRUNC
    if not current_platform().is_posix:
        mode = stat.S_IREAD | stat.S_IWRITE
    log = logger.bind(path=os.fspath(path))

    try:
        handle = FileDescriptor.open(path, flags, mode)
    except OSError as exc:
        return _write_failed(log, exc)

    committed = False
    try:
        if strict:
            _ = write_full(handle, data)
        else:
            _ = handle.write(data)
        committed = True
    except OSError as exc:
        return _write_failed(log, exc)
    finally:
        if not committed:
            _close_quietly(handle, log, "write_entire_file.close_failed")

    try:
        handle.close()
    except OSError as exc:
        return _write_failed(log, exc)
    return True


def _write_failed(log: StructuredLogger, error: OSError) -> bool:
    log.debug(
        "Whole-file write failed.",
        event="write_entire_file.failed",
        context={"error": repr(error)},
    )
    return False


def _close_quietly(handle: FileDescriptor, log: StructuredLogger, event: str) -> None:
    try:
        handle.close()
    except OSError as exc:
        log.debug("Handle close failed.", event=event, context={"error": repr(exc)})
