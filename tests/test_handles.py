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

"""Tests for the primitive handle layer."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fullio import (
    DEFAULT_ALLOCATOR,
    O_CREAT,
    O_RDONLY,
    O_TRUNC,
    O_WRONLY,
    Allocator,
    DefaultAllocator,
    FileDescriptor,
    Handle,
    Platform,
    current_platform,
)
from tests.helpers.handles import RecordingAllocator, ScriptedHandle


class TestFileDescriptor:
    """Tests for FileDescriptor."""

    def test_satisfies_handle_protocol(self, tmp_path: Path) -> None:
        """FileDescriptor and the scripted fake are both Handles."""
        target = tmp_path / "f"
        target.touch()
        with FileDescriptor.open(target) as handle:
            assert isinstance(handle, Handle)
        assert isinstance(ScriptedHandle(), Handle)

    def test_open_missing_raises_file_not_found(self, tmp_path: Path) -> None:
        """Primitive errors surface as the OSError subclass os.open raises."""
        with pytest.raises(FileNotFoundError):
            FileDescriptor.open(tmp_path / "missing", O_RDONLY)

    def test_readinto_reads_at_most_buffer_length(self, tmp_path: Path) -> None:
        """readinto fills the view from the current position."""
        target = tmp_path / "f"
        _ = target.write_bytes(b"abcdef")
        buffer = bytearray(4)
        with FileDescriptor.open(target) as handle:
            assert handle.readinto(memoryview(buffer)) == 4
            assert buffer == b"abcd"
            assert handle.readinto(memoryview(buffer)) == 2
            assert buffer[:2] == b"ef"
            assert handle.readinto(memoryview(buffer)) == 0

    def test_write_and_size(self, tmp_path: Path) -> None:
        """write returns the accepted count and size follows fstat."""
        target = tmp_path / "f"
        with FileDescriptor.open(target, O_WRONLY | O_CREAT | O_TRUNC) as handle:
            assert handle.write(b"12345") == 5
            assert handle.size() == 5
        assert target.read_bytes() == b"12345"

    def test_path_is_recorded(self, tmp_path: Path) -> None:
        """The opened path is kept for diagnostics."""
        target = tmp_path / "f"
        target.touch()
        with FileDescriptor.open(target) as handle:
            assert handle.path == os.fspath(target)

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        """Closing twice does not close the descriptor number twice."""
        target = tmp_path / "f"
        target.touch()
        handle = FileDescriptor.open(target)
        handle.close()
        assert handle.closed
        handle.close()
        assert handle.closed

    def test_operations_after_close_raise(self, tmp_path: Path) -> None:
        """A closed descriptor rejects further I/O."""
        target = tmp_path / "f"
        target.touch()
        handle = FileDescriptor.open(target)
        handle.close()
        with pytest.raises(ValueError, match="closed"):
            handle.readinto(memoryview(bytearray(1)))
        with pytest.raises(ValueError, match="closed"):
            handle.write(b"x")
        with pytest.raises(ValueError, match="closed"):
            handle.size()


class TestAllocator:
    """Tests for the default allocation strategy."""

    def test_default_allocator_is_an_allocator(self) -> None:
        """Both shipped and fake allocators satisfy the protocol."""
        assert isinstance(DEFAULT_ALLOCATOR, Allocator)
        assert isinstance(RecordingAllocator(), Allocator)

    def test_allocate_exact_size_zero_filled(self) -> None:
        """Buffers are exactly the requested size."""
        buffer = DefaultAllocator().allocate(16)
        assert buffer == bytearray(16)

    def test_negative_size_rejected(self) -> None:
        """Negative sizes are a caller error."""
        with pytest.raises(ValueError, match="negative"):
            DefaultAllocator().allocate(-1)

    def test_release_empties_buffer(self) -> None:
        """Released buffers are emptied in place."""
        allocator = DefaultAllocator()
        buffer = allocator.allocate(8)
        allocator.release(buffer)
        assert len(buffer) == 0


class TestPlatform:
    """Tests for the frozen platform record."""

    def test_current_platform_is_cached(self) -> None:
        """The platform is probed once per process."""
        assert current_platform() is current_platform()

    def test_platform_is_frozen(self) -> None:
        """Fields cannot be reassigned."""
        info = current_platform()
        with pytest.raises(AttributeError):
            info.core_count = 99  # type: ignore[misc]

    def test_reports_sane_values(self) -> None:
        """Probed values are plausible."""
        info = current_platform()
        assert info.core_count >= 1
        assert info.endian in {"little", "big"}
        assert info.os_name

    def test_is_posix(self) -> None:
        """Only Windows lacks POSIX permission bits."""
        assert not Platform("win32", "amd64", "little", 4).is_posix
        assert Platform("linux", "x86_64", "little", 4).is_posix
