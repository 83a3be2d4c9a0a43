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

"""Frozen description of the host platform."""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass
from functools import cache
from typing import Literal

__all__ = [
    "Platform",
    "current_platform",
]


@dataclass(slots=True, frozen=True)
class Platform:
    """Host facts fixed for the lifetime of the process.

    Attributes:
        os_name: ``sys.platform`` value (``"linux"``, ``"darwin"``, ``"win32"``).
        arch: Machine architecture, lower-cased (``"x86_64"``, ``"arm64"``).
        endian: Native byte order.
        core_count: Logical processors; ``1`` when the OS cannot say.
    """

    os_name: str
    arch: str
    endian: Literal["little", "big"]
    core_count: int

    @property
    def is_posix(self) -> bool:
        """True when file permission bits are meaningful."""
        return self.os_name != "win32"


@cache
def current_platform() -> Platform:
    """Return the :class:`Platform` for this process, probed once."""

    return Platform(
        os_name=sys.platform,
        arch=platform.machine().lower(),
        endian=sys.byteorder,
        core_count=os.cpu_count() or 1,
    )
