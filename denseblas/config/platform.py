"""
Host platform detection.

Names the host system in the vocabulary the build probe selects flags by
('linux', 'macosx', 'mingw64', ...), independent of how Python spells it.
"""

from __future__ import annotations

from dataclasses import dataclass
import platform
import struct
import sys
import sysconfig


@dataclass(frozen=True)
class PlatformInfo:
    """
    Information about the build host.

    Attributes:
        system: Probe system name ('linux', 'macosx', 'mingw64', 'win64', ...)
        machine: Machine architecture (e.g. 'x86_64', 'arm64')
        pointer_bits: Width of a pointer in bits
        compiler: Compiler Python was built with, as reported by platform
    """
    system: str
    machine: str
    pointer_bits: int
    compiler: str

    def __str__(self) -> str:
        return f"{self.system} ({self.machine}, {self.pointer_bits}-bit, {self.compiler})"


def detect_system(
    sys_platform: str | None = None,
    build_platform: str | None = None,
    pointer_bits: int | None = None,
) -> str:
    """
    Probe system name of the host.

    Args:
        sys_platform: Override for sys.platform (for testing)
        build_platform: Override for sysconfig.get_platform() (for testing)
        pointer_bits: Override for the pointer width (for testing)

    Returns:
        'linux', 'macosx', 'mingw64', 'mingw', 'win64', 'win32', 'cygwin',
        'freebsd', 'openbsd', 'netbsd', or sys.platform unchanged
    """
    sys_platform = sys.platform if sys_platform is None else sys_platform
    build_platform = sysconfig.get_platform() if build_platform is None else build_platform
    bits = struct.calcsize('P') * 8 if pointer_bits is None else pointer_bits

    if sys_platform.startswith('linux'):
        return 'linux'
    if sys_platform == 'darwin':
        return 'macosx'
    if sys_platform == 'win32':
        if build_platform.startswith('mingw'):
            return 'mingw64' if bits == 64 else 'mingw'
        return 'win64' if bits == 64 else 'win32'
    if sys_platform == 'cygwin':
        return 'cygwin'
    for bsd in ('freebsd', 'openbsd', 'netbsd'):
        if sys_platform.startswith(bsd):
            return bsd
    return sys_platform


def get_platform_info() -> PlatformInfo:
    """
    Get build host info.

    Returns:
        PlatformInfo for the running interpreter's host
    """
    machine = platform.machine() or "unknown"
    return PlatformInfo(
        system=detect_system(),
        machine=machine,
        pointer_bits=struct.calcsize('P') * 8,
        compiler=platform.python_compiler() or "unknown",
    )
