"""
Build-time configuration probe.

Public API:
    discover(system=None, environ=None) -> BuildFlags
    write_flags(flags, directory)
    locate_libraries(libs)
    linked_libraries()
    detect_system(), get_platform_info()

Command line:
    python -m denseblas.config --help
"""

from denseblas.config.probe import (
    BuildFlags,
    discover,
    linked_libraries,
    locate_libraries,
    write_flags,
)
from denseblas.config.platform import PlatformInfo, detect_system, get_platform_info

__all__ = [
    "BuildFlags",
    "PlatformInfo",
    "detect_system",
    "discover",
    "get_platform_info",
    "linked_libraries",
    "locate_libraries",
    "write_flags",
]
