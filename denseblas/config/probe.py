"""
Build configuration probe.

Selects the C compiler flags and BLAS/LAPACK link flags for building native
code against denseblas on the host platform, and writes them out as JSON
lists for the build system to read.

Environment:
    DENSEBLAS_CFLAGS: Extra compiler flags, whitespace-separated
    DENSEBLAS_LIBS: Link flags replacing the default '-lblas -llapack'

Usage:
    python -m denseblas.config --output-dir build/
    python -m denseblas.config --system macosx
    python -m denseblas.config --locate
"""

from __future__ import annotations

import argparse
import ctypes.util
import json
import os
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

import scipy

from denseblas.config.platform import detect_system, get_platform_info
from denseblas.core.exceptions import ConfigurationError


CFLAGS_ENV = 'DENSEBLAS_CFLAGS'
LIBS_ENV = 'DENSEBLAS_LIBS'

DEFAULT_LIBS: tuple[str, ...] = ('-lblas', '-llapack')

CFLAGS_FILE = 'c_flags.json'
LIBRARY_FLAGS_FILE = 'c_library_flags.json'


@dataclass(frozen=True)
class BuildFlags:
    """
    Compiler and linker flags for the host.

    Attributes:
        cflags: C compiler flags
        libs: Linker flags naming the BLAS/LAPACK libraries
    """
    cflags: tuple[str, ...]
    libs: tuple[str, ...]


def discover(
    system: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> BuildFlags:
    """
    Select build flags for a system.

    Args:
        system: Probe system name (default: detect_system())
        environ: Environment to read overrides from (default: os.environ)

    Returns:
        BuildFlags

    Flag selection:
        default             -DEXTERNAL_EXP10 -std=c99 <extra>
        linux, linux_elf    -std=gnu99 <extra>
        mingw64             -DWIN32 followed by the default flags
        macosx              default flags; '-framework Accelerate' is
                            prepended to the libs unless DENSEBLAS_LIBS is set

    exp10 is a GNU extension; everywhere outside a GNU toolchain the
    native code must supply its own (-DEXTERNAL_EXP10).
    """
    environ = os.environ if environ is None else environ
    system = detect_system() if system is None else system

    extra_cflags = environ.get(CFLAGS_ENV, '').split()
    if LIBS_ENV in environ:
        libs = tuple(environ[LIBS_ENV].split())
        libs_override = True
    else:
        libs = DEFAULT_LIBS
        libs_override = False

    default = BuildFlags(
        cflags=('-DEXTERNAL_EXP10', '-std=c99', *extra_cflags),
        libs=libs,
    )

    if system in ('linux', 'linux_elf'):
        return BuildFlags(cflags=('-std=gnu99', *extra_cflags), libs=libs)
    if system == 'macosx' and not libs_override:
        return BuildFlags(cflags=default.cflags, libs=('-framework', 'Accelerate', *libs))
    if system == 'mingw64':
        return BuildFlags(cflags=('-DWIN32', *default.cflags), libs=libs)
    return default


def write_flags(flags: BuildFlags, directory: str | os.PathLike[str]) -> tuple[Path, Path]:
    """
    Write the flags as JSON lists of strings.

    Args:
        flags: Flags to write
        directory: Existing directory receiving c_flags.json and
            c_library_flags.json

    Returns:
        Paths of the two files written

    Raises:
        ConfigurationError: If directory does not exist
    """
    out_dir = Path(directory)
    if not out_dir.is_dir():
        raise ConfigurationError(f"output directory does not exist: {out_dir}")

    cflags_path = out_dir / CFLAGS_FILE
    libs_path = out_dir / LIBRARY_FLAGS_FILE
    cflags_path.write_text(json.dumps(list(flags.cflags)))
    libs_path.write_text(json.dumps(list(flags.libs)))
    return cflags_path, libs_path


def locate_libraries(libs: Sequence[str]) -> dict[str, str | None]:
    """
    Resolve link flags to shared libraries on the host.

    '-l<name>' is looked up as <name>; '-framework <Name>' as <Name>.
    Other flags (-L, -Wl, ...) are not libraries and are skipped.

    Args:
        libs: Link flags

    Returns:
        Mapping of flag ('-lblas', '-framework Accelerate') to the
        library found, or None

    Warns:
        RuntimeWarning: For every library that cannot be found
    """
    found: dict[str, str | None] = {}
    tokens = list(libs)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == '-framework' and i + 1 < len(tokens):
            flag, name = f"-framework {tokens[i + 1]}", tokens[i + 1]
            i += 2
        elif token.startswith('-l') and len(token) > 2:
            flag, name = token, token[2:]
            i += 1
        else:
            i += 1
            continue

        path = ctypes.util.find_library(name)
        if path is None:
            warnings.warn(
                f"Library for {flag!r} not found on this host; "
                f"set {LIBS_ENV} to the link flags of your BLAS/LAPACK",
                RuntimeWarning,
                stacklevel=2,
            )
        found[flag] = path
    return found


def linked_libraries() -> dict[str, str]:
    """
    BLAS/LAPACK implementations the installed scipy was built against.

    Returns:
        e.g. {'blas': 'scipy-openblas', 'lapack': 'scipy-openblas'};
        empty if scipy does not report its build dependencies
    """
    config = scipy.show_config(mode='dicts') or {}
    deps = config.get('Build Dependencies', {})
    return {
        key: deps[key]['name']
        for key in ('blas', 'lapack')
        if isinstance(deps.get(key), dict) and 'name' in deps[key]
    }


# =============================================================================
# Command line
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m denseblas.config',
        description='Select BLAS/LAPACK compiler and linker flags for this host.',
    )
    parser.add_argument(
        '--output-dir',
        help=f'Write {CFLAGS_FILE} and {LIBRARY_FLAGS_FILE} into this directory',
    )
    parser.add_argument(
        '--system',
        help='Select flags for this system instead of the detected one',
    )
    parser.add_argument(
        '--locate',
        action='store_true',
        help='Resolve the link flags to libraries on this host',
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    system = args.system or detect_system()
    flags = discover(system=system)

    print(f"Host:    {get_platform_info()}")
    print(f"System:  {system}")
    print(f"CFLAGS:  {' '.join(flags.cflags)}")
    print(f"LIBS:    {' '.join(flags.libs)}")

    if args.locate:
        for flag, path in locate_libraries(flags.libs).items():
            print(f"  {flag:<24} {path or 'NOT FOUND'}")
        for key, name in linked_libraries().items():
            print(f"  scipy {key:<18} {name}")

    if args.output_dir:
        try:
            paths = write_flags(flags, args.output_dir)
        except ConfigurationError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        for path in paths:
            print(f"Wrote {path}")

    return 0

