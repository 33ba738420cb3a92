"""
Tests for host platform detection.
"""

import pytest

from denseblas.config.platform import PlatformInfo, detect_system, get_platform_info


class TestDetectSystem:

    @pytest.mark.parametrize("sys_platform,expected", [
        ('linux', 'linux'),
        ('darwin', 'macosx'),
        ('cygwin', 'cygwin'),
        ('freebsd14', 'freebsd'),
        ('openbsd7', 'openbsd'),
        ('netbsd10', 'netbsd'),
        ('sunos5', 'sunos5'),
    ])
    def test_unix_like(self, sys_platform, expected):
        assert detect_system(sys_platform=sys_platform, build_platform='x') == expected

    @pytest.mark.parametrize("build_platform,bits,expected", [
        ('mingw_x86_64', 64, 'mingw64'),
        ('mingw_i686', 32, 'mingw'),
        ('win-amd64', 64, 'win64'),
        ('win32', 32, 'win32'),
    ])
    def test_windows(self, build_platform, bits, expected):
        result = detect_system(
            sys_platform='win32', build_platform=build_platform, pointer_bits=bits,
        )
        assert result == expected

    def test_host(self):
        assert isinstance(detect_system(), str)


class TestPlatformInfo:

    def test_host_info(self):
        info = get_platform_info()
        assert info.system == detect_system()
        assert info.pointer_bits in (32, 64)

    def test_str(self):
        info = PlatformInfo(system='linux', machine='x86_64', pointer_bits=64, compiler='GCC 13')
        assert str(info) == "linux (x86_64, 64-bit, GCC 13)"
