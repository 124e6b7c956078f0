"""
Unit tests for platform detection.
"""

from unittest.mock import patch

import pytest

from sleekkit.core.exceptions import UnsupportedPlatformError
from sleekkit.core.platform import (
    PlatformInfo,
    clear_platform_cache,
    detect_platform,
    is_supported_platform,
    normalize_platform,
)


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_platform_cache()
    yield
    clear_platform_cache()


class TestNormalizePlatform:
    """Test normalize_platform function."""

    @pytest.mark.parametrize(
        "system,machine,expected",
        [
            ("Linux", "x86_64", "linux-x86_64"),
            ("Linux", "aarch64", "linux-aarch64"),
            ("Darwin", "arm64", "macos-aarch64"),
            ("Darwin", "x86_64", "macos-x86_64"),
            ("Windows", "AMD64", "windows-x86_64"),
            ("Windows", "ARM64", "windows-aarch64"),
        ],
    )
    def test_known_platforms(self, system, machine, expected):
        assert normalize_platform(system, machine).platform_string() == expected

    @pytest.mark.parametrize(
        "system,machine",
        [("FreeBSD", "x86_64"), ("Linux", "i686"), ("Linux", "armv7l"), ("", "")],
    )
    def test_unsupported(self, system, machine):
        with pytest.raises(UnsupportedPlatformError):
            normalize_platform(system, machine)


class TestDetectPlatform:
    """Test detect_platform function."""

    @patch("platform.machine", return_value="arm64")
    @patch("platform.system", return_value="Darwin")
    def test_detect_current(self, mock_system, mock_machine):
        info = detect_platform()

        assert info == PlatformInfo("macos", "aarch64")

    @patch("platform.machine", return_value="x86_64")
    @patch("platform.system", return_value="Linux")
    def test_detection_cached(self, mock_system, mock_machine):
        detect_platform()
        detect_platform()

        assert mock_system.call_count == 1

    def test_explicit_values(self):
        assert detect_platform("Windows", "AMD64").is_windows

    @patch("platform.machine", return_value="sparc")
    @patch("platform.system", return_value="SunOS")
    def test_is_supported_platform(self, mock_system, mock_machine):
        assert is_supported_platform() is False
        assert is_supported_platform(PlatformInfo("linux", "x86_64")) is True


class TestPlatformInfo:
    """Test PlatformInfo class."""

    def test_executable_suffix(self):
        assert PlatformInfo("windows", "x86_64").executable_suffix == ".exe"
        assert PlatformInfo("linux", "x86_64").executable_suffix == ""

    def test_str(self):
        assert str(PlatformInfo("macos", "aarch64")) == "macos-aarch64"
