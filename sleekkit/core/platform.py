"""
Platform detection for SleekKit.

Sleek publishes one binary per OS / CPU pair. This module maps the values
reported by the interpreter onto the tokens used in release asset names:

- OS: ``windows``, ``macos``, ``linux``
- Architecture: ``x86_64``, ``aarch64``

Usage:
    from sleekkit.core.platform import detect_platform

    info = detect_platform()
    print(info.platform_string())  # e.g. 'linux-x86_64'
"""

import functools
import platform
from dataclasses import dataclass
from typing import Optional

from sleekkit.core.exceptions import UnsupportedPlatformError

SUPPORTED_OS = ("windows", "macos", "linux")
SUPPORTED_ARCH = ("x86_64", "aarch64")

_OS_ALIASES = {
    "windows": "windows",
    "win32": "windows",
    "cygwin": "windows",
    "darwin": "macos",
    "macos": "macos",
    "linux": "linux",
}

_ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Normalized platform information.

    Attributes:
        os: Operating system token ('windows', 'macos', 'linux')
        arch: CPU architecture token ('x86_64', 'aarch64')
    """

    os: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def executable_suffix(self) -> str:
        """Suffix appended to executable names ('.exe' on Windows)."""
        return ".exe" if self.is_windows else ""

    def platform_string(self) -> str:
        """
        Get canonical platform string.

        Example:
            >>> PlatformInfo('linux', 'x86_64').platform_string()
            'linux-x86_64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


def normalize_platform(system: str, machine: str) -> PlatformInfo:
    """
    Map raw OS / CPU names onto supported tokens.

    Args:
        system: OS name as reported by ``platform.system()``
        machine: CPU name as reported by ``platform.machine()``

    Returns:
        PlatformInfo with normalized tokens

    Raises:
        UnsupportedPlatformError: If either value has no published binary
    """
    os_name = _OS_ALIASES.get((system or "").strip().lower())
    arch = _ARCH_ALIASES.get((machine or "").strip().lower())

    if os_name is None or arch is None:
        raise UnsupportedPlatformError(system, machine)

    return PlatformInfo(os=os_name, arch=arch)


@functools.lru_cache(maxsize=1)
def _detect_current() -> PlatformInfo:
    return normalize_platform(platform.system(), platform.machine())


def detect_platform(
    system: Optional[str] = None, machine: Optional[str] = None
) -> PlatformInfo:
    """
    Detect current platform information.

    Detection of the running interpreter is cached; passing explicit values
    bypasses the cache.

    Raises:
        UnsupportedPlatformError: If the platform is not supported
    """
    if system is None and machine is None:
        return _detect_current()

    return normalize_platform(
        system if system is not None else platform.system(),
        machine if machine is not None else platform.machine(),
    )


def is_supported_platform(info: Optional[PlatformInfo] = None) -> bool:
    """Check whether a platform has published sleek binaries."""
    if info is None:
        try:
            info = detect_platform()
        except UnsupportedPlatformError:
            return False

    return info.os in SUPPORTED_OS and info.arch in SUPPORTED_ARCH


def clear_platform_cache():
    """
    Clear the platform detection cache.

    Useful for testing or when platform information changes.
    """
    _detect_current.cache_clear()


__all__ = [
    "PlatformInfo",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
    "normalize_platform",
    "detect_platform",
    "is_supported_platform",
    "clear_platform_cache",
]
