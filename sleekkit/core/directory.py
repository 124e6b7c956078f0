"""
Private storage directory management for SleekKit.

Directory Structure (~/.sleekkit/ or %USERPROFILE%\\.sleekkit\\):
    - sleek / sleek.exe : Managed (downloaded) sleek executable
    - lock/             : Concurrent access control files
    - state.json        : Update-check and installed-release record
"""

import os
from pathlib import Path
from typing import Optional

from sleekkit.core.exceptions import SleekKitError
from sleekkit.core.platform import PlatformInfo

TOOL_NAME = "sleek"
STORAGE_ENV_VAR = "SLEEKKIT_HOME"


class DirectoryError(SleekKitError):
    """Base exception for directory-related errors."""

    pass


def get_storage_dir() -> Path:
    """
    Get the platform-specific private storage directory.

    ``SLEEKKIT_HOME`` takes precedence when set.

    Returns:
        Path: The storage directory path.
            - Windows: %USERPROFILE%\\.sleekkit
            - Linux/macOS: ~/.sleekkit/

    Raises:
        DirectoryError: If USERPROFILE is unset on Windows
    """
    override = os.environ.get(STORAGE_ENV_VAR)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine storage directory."
            )
        return Path(user_profile) / ".sleekkit"
    else:  # Linux/macOS
        return Path.home() / ".sleekkit"


def executable_name(platform: PlatformInfo, base_name: str = TOOL_NAME) -> str:
    """
    Get platform-specific executable file name.

    Example:
        >>> executable_name(PlatformInfo('windows', 'x86_64'))
        'sleek.exe'
    """
    return f"{base_name}{platform.executable_suffix}"


def host_executable_name(base_name: str = TOOL_NAME) -> str:
    """
    Executable file name for the running OS, whatever its CPU.

    Example:
        >>> host_executable_name()  # on Linux
        'sleek'
    """
    return f"{base_name}.exe" if os.name == "nt" else base_name


def get_managed_executable_path(
    platform: PlatformInfo, storage_dir: Optional[Path] = None
) -> Path:
    """
    Get the path of the self-managed sleek executable.

    Args:
        platform: Platform the binary is installed for
        storage_dir: Storage directory (default: get_storage_dir())
    """
    if storage_dir is None:
        storage_dir = get_storage_dir()
    return Path(storage_dir) / executable_name(platform)


def ensure_storage_dir(storage_dir: Optional[Path] = None) -> Path:
    """
    Create the storage directory if needed.

    Raises:
        DirectoryError: If the directory cannot be created
    """
    if storage_dir is None:
        storage_dir = get_storage_dir()
    storage_dir = Path(storage_dir)

    try:
        storage_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryError(
            f"Failed to create storage directory {storage_dir}: {e}"
        ) from e

    return storage_dir
