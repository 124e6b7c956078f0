"""
Core functionality for SleekKit.

Platform detection, storage layout, locking, downloading and state.
"""

from .platform import (
    PlatformInfo,
    detect_platform,
    is_supported_platform,
    clear_platform_cache,
)

from .directory import (
    get_storage_dir,
    get_managed_executable_path,
    ensure_storage_dir,
    DirectoryError,
)

from .locking import LockManager, LockTimeout

from .download import Downloader, DownloadProgress, download_file

from .state import StateManager, UpdateState

__all__ = [
    "PlatformInfo",
    "detect_platform",
    "is_supported_platform",
    "clear_platform_cache",
    "get_storage_dir",
    "get_managed_executable_path",
    "ensure_storage_dir",
    "DirectoryError",
    "LockManager",
    "LockTimeout",
    "Downloader",
    "DownloadProgress",
    "download_file",
    "StateManager",
    "UpdateState",
]
