"""
Concurrent access control for SleekKit.

Installs from several processes (two editor windows, a CLI run) must not
interleave their rename of the managed binary. A file lock in the storage
directory serializes them.

Usage:
    from sleekkit.core.locking import LockManager

    lock_manager = LockManager(storage_dir)
    with lock_manager.install_lock(timeout=300):
        # download and activate
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

from sleekkit.core.directory import get_storage_dir

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages locks for SleekKit resources.

    Uses file-based locking with the `filelock` library for cross-platform
    compatibility and automatic cleanup on process death.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, storage_dir: Optional[Path] = None):
        if storage_dir is None:
            storage_dir = get_storage_dir()

        self.lock_dir = Path(storage_dir) / "lock"
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def install_lock(self, timeout: float = 300):
        """
        Acquire the lock guarding the managed executable.

        Args:
            timeout: Maximum wait time in seconds (default: 300)

        Raises:
            LockTimeout: If lock can't be acquired within timeout
        """
        lock_file = self.lock_dir / "install.lock"
        lock = FileLock(str(lock_file), timeout=timeout)

        logger.debug(f"Acquiring install lock: {lock_file}")
        try:
            with lock:
                logger.debug("Install lock acquired")
                yield
        finally:
            logger.debug("Install lock released")


__all__ = ["LockManager", "LockTimeout"]
