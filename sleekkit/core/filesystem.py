"""
File system helpers for SleekKit.

Covers the few operations the installer needs: atomic writes, marking a
binary executable and best-effort removal of partial files.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never observed in a partially-written state. If the write
    fails, the original file (if any) remains unchanged.

    Example:
        >>> atomic_write('state.json', '{"key": "value"}')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        remove_file(temp_path)
        raise


def make_executable(
    path: Union[str, Path], is_windows: bool = IS_WINDOWS, mode: Optional[int] = None
) -> None:
    """
    Make a file executable.

    With ``mode`` the permissions are set to exactly that value; otherwise
    the execute bits are added to the current ones. No-op on Windows, where
    the ``.exe`` extension implies executability.
    """
    if is_windows:
        return

    path = Path(path)
    if mode is None:
        mode = path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
    path.chmod(mode)


def remove_file(path: Union[str, Path]) -> bool:
    """
    Remove a file if present.

    Returns:
        True if a file was removed, False if nothing was there or the
        removal failed
    """
    path = Path(path)
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Failed to remove {path}: {e}")
        return False
