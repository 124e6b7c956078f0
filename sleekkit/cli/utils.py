"""
Shared utilities for CLI commands.

Provides config loading, manager construction and console output helpers
used across CLI commands.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from sleekkit.config.parser import SleekConfig, load_config
from sleekkit.core.download import Downloader, DownloadProgress
from sleekkit.releases.feed import ReleaseFeedClient
from sleekkit.tool.manager import SleekManager

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_cli_config(args) -> SleekConfig:
    """
    Load configuration for a command.

    Uses ``--config`` when given, otherwise ``./sleek.yaml`` if present.
    ``--executable`` overrides the configured executable.
    """
    config = load_config(getattr(args, "config", None))

    executable = getattr(args, "executable", None)
    if executable:
        config.executable = executable

    return config


def create_manager(config: SleekConfig) -> SleekManager:
    """Build a SleekManager honouring storage and timeout settings."""
    storage_dir = Path(config.storage_dir).expanduser() if config.storage_dir else None
    return SleekManager(
        storage_dir=storage_dir,
        feed=ReleaseFeedClient(timeout=config.http_timeout),
        downloader=Downloader(timeout=config.http_timeout),
    )


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """Print error message to stderr in consistent format."""
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII-safe characters if Unicode can't be encoded.
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("→", "->")
            .replace("✅", "[OK]")
            .replace("❌", "[ERROR]")
            .replace("⬇️", "[DOWNLOAD]")
            .replace("📦", "[UPDATE]")
        )
        print(safe_message, file=file)


def print_progress(progress: DownloadProgress):
    """Progress callback writing a single updating line to stderr."""
    sys.stderr.write(f"\r  {progress}")
    if progress.percentage >= 100:
        sys.stderr.write("\n")
    sys.stderr.flush()


def resolve_executable_path(config: SleekConfig) -> str:
    """
    Path of the sleek executable to run.

    Raises:
        NoExecutableFoundError: If neither candidate is usable
    """
    resolution = create_manager(config).resolve_executable(config.executable)
    logger.debug(
        f"Using {resolution.selection.path} ({resolution.selection.reason.value})"
    )
    return resolution.selection.path
