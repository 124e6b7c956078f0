"""
Subprocess boundary for running sleek.

Formatting itself happens inside the sleek executable: SQL is piped to
standard input and the result read from standard output. This module only
builds the command line, enforces the time budget and maps failures.
"""

import logging
import subprocess
from typing import List

from sleekkit.config.parser import SleekConfig
from sleekkit.core.exceptions import (
    FormatterError,
    FormatterNotFoundError,
    FormatterTimeoutError,
)

logger = logging.getLogger(__name__)

FORMAT_TIMEOUT = 30
MAX_PATH_LENGTH = 500


def _flag_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_command(config: SleekConfig, executable: str = None) -> List[str]:
    """
    Build the formatting command line.

    Example:
        >>> build_command(SleekConfig())
        ['sleek', '--indent-spaces', '4', '--uppercase', 'true', ...]
    """
    return [
        executable or config.executable,
        "--indent-spaces",
        _flag_value(config.indent_spaces),
        "--uppercase",
        _flag_value(config.uppercase),
        "--lines-between-queries",
        _flag_value(config.lines_between_queries),
        "--trailing-newline",
        _flag_value(config.trailing_newline),
    ]


def _run(cmd: List[str], text: str, timeout: float) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            cmd,
            input=text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise FormatterNotFoundError(
            f"Sleek executable not found at: {cmd[0]}. "
            f"Install sleek or update the executable path."
        ) from e
    except subprocess.TimeoutExpired as e:
        raise FormatterTimeoutError(
            f"Sleek timed out after {timeout} seconds. "
            f"The SQL might be too large or complex."
        ) from e
    except OSError as e:
        raise FormatterError(f"Failed to run sleek: {e}") from e


def format_sql(
    text: str,
    config: SleekConfig,
    executable: str = None,
    timeout: float = FORMAT_TIMEOUT,
) -> str:
    """
    Format SQL text with sleek.

    Args:
        text: SQL to format
        config: Formatting options
        executable: Executable to run (default: config.executable)
        timeout: Seconds before the process is killed

    Returns:
        Formatted SQL

    Raises:
        FormatterError: If sleek fails, cannot start or times out
    """
    cmd = build_command(config, executable)
    logger.debug(f"Running: {' '.join(cmd)}")

    result = _run(cmd, text, timeout)

    if result.returncode != 0:
        raise FormatterError(
            f"Sleek formatting failed (exit {result.returncode}): "
            f"{result.stderr.strip()}"
        )

    if result.stderr:
        logger.warning(f"Sleek stderr: {result.stderr.strip()}")

    return result.stdout


def check_formatting(
    text: str,
    executable: str = "sleek",
    timeout: float = FORMAT_TIMEOUT,
) -> bool:
    """
    Check whether SQL text is already formatted.

    Returns:
        True on exit code 0, False on exit code 1

    Raises:
        FormatterError: On any other exit code or process failure
    """
    cmd = [executable, "--check"]
    result = _run(cmd, text, timeout)

    if result.returncode == 0:
        return True
    if result.returncode == 1:
        return False

    raise FormatterError(
        f"Sleek check failed (exit {result.returncode}): {result.stderr.strip()}"
    )


def is_formatting_needed(original: str, formatted: str) -> bool:
    """Whether formatting changes the text beyond surrounding whitespace."""
    return original.strip() != formatted.strip()


def is_valid_executable_path(path: str, is_windows: bool = False) -> bool:
    """
    Cheap sanity check of a configured executable path.

    Rejects empty paths, overly long paths and characters that cannot
    appear in a path on the platform.
    """
    if not path or not path.strip():
        return False

    if len(path) > MAX_PATH_LENGTH:
        return False

    invalid_chars = '<>"|?*' if is_windows else "\0"
    return not any(char in path for char in invalid_chars)
