"""
Format command implementation.

Formats SQL files in place, or standard input to standard output.
"""

import logging
import sys

from sleekkit.cli.utils import load_cli_config, resolve_executable_path
from sleekkit.tool.formatter import format_sql

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the format command.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config = load_cli_config(args)
    executable = resolve_executable_path(config)

    if not args.files:
        sys.stdout.write(format_sql(sys.stdin.read(), config, executable))
        return 0

    for path in args.files:
        original = path.read_text(encoding="utf-8")
        formatted = format_sql(original, config, executable)

        if formatted != original:
            path.write_text(formatted, encoding="utf-8")
            logger.info(f"Formatted {path}")
        else:
            logger.debug(f"Unchanged {path}")

    return 0
