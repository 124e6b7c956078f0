"""
Check command implementation.

Reports whether SQL is already formatted.
"""

import logging
import sys

from sleekkit.cli.utils import load_cli_config, resolve_executable_path
from sleekkit.tool.formatter import check_formatting

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the check command.

    Returns:
        Exit code (0 if everything is formatted, 1 otherwise)
    """
    config = load_cli_config(args)
    executable = resolve_executable_path(config)

    if not args.files:
        formatted = check_formatting(sys.stdin.read(), executable)
        logger.info("SQL is formatted" if formatted else "SQL needs formatting")
        return 0 if formatted else 1

    unformatted = []
    for path in args.files:
        if not check_formatting(path.read_text(encoding="utf-8"), executable):
            unformatted.append(path)
            logger.info(f"Needs formatting: {path}")

    return 1 if unformatted else 0
