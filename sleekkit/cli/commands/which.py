"""
Which command implementation.

Shows the configured and downloaded sleek executables and which one runs.
"""

import logging

from sleekkit.cli.utils import create_manager, load_cli_config, print_error
from sleekkit.core.exceptions import NoExecutableFoundError

logger = logging.getLogger(__name__)


def _describe(label: str, candidate) -> str:
    version = f"v{candidate.version}" if candidate.version else "not available"
    return f"{label:<11} {candidate.path} ({version})"


def run(args) -> int:
    """
    Run the which command.

    Returns:
        Exit code (0 if an executable was found, 1 otherwise)
    """
    config = load_cli_config(args)
    manager = create_manager(config)

    try:
        resolution = manager.resolve_executable(config.executable)
    except NoExecutableFoundError as e:
        print_error(str(e), "Run 'sleekkit install' to download sleek")
        return 1

    print(_describe("configured:", resolution.configured))
    print(_describe("downloaded:", resolution.downloaded))
    print(
        f"selected:   {resolution.selection.path} "
        f"[{resolution.selection.reason.value}]"
    )
    return 0
