"""
Update command implementation.

Checks the release feed for a newer sleek and optionally installs it.
"""

import logging
from datetime import timedelta

from sleekkit.cli.utils import create_manager, load_cli_config, print_progress, safe_print
from sleekkit.core.exceptions import NoExecutableFoundError

logger = logging.getLogger(__name__)


def _confirm(prompt: str) -> bool:
    try:
        response = input(prompt).strip().lower()
    except EOFError:
        return False
    return not response or response in ("y", "yes")


def run(args) -> int:
    """
    Run the update command.

    Args:
        args: Parsed command-line arguments with:
            - check: Only report availability
            - if_due: Respect the configured check interval
            - yes: Install without prompting

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config = load_cli_config(args)
    manager = create_manager(config)

    if args.if_due:
        interval = timedelta(hours=config.check_interval_hours)
        if not manager.state.is_update_check_due(interval):
            logger.info("Update check not due yet")
            return 0

    try:
        resolution = manager.resolve_executable(config.executable)
        selected = resolution.downloaded
        if resolution.selection.path != resolution.downloaded.path:
            selected = resolution.configured
        current_version = selected.version
    except NoExecutableFoundError:
        current_version = None

    check = manager.check_for_updates(current_version)

    if not check.has_update:
        safe_print(f"✅ sleek {check.display()}")
        return 0

    safe_print(f"📦 sleek update available: {check.display()}")
    safe_print(f"   {check.release.notes_summary}")

    if args.check:
        return 0

    if not args.yes and not _confirm("Install update? [Y/n] "):
        print("Update cancelled")
        return 0

    result = manager.install(
        release=check.release,
        progress_callback=None if args.quiet else print_progress,
    )
    safe_print(f"✅ Updated sleek to v{result.version}")
    return 0
