"""
Install command implementation.

Downloads the newest sleek release into the storage directory.
"""

import logging
import time

from sleekkit.cli.utils import create_manager, load_cli_config, print_progress, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments with:
            - force: Reinstall even when up to date
            - timeout: Optional download deadline in seconds

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config = load_cli_config(args)
    manager = create_manager(config)

    check = manager.check_for_updates()
    if not check.has_update and not args.force:
        safe_print(f"✅ sleek {check.display()} is already installed")
        return 0

    deadline = time.monotonic() + args.timeout if args.timeout else None
    progress = None if args.quiet else print_progress

    safe_print(f"⬇️  Downloading sleek {check.release.tag_name}...")
    result = manager.install(
        release=check.release, progress_callback=progress, deadline=deadline
    )

    safe_print(f"✅ Installed sleek v{result.version} at {result.path}")
    return 0
