"""
Update-check state for SleekKit.

Remembers when the release feed was last consulted and which release is
installed in the storage directory. The scheduling policy (how often to
check) belongs to the caller; this module only records timestamps.

Example:
    >>> manager = StateManager(storage_dir)
    >>> if manager.is_update_check_due(timedelta(hours=24)):
    ...     check = sleek_manager.check_for_updates()
    ...     manager.record_update_check()
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from sleekkit.core.filesystem import atomic_write

logger = logging.getLogger(__name__)


@dataclass
class UpdateState:
    """
    Persisted update state.

    Attributes:
        version: State file format version
        last_update_check: ISO 8601 timestamp of last feed query
        installed_version: Version of the managed binary
        installed_tag: Release tag the managed binary came from
    """

    version: int = 1
    last_update_check: Optional[str] = None
    installed_version: Optional[str] = None
    installed_tag: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "last_update_check": self.last_update_check,
            "installed_version": self.installed_version,
            "installed_tag": self.installed_tag,
        }


class StateManager:
    """
    Loads and saves ``state.json`` in the storage directory.

    Attributes:
        state_file: Path to state.json file
    """

    def __init__(self, storage_dir: Path):
        self.state_file = Path(storage_dir) / "state.json"

    def load(self) -> UpdateState:
        """
        Load state from disk.

        A missing or corrupted file yields a default UpdateState.
        """
        if not self.state_file.exists():
            logger.debug(f"State file not found: {self.state_file}")
            return UpdateState()

        try:
            with open(self.state_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            return UpdateState(
                version=data.get("version", 1),
                last_update_check=data.get("last_update_check"),
                installed_version=data.get("installed_version"),
                installed_tag=data.get("installed_tag"),
            )

        except (ValueError, OSError, TypeError, AttributeError) as e:
            logger.warning(
                f"Invalid state file {self.state_file}, resetting to default: {e}"
            )
            return UpdateState()

    def save(self, state: UpdateState):
        """Save state to disk atomically."""
        atomic_write(self.state_file, json.dumps(state.to_dict(), indent=2))
        logger.debug(f"Saved state to {self.state_file}")

    def record_update_check(self, when: Optional[datetime] = None) -> UpdateState:
        """Store the time of the latest feed query."""
        when = when or datetime.now(timezone.utc)
        state = self.load()
        state.last_update_check = when.isoformat()
        self.save(state)
        return state

    def record_install(self, version: str, tag: str) -> UpdateState:
        """Store which release the managed binary was installed from."""
        state = self.load()
        state.installed_version = version
        state.installed_tag = tag
        self.save(state)
        return state

    def is_update_check_due(
        self, interval: timedelta, now: Optional[datetime] = None
    ) -> bool:
        """
        Whether ``interval`` has elapsed since the last recorded check.

        Missing or unparsable timestamps count as due.
        """
        state = self.load()
        if not state.last_update_check:
            return True

        try:
            last = datetime.fromisoformat(state.last_update_check)
        except ValueError:
            logger.debug(f"Unparsable last check: {state.last_update_check}")
            return True

        if last.tzinfo is None:
            last = last.replace(tzinfo=timezone.utc)

        now = now or datetime.now(timezone.utc)
        return now - last >= interval
