"""
Sleek executable management.

Ties the pieces together:

- resolve: probe the configured and managed executables and select one,
  deleting a managed binary that fails verification
- check_for_updates: compare an installed version with the feed
- install: download the newest release for this platform, verify it and
  activate it atomically

Example:
    >>> manager = SleekManager()
    >>> resolution = manager.resolve_executable("sleek")
    >>> print(resolution.selection.path, resolution.selection.reason.value)
    >>>
    >>> update = manager.check_for_updates()
    >>> if update.has_update:
    ...     manager.install()
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sleekkit.core.directory import (
    ensure_storage_dir,
    get_managed_executable_path,
    get_storage_dir,
    host_executable_name,
)
from sleekkit.core.download import Downloader, ProgressCallback
from sleekkit.core.exceptions import InvalidExecutableError, UnsupportedPlatformError
from sleekkit.core.filesystem import remove_file
from sleekkit.core.locking import LockManager
from sleekkit.core.platform import PlatformInfo, detect_platform
from sleekkit.core.state import StateManager
from sleekkit.releases.assets import pick_asset
from sleekkit.releases.feed import ReleaseFeedClient, ReleaseInfo
from sleekkit.tool.probe import InstallationProbe
from sleekkit.tool.selector import Candidate, SelectionResult, select_candidate
from sleekkit.tool.version import SemanticVersion, VersionLike, format_version_display, is_newer

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of resolving which executable to run."""

    selection: SelectionResult
    configured: Candidate
    downloaded: Candidate


@dataclass
class UpdateCheck:
    """Information about an available update."""

    has_update: bool
    latest: SemanticVersion
    release: ReleaseInfo
    current: Optional[VersionLike] = None

    def display(self) -> str:
        """Human readable version string."""
        if self.current is None:
            return f"v{self.latest} available"
        return format_version_display(self.current, self.latest)


@dataclass
class InstallResult:
    """Result of an install operation."""

    path: Path
    version: SemanticVersion
    tag_name: str


class SleekManager:
    """
    Resolves, checks and installs the sleek executable.

    Platform, storage directory, feed client, downloader and probe are all
    injectable so the manager can be driven without touching the process
    environment.
    """

    def __init__(
        self,
        storage_dir: Optional[Path] = None,
        platform: Optional[PlatformInfo] = None,
        feed: Optional[ReleaseFeedClient] = None,
        downloader: Optional[Downloader] = None,
        probe: Optional[InstallationProbe] = None,
        lock_timeout: float = 300,
    ):
        self.storage_dir = Path(storage_dir) if storage_dir else get_storage_dir()
        self._platform = platform
        self.feed = feed or ReleaseFeedClient()
        self.downloader = downloader or Downloader()
        self.probe = probe or InstallationProbe()
        self.lock_timeout = lock_timeout
        self.state = StateManager(self.storage_dir)

    @property
    def platform(self) -> PlatformInfo:
        """
        Platform binaries are installed for.

        Raises:
            UnsupportedPlatformError: If the running platform is unsupported
        """
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    @property
    def managed_path(self) -> Path:
        """
        Location of the self-managed executable.

        On a platform without published binaries the path is still named
        after the host OS; nothing will have been installed there.
        """
        try:
            platform = self.platform
        except UnsupportedPlatformError:
            return self.storage_dir / host_executable_name()
        return get_managed_executable_path(platform, self.storage_dir)

    def managed_version(self) -> Optional[SemanticVersion]:
        """
        Version of the managed executable.

        A managed binary that fails verification is deleted, so a corrupt
        download heals itself on the next install.
        """
        path = self.managed_path
        if not path.exists():
            return None

        try:
            output_version = self.probe.probe_verified(path)
        except InvalidExecutableError as e:
            logger.warning(f"Removing corrupted sleek download: {e}")
            remove_file(path)
            return None

        return output_version

    def resolve_executable(self, configured_path: Optional[str] = None) -> Resolution:
        """
        Decide which sleek executable to run.

        Args:
            configured_path: User-configured executable (default: 'sleek')

        Raises:
            NoExecutableFoundError: If neither candidate is usable
        """
        configured_path = configured_path or "sleek"

        configured = Candidate(configured_path, self.probe.probe(configured_path))
        downloaded = Candidate(str(self.managed_path), self.managed_version())

        selection = select_candidate(downloaded, configured)
        logger.debug(f"Selected {selection.path} ({selection.reason.value})")

        return Resolution(selection=selection, configured=configured, downloaded=downloaded)

    def check_for_updates(self, current_version: Optional[VersionLike] = None) -> UpdateCheck:
        """
        Compare the installed version with the newest tool release.

        Args:
            current_version: Installed version (default: managed binary's)

        Raises:
            ReleaseFeedError: If the feed cannot be read
            NoToolReleaseFoundError: If the feed has no tool release
        """
        release = self.feed.fetch_latest_tool_release()
        self.state.record_update_check()

        if current_version is None:
            current_version = self.managed_version()

        if not current_version:
            return UpdateCheck(has_update=True, latest=release.version, release=release)

        return UpdateCheck(
            has_update=is_newer(current_version, release.version),
            latest=release.version,
            release=release,
            current=current_version,
        )

    def install(
        self,
        release: Optional[ReleaseInfo] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> InstallResult:
        """
        Download, verify and activate a sleek release.

        Args:
            release: Release to install (default: newest tool release)
            progress_callback: Download progress callback
            cancel_event: Event that cancels the download when set
            deadline: ``time.monotonic()`` deadline for the download

        Raises:
            UnsupportedPlatformError: Before any network access
            ReleaseFeedError / AssetError / DownloadError: On acquisition failure
            InvalidExecutableError: If the downloaded binary fails verification
        """
        platform = self.platform
        destination = self.managed_path
        ensure_storage_dir(self.storage_dir)

        if release is None:
            release = self.feed.fetch_latest_tool_release()

        asset = pick_asset(release, platform.os, platform.arch)
        logger.info(f"Installing sleek {release.tag_name} ({asset.name})")

        with LockManager(self.storage_dir).install_lock(timeout=self.lock_timeout):
            self.downloader.download(
                asset.download_url,
                destination,
                progress_callback=progress_callback,
                cancel_event=cancel_event,
                deadline=deadline,
            )

            try:
                self.probe.verify(destination)
            except InvalidExecutableError:
                remove_file(destination)
                raise

        self.state.record_install(str(release.version), release.tag_name)
        logger.info(f"Installed sleek {release.version} at {destination}")

        return InstallResult(path=destination, version=release.version, tag_name=release.tag_name)
