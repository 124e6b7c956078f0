"""
Choose which sleek executable to run.

Two candidates exist at every decision point: the user-configured path and
the self-managed download. The policy is:

1. Exactly one has a version: use it.
2. Both have versions: use the download only if it is strictly newer;
   on equality the configured path wins since the user chose it.
3. Versions cannot be compared: use the download, which was vetted at
   install time.
4. Neither has a version: raise NoExecutableFoundError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sleekkit.core.exceptions import InvalidVersionError, NoExecutableFoundError
from sleekkit.tool.version import VersionLike, compare_versions


class SelectionReason(str, Enum):
    """Why a candidate was selected."""

    DOWNLOADED_ONLY = "downloaded-only"
    CONFIGURED_ONLY = "configured-only"
    DOWNLOADED_NEWER = "downloaded-newer"
    CONFIGURED_NEWER_OR_EQUAL = "configured-newer-or-equal"
    COMPARISON_FAILED = "comparison-failed"


@dataclass(frozen=True)
class Candidate:
    """A possible executable location and the version it reported."""

    path: str
    version: Optional[VersionLike] = None

    @property
    def available(self) -> bool:
        return bool(self.version)


@dataclass(frozen=True)
class SelectionResult:
    """Selected executable path plus the reason code."""

    path: str
    reason: SelectionReason


def select_candidate(downloaded: Candidate, configured: Candidate) -> SelectionResult:
    """
    Apply the selection policy to two candidates.

    Raises:
        NoExecutableFoundError: If neither candidate has a version
    """
    if downloaded.available and not configured.available:
        return SelectionResult(downloaded.path, SelectionReason.DOWNLOADED_ONLY)

    if configured.available and not downloaded.available:
        return SelectionResult(configured.path, SelectionReason.CONFIGURED_ONLY)

    if downloaded.available and configured.available:
        try:
            if compare_versions(configured.version, downloaded.version) < 0:
                return SelectionResult(
                    downloaded.path, SelectionReason.DOWNLOADED_NEWER
                )
            return SelectionResult(
                configured.path, SelectionReason.CONFIGURED_NEWER_OR_EQUAL
            )
        except InvalidVersionError:
            return SelectionResult(downloaded.path, SelectionReason.COMPARISON_FAILED)

    raise NoExecutableFoundError("No valid sleek executable found")


def select_executable(
    downloaded_path: str,
    downloaded_version: Optional[VersionLike],
    configured_path: str,
    configured_version: Optional[VersionLike],
) -> SelectionResult:
    """
    Determine which sleek executable to use based on versions.

    Example:
        >>> select_executable("/d", "0.4.0", "sleek", None)
        SelectionResult(path='/d', reason=<SelectionReason.DOWNLOADED_ONLY: 'downloaded-only'>)
    """
    return select_candidate(
        Candidate(downloaded_path, downloaded_version),
        Candidate(configured_path, configured_version),
    )
