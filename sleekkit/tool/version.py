"""
Version parsing and comparison for sleek.

Version text arrives from two partially-trusted sources: the banner printed
by ``sleek --version`` and release tags from the feed. Every parser here is
total: it returns a SemanticVersion or None and never assumes shape.

Only plain ``major.minor.patch`` is modelled. Pre-release or build suffixes
and any other number of components are rejected, not coerced.

Example:
    >>> parse_version_from_output("sleek 0.5.0")
    SemanticVersion(major=0, minor=5, patch=0)
    >>> is_newer("0.4.9", "0.5.0")
    True
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from sleekkit.core.exceptions import InvalidVersionError

logger = logging.getLogger(__name__)

TOOL_NAME = "sleek"

_STRICT_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")
_RELEASE_TAG_RE = re.compile(
    r"^(?:v|release-)?([0-9]+\.[0-9]+\.[0-9]+)$", re.IGNORECASE
)
# Exactly three groups: no digit or dot directly before, no further
# ".<digit>" or digit directly after.
_FREE_TEXT_RE = re.compile(
    rf"(?:{TOOL_NAME}\s+)?(?<![0-9.])([0-9]+\.[0-9]+\.[0-9]+)(?!\.?[0-9])",
    re.IGNORECASE,
)


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """
    Semantic version ``major.minor.patch``.

    Ordering is lexicographic over (major, minor, patch).
    """

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


VersionLike = Union[str, SemanticVersion]


def parse_strict(version_string: Optional[str]) -> Optional[SemanticVersion]:
    """
    Parse a string that is exactly ``digits.digits.digits``.

    No leading ``v`` and no suffix are accepted.
    """
    if not isinstance(version_string, str):
        return None

    match = _STRICT_RE.fullmatch(version_string)
    if not match:
        return None

    major, minor, patch = (int(group) for group in match.groups())
    return SemanticVersion(major, minor, patch)


def parse_version_from_output(text: Optional[str]) -> Optional[SemanticVersion]:
    """
    Find the first version in free text such as ``sleek 1.2.3``.

    Version-like runs with more than three numeric groups are skipped.
    """
    if not text:
        return None

    match = _FREE_TEXT_RE.search(text)
    if not match:
        logger.debug(f"No version found in output: {text[:80]!r}")
        return None

    return parse_strict(match.group(1))


def parse_release_tag(tag_name: Optional[str]) -> Optional[SemanticVersion]:
    """
    Extract the version from a release tag.

    Accepts ``v1.2.3``, ``1.2.3`` and ``release-1.2.3`` (prefix is
    case-insensitive). Any other tag, e.g. ``beta-1.2.3`` or
    ``vscode-extension-0.2.2``, is a foreign release and yields None.
    """
    if not isinstance(tag_name, str):
        return None

    match = _RELEASE_TAG_RE.match(tag_name.strip())
    if not match:
        return None

    return parse_strict(match.group(1))


def _coerce(version: VersionLike) -> SemanticVersion:
    if isinstance(version, SemanticVersion):
        return version

    parsed = parse_strict(version)
    if parsed is None:
        raise InvalidVersionError(version)
    return parsed


def compare_versions(a: VersionLike, b: VersionLike) -> int:
    """
    Compare two versions.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b

    Raises:
        InvalidVersionError: If either version is not strict semver
    """
    left = _coerce(a)
    right = _coerce(b)

    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def is_newer(current: Optional[VersionLike], candidate: Optional[VersionLike]) -> bool:
    """
    Check whether ``candidate`` is newer than ``current``.

    Never raises: malformed input returns False so bad data cannot trigger
    an "update available" prompt.
    """
    try:
        return compare_versions(current, candidate) < 0
    except InvalidVersionError:
        return False


def is_valid_version(version: Optional[str]) -> bool:
    """Validate version string format."""
    return parse_strict(version) is not None


def format_version_display(
    current: VersionLike, latest: Optional[VersionLike] = None
) -> str:
    """
    Format a version for display.

    Example:
        >>> format_version_display("0.4.0", "0.5.0")
        'v0.4.0 → v0.5.0 available'
    """
    if not latest:
        return f"v{current}"

    if is_newer(current, latest):
        return f"v{current} → v{latest} available"

    return f"v{current} (latest)"

