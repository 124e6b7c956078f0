"""
Release feed client for sleek.

The GitHub releases endpoint of the sleek repository also carries releases
of unrelated artifacts (for example ``vscode-extension-0.2.2``), so the
single "latest" pointer cannot be trusted. The full list is fetched and
reduced to entries whose tag parses as a tool release.

Example:
    >>> client = ReleaseFeedClient()
    >>> release = client.fetch_latest_tool_release()
    >>> print(release.tag_name, release.notes_summary)
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from sleekkit.core.download import USER_AGENT
from sleekkit.core.exceptions import NoToolReleaseFoundError, ReleaseFeedError
from sleekkit.tool.version import SemanticVersion, parse_release_tag

logger = logging.getLogger(__name__)

GITHUB_REPO = "nrempel/sleek"
GITHUB_API = "https://api.github.com"
NO_RELEASE_NOTES = "No release notes available."
NOTES_MAX_LENGTH = 200

_MARKUP_RE = re.compile(r"[#*`]")


@dataclass(frozen=True)
class ReleaseAsset:
    """A downloadable file attached to a release."""

    name: str
    download_url: str


@dataclass
class ReleaseInfo:
    """A tool release from the feed."""

    version: SemanticVersion
    tag_name: str
    notes_summary: str
    assets: List[ReleaseAsset] = field(default_factory=list)


def extract_release_notes(body: Optional[str], max_length: int = NOTES_MAX_LENGTH) -> str:
    """
    Summarize a release body.

    Takes the first blank-line-delimited paragraph, strips ``#``, ``*`` and
    backtick markers, and truncates to ``max_length`` characters followed
    by ``...``. Empty bodies map to NO_RELEASE_NOTES.
    """
    if not body or not body.strip():
        return NO_RELEASE_NOTES

    first_paragraph = body.replace("\r\n", "\n").split("\n\n")[0]
    cleaned = _MARKUP_RE.sub("", first_paragraph).strip()

    if len(cleaned) <= max_length:
        return cleaned

    return f"{cleaned[:max_length].strip()}..."


def parse_release(entry: Any) -> Optional[ReleaseInfo]:
    """
    Build a ReleaseInfo from one feed entry.

    Returns:
        ReleaseInfo, or None for foreign releases and malformed entries
    """
    if not isinstance(entry, dict):
        return None

    tag_name = entry.get("tag_name")
    version = parse_release_tag(tag_name)
    if version is None:
        logger.debug(f"Ignoring foreign release: {tag_name!r}")
        return None

    assets = []
    for asset in entry.get("assets") or []:
        if not isinstance(asset, dict):
            continue
        name = asset.get("name")
        url = asset.get("browser_download_url")
        if name and url:
            assets.append(ReleaseAsset(name=name, download_url=url))

    return ReleaseInfo(
        version=version,
        tag_name=tag_name,
        notes_summary=extract_release_notes(entry.get("body")),
        assets=assets,
    )


def filter_tool_releases(entries: List[Any]) -> List[ReleaseInfo]:
    """
    Keep tool releases only, newest version first.

    Ordering is numeric per component, independent of feed order.
    """
    releases = [r for r in (parse_release(e) for e in entries) if r is not None]
    releases.sort(key=lambda r: r.version, reverse=True)
    return releases


class ReleaseFeedClient:
    """
    Queries the GitHub releases API for sleek releases.

    Attributes:
        repo: ``owner/name`` of the repository
        releases_url: Endpoint listing all releases
    """

    def __init__(
        self,
        repo: str = GITHUB_REPO,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_base: str = GITHUB_API,
        per_page: int = 100,
    ):
        self.repo = repo
        self.releases_url = f"{api_base.rstrip('/')}/repos/{repo}/releases"
        self.session = session or requests.Session()
        self.timeout = timeout
        self.per_page = per_page

    def fetch_releases(self) -> List[Any]:
        """
        Fetch the raw release list.

        Raises:
            ReleaseFeedError: On network errors, HTTP errors or a response
                that is not a JSON array
        """
        logger.info(f"Fetching releases from {self.releases_url}")

        try:
            response = self.session.get(
                self.releases_url,
                params={"per_page": self.per_page},
                headers={
                    "User-Agent": USER_AGENT,
                    "Accept": "application/vnd.github+json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise ReleaseFeedError(f"Failed to query release feed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ReleaseFeedError(f"Failed to parse release feed response: {e}") from e

        if not isinstance(data, list):
            raise ReleaseFeedError(
                f"Unexpected release feed payload: expected list, got {type(data).__name__}"
            )

        return data

    def fetch_tool_releases(self) -> List[ReleaseInfo]:
        """Fetch tool releases sorted newest first."""
        return filter_tool_releases(self.fetch_releases())

    def fetch_latest_tool_release(self) -> ReleaseInfo:
        """
        Get the newest tool release.

        Raises:
            NoToolReleaseFoundError: If the feed has no tool release
            ReleaseFeedError: If the feed cannot be read
        """
        releases = self.fetch_tool_releases()
        if not releases:
            raise NoToolReleaseFoundError(
                f"No sleek release found in {self.repo} releases"
            )

        latest = releases[0]
        logger.info(f"Latest sleek release: {latest.tag_name}")
        return latest
