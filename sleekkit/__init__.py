"""
SleekKit - acquire, verify and update the sleek SQL formatter executable.
"""

from sleekkit.core.exceptions import (
    SleekKitError,
    ConfigError,
    InvalidVersionError,
    ExecutableError,
    NoExecutableFoundError,
    InvalidExecutableError,
    ReleaseFeedError,
    NoToolReleaseFoundError,
    AssetError,
    UnsupportedPlatformError,
    NoMatchingAssetError,
    DownloadError,
    TooManyRedirectsError,
    DownloadFailedError,
    DownloadCancelledError,
    FormatterError,
)
from sleekkit.tool.version import (
    SemanticVersion,
    parse_strict,
    parse_version_from_output,
    parse_release_tag,
    compare_versions,
    is_newer,
    format_version_display,
)
from sleekkit.tool.selector import (
    Candidate,
    SelectionReason,
    SelectionResult,
    select_executable,
)
from sleekkit.tool.probe import InstallationProbe
from sleekkit.tool.manager import SleekManager, UpdateCheck, InstallResult
from sleekkit.releases.feed import (
    ReleaseAsset,
    ReleaseInfo,
    ReleaseFeedClient,
    extract_release_notes,
)
from sleekkit.releases.assets import pick_asset
from sleekkit.core.download import Downloader, DownloadProgress

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SleekKitError",
    "ConfigError",
    "InvalidVersionError",
    "ExecutableError",
    "NoExecutableFoundError",
    "InvalidExecutableError",
    "ReleaseFeedError",
    "NoToolReleaseFoundError",
    "AssetError",
    "UnsupportedPlatformError",
    "NoMatchingAssetError",
    "DownloadError",
    "TooManyRedirectsError",
    "DownloadFailedError",
    "DownloadCancelledError",
    "FormatterError",
    "SemanticVersion",
    "parse_strict",
    "parse_version_from_output",
    "parse_release_tag",
    "compare_versions",
    "is_newer",
    "format_version_display",
    "Candidate",
    "SelectionReason",
    "SelectionResult",
    "select_executable",
    "InstallationProbe",
    "SleekManager",
    "UpdateCheck",
    "InstallResult",
    "ReleaseAsset",
    "ReleaseInfo",
    "ReleaseFeedClient",
    "extract_release_notes",
    "pick_asset",
    "Downloader",
    "DownloadProgress",
]
