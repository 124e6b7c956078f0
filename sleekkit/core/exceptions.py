"""
Centralized exception hierarchy for SleekKit.

Parsing and comparison problems are absorbed where a safe default exists
(``is_newer`` returns False, ``probe`` returns None); everything else is
raised using the types below so callers can react per failure class.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SleekKitError(Exception):
    """Base exception for all SleekKit errors."""

    pass


class ConfigError(SleekKitError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Version Exceptions
# ============================================================================


class InvalidVersionError(SleekKitError, ValueError):
    """Version text is not a strict ``major.minor.patch`` string."""

    def __init__(self, version: object):
        self.version = version
        super().__init__(f"Invalid version format: {version!r}")


# ============================================================================
# Executable Exceptions
# ============================================================================


class ExecutableError(SleekKitError):
    """Base exception for executable resolution errors."""

    pass


class NoExecutableFoundError(ExecutableError):
    """Neither the configured nor the downloaded executable is usable."""

    pass


class InvalidExecutableError(ExecutableError):
    """Executable failed the ``--version`` verification probe."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid sleek executable at {path}: {reason}")


# ============================================================================
# Release Feed Exceptions
# ============================================================================


class ReleaseFeedError(SleekKitError):
    """Release feed could not be queried or decoded."""

    pass


class NoToolReleaseFoundError(ReleaseFeedError):
    """Release feed contains no entry tagged as a tool release."""

    pass


# ============================================================================
# Asset Exceptions
# ============================================================================


class AssetError(SleekKitError):
    """Base exception for asset selection errors."""

    pass


class UnsupportedPlatformError(AssetError):
    """Running OS / CPU combination has no published binaries."""

    def __init__(self, system: str, machine: str):
        self.system = system
        self.machine = machine
        super().__init__(f"Unsupported platform: {system}/{machine}")


class NoMatchingAssetError(AssetError):
    """Zero or several release assets match the platform."""

    def __init__(self, platform: str, arch: str, candidates=()):
        self.platform = platform
        self.arch = arch
        self.candidates = list(candidates)
        if self.candidates:
            msg = (
                f"Ambiguous release assets for {platform}-{arch}: "
                f"{', '.join(self.candidates)}"
            )
        else:
            msg = f"No sleek release asset found for {platform}-{arch}"
        super().__init__(msg)


# ============================================================================
# Download Exceptions
# ============================================================================


class DownloadError(SleekKitError):
    """Exception raised when download fails."""

    pass


class TooManyRedirectsError(DownloadError):
    """Redirect chain exceeded the hop limit."""

    def __init__(self, url: str, max_redirects: int):
        self.url = url
        self.max_redirects = max_redirects
        super().__init__(f"Too many redirects (> {max_redirects}) fetching {url}")


class DownloadFailedError(DownloadError):
    """Terminal response was not a success status."""

    def __init__(self, status_code: int, url: str = "", detail: str = ""):
        self.status_code = status_code
        self.url = url
        msg = f"Download failed with status {status_code}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class DownloadCancelledError(DownloadError):
    """Caller cancelled the download or its deadline passed."""

    pass


# ============================================================================
# Formatter Exceptions
# ============================================================================


class FormatterError(SleekKitError):
    """Running the sleek executable failed."""

    pass


class FormatterNotFoundError(FormatterError):
    """The sleek executable could not be started."""

    pass


class FormatterTimeoutError(FormatterError):
    """The sleek process exceeded its time budget."""

    pass
