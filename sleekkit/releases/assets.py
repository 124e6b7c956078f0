"""
Pick the release asset for the running platform.

Asset names carry the OS token (``windows``, ``macos``, ``linux``) and the
architecture token (``x86_64``, ``aarch64``), e.g. ``sleek-linux-x86_64``.
Checksum and signature sidecars are never candidates.
"""

import logging
from typing import List, Optional

from sleekkit.core.exceptions import NoMatchingAssetError
from sleekkit.core.platform import PlatformInfo, detect_platform
from sleekkit.releases.feed import ReleaseAsset, ReleaseInfo

logger = logging.getLogger(__name__)

SIDECAR_SUFFIXES = (".sha256", ".sha512", ".md5", ".sig", ".asc", ".txt")


def _is_sidecar(name: str) -> bool:
    return name.lower().endswith(SIDECAR_SUFFIXES)


def matching_assets(release: ReleaseInfo, platform: str, arch: str) -> List[ReleaseAsset]:
    """Assets whose name contains both tokens (case-insensitive)."""
    platform = platform.lower()
    arch = arch.lower()
    return [
        asset
        for asset in release.assets
        if platform in asset.name.lower()
        and arch in asset.name.lower()
        and not _is_sidecar(asset.name)
    ]


def pick_asset(release: ReleaseInfo, platform: str, arch: str) -> ReleaseAsset:
    """
    Select the single asset for ``platform``/``arch``.

    Raises:
        NoMatchingAssetError: If no asset or more than one asset matches
    """
    matches = matching_assets(release, platform, arch)

    if len(matches) != 1:
        raise NoMatchingAssetError(platform, arch, [a.name for a in matches])

    logger.debug(f"Selected asset {matches[0].name} for {platform}-{arch}")
    return matches[0]


def pick_asset_for_platform(
    release: ReleaseInfo, platform_info: Optional[PlatformInfo] = None
) -> ReleaseAsset:
    """
    Select the asset for a PlatformInfo (the running one if None).

    Raises:
        UnsupportedPlatformError: If the running platform is unsupported
        NoMatchingAssetError: If the release has no unique match
    """
    if platform_info is None:
        platform_info = detect_platform()
    return pick_asset(release, platform_info.os, platform_info.arch)
