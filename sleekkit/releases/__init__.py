"""
Release feed access and platform asset selection.
"""

from .feed import ReleaseAsset, ReleaseInfo, ReleaseFeedClient, extract_release_notes
from .assets import pick_asset, pick_asset_for_platform

__all__ = [
    "ReleaseAsset",
    "ReleaseInfo",
    "ReleaseFeedClient",
    "extract_release_notes",
    "pick_asset",
    "pick_asset_for_platform",
]
