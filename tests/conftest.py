"""
Pytest configuration and shared fixtures for SleekKit tests.
"""

import subprocess
from pathlib import Path

import pytest

from sleekkit.core.platform import PlatformInfo
from sleekkit.releases.feed import ReleaseAsset, ReleaseInfo
from sleekkit.tool.version import SemanticVersion


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Private storage directory for a test."""
    path = tmp_path / "storage"
    path.mkdir()
    return path


@pytest.fixture
def linux_x64() -> PlatformInfo:
    return PlatformInfo("linux", "x86_64")


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    monkeypatch.delenv("SLEEKKIT_HOME", raising=False)

    return fake_home


@pytest.fixture
def completed():
    """Factory for subprocess.CompletedProcess results."""

    def _make(stdout: str = "", returncode: int = 0, stderr: str = ""):
        return subprocess.CompletedProcess(
            args=[], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _make


@pytest.fixture
def sample_release() -> ReleaseInfo:
    """Tool release with one asset per supported platform."""
    names = [
        "sleek-linux-x86_64",
        "sleek-linux-aarch64",
        "sleek-macos-x86_64",
        "sleek-macos-aarch64",
        "sleek-windows-x86_64.exe",
    ]
    return ReleaseInfo(
        version=SemanticVersion(0, 5, 0),
        tag_name="v0.5.0",
        notes_summary="Bug fixes",
        assets=[
            ReleaseAsset(name, f"https://example.com/download/{name}")
            for name in names
        ],
    )


def release_entry(tag_name: str, body: str = "", asset_names=()) -> dict:
    """One entry of the GitHub releases API payload."""
    return {
        "tag_name": tag_name,
        "body": body,
        "assets": [
            {
                "name": name,
                "browser_download_url": f"https://example.com/{tag_name}/{name}",
            }
            for name in asset_names
        ],
    }


@pytest.fixture
def make_release_entry():
    return release_entry
