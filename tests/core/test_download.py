"""
Unit tests for the download module.
"""

import os
import stat
import threading
import time

import pytest
import requests
import responses

from sleekkit.core.download import (
    DownloadProgress,
    Downloader,
    download_file,
    format_progress,
)
from sleekkit.core.exceptions import (
    DownloadCancelledError,
    DownloadError,
    DownloadFailedError,
    TooManyRedirectsError,
)

ASSET_URL = "https://github.com/nrempel/sleek/releases/download/v0.5.0/sleek-linux-x86_64"
CDN_URL = "https://objects.example.com/sleek-linux-x86_64"


class TestDownloader:
    """Test Downloader class."""

    @responses.activate
    def test_simple_download(self, tmp_path):
        """Test downloading a file without redirects."""
        responses.add(responses.GET, ASSET_URL, body=b"binary", status=200)
        dest = tmp_path / "sleek"

        result = Downloader().download(ASSET_URL, dest)

        assert result == dest
        assert dest.read_bytes() == b"binary"

    @responses.activate
    def test_follows_redirect(self, tmp_path):
        """Test the final file holds the body of the redirect target only."""
        responses.add(
            responses.GET,
            ASSET_URL,
            body=b"redirect page",
            status=302,
            headers={"Location": CDN_URL},
        )
        responses.add(responses.GET, CDN_URL, body=b"real binary", status=200)
        dest = tmp_path / "sleek"

        Downloader().download(ASSET_URL, dest)

        assert dest.read_bytes() == b"real binary"
        assert list(tmp_path.iterdir()) == [dest]
        assert len(responses.calls) == 2

    @responses.activate
    def test_relative_redirect(self, tmp_path):
        """Test relative Location headers resolve against the request URL."""
        responses.add(
            responses.GET,
            ASSET_URL,
            status=301,
            headers={"Location": "/mirror/sleek"},
        )
        responses.add(
            responses.GET, "https://github.com/mirror/sleek", body=b"ok", status=200
        )
        dest = tmp_path / "sleek"

        Downloader().download(ASSET_URL, dest)

        assert dest.read_bytes() == b"ok"

    @responses.activate
    def test_redirect_limit_allows_five_hops(self, tmp_path):
        """Test exactly five redirects still succeed."""
        for i in range(5):
            responses.add(
                responses.GET,
                f"https://example.com/hop{i}",
                status=302,
                headers={"Location": f"https://example.com/hop{i + 1}"},
            )
        responses.add(responses.GET, "https://example.com/hop5", body=b"ok")
        dest = tmp_path / "sleek"

        Downloader().download("https://example.com/hop0", dest)

        assert dest.read_bytes() == b"ok"

    @responses.activate
    def test_too_many_redirects(self, tmp_path):
        """Test the sixth redirect fails without leaving files behind."""
        for i in range(6):
            responses.add(
                responses.GET,
                f"https://example.com/hop{i}",
                status=307,
                headers={"Location": f"https://example.com/hop{i + 1}"},
            )
        dest = tmp_path / "sleek"

        with pytest.raises(TooManyRedirectsError) as exc_info:
            Downloader().download("https://example.com/hop0", dest)

        assert exc_info.value.max_redirects == 5
        assert list(tmp_path.iterdir()) == []

    @responses.activate
    def test_redirect_without_location(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, status=302)

        with pytest.raises(DownloadFailedError, match="Location"):
            Downloader().download(ASSET_URL, tmp_path / "sleek")

    @responses.activate
    def test_http_error_leaves_no_file(self, tmp_path):
        """Test a terminal non-2xx status fails and cleans up."""
        responses.add(responses.GET, ASSET_URL, body=b"Not Found", status=404)
        dest = tmp_path / "sleek"

        with pytest.raises(DownloadFailedError) as exc_info:
            Downloader().download(ASSET_URL, dest)

        assert exc_info.value.status_code == 404
        assert "status 404" in str(exc_info.value)
        assert list(tmp_path.iterdir()) == []

    @responses.activate
    def test_http_error_keeps_previous_binary(self, tmp_path):
        """Test a failed download does not touch an existing destination."""
        responses.add(responses.GET, ASSET_URL, status=500)
        dest = tmp_path / "sleek"
        dest.write_bytes(b"old binary")

        with pytest.raises(DownloadFailedError):
            Downloader().download(ASSET_URL, dest)

        assert dest.read_bytes() == b"old binary"

    @responses.activate
    def test_replaces_existing_file(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, body=b"new binary")
        dest = tmp_path / "sleek"
        dest.write_bytes(b"old binary")

        Downloader().download(ASSET_URL, dest)

        assert dest.read_bytes() == b"new binary"

    @responses.activate
    def test_network_error(self, tmp_path):
        """Test connection errors become DownloadError."""
        responses.add(
            responses.GET,
            ASSET_URL,
            body=requests.ConnectionError("Connection refused"),
        )

        with pytest.raises(DownloadError, match="Connection refused"):
            Downloader().download(ASSET_URL, tmp_path / "sleek")

        assert list(tmp_path.iterdir()) == []

    @responses.activate
    def test_progress_callback(self, tmp_path):
        """Test progress is reported when the size is known."""
        content = b"x" * 20000
        responses.add(
            responses.GET,
            ASSET_URL,
            body=content,
            headers={"Content-Length": str(len(content))},
        )
        reports = []

        Downloader().download(ASSET_URL, tmp_path / "sleek", progress_callback=reports.append)

        assert reports
        assert reports[-1].percentage == 100
        assert reports[-1].bytes_downloaded == len(content)
        percentages = [r.percentage for r in reports]
        assert percentages == sorted(set(percentages))

    @responses.activate
    def test_no_progress_without_length(self, tmp_path):
        """Test progress is silent when the size is unknown."""
        responses.add(responses.GET, ASSET_URL, body=b"data")
        reports = []

        Downloader().download(ASSET_URL, tmp_path / "sleek", progress_callback=reports.append)

        assert reports == []

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    @responses.activate
    def test_executable_bit(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, body=b"binary")
        dest = tmp_path / "sleek"

        Downloader().download(ASSET_URL, dest)

        assert stat.S_IMODE(dest.stat().st_mode) == 0o755

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    @responses.activate
    def test_windows_skips_executable_bit(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, body=b"binary")
        dest = tmp_path / "sleek.exe"

        Downloader(is_windows=True).download(ASSET_URL, dest)

        assert not dest.stat().st_mode & stat.S_IXUSR

    def test_cancel_before_start(self, tmp_path):
        """Test a set event stops the download before any request."""
        event = threading.Event()
        event.set()

        with pytest.raises(DownloadCancelledError, match="cancelled"):
            Downloader().download(ASSET_URL, tmp_path / "sleek", cancel_event=event)

        assert list(tmp_path.iterdir()) == []

    def test_deadline_passed(self, tmp_path):
        with pytest.raises(DownloadCancelledError, match="deadline"):
            Downloader().download(
                ASSET_URL, tmp_path / "sleek", deadline=time.monotonic() - 1
            )

    @responses.activate
    def test_cancel_during_stream(self, tmp_path):
        """Test cancelling mid-body removes the partial file."""
        event = threading.Event()
        responses.add(
            responses.GET,
            ASSET_URL,
            body=b"x" * 50000,
            headers={"Content-Length": "50000"},
        )

        def cancel_on_progress(progress):
            event.set()

        with pytest.raises(DownloadCancelledError):
            Downloader().download(
                ASSET_URL,
                tmp_path / "sleek",
                progress_callback=cancel_on_progress,
                cancel_event=event,
            )

        assert list(tmp_path.iterdir()) == []

    def test_empty_url(self, tmp_path):
        with pytest.raises(ValueError, match="URL cannot be empty"):
            Downloader().download("", tmp_path / "sleek")

    @responses.activate
    def test_creates_parent_directory(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, body=b"binary")
        dest = tmp_path / "nested" / "dir" / "sleek"

        Downloader().download(ASSET_URL, dest)

        assert dest.exists()

    @responses.activate
    def test_user_agent(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, body=b"binary")

        Downloader().download(ASSET_URL, tmp_path / "sleek")

        assert responses.calls[0].request.headers["User-Agent"] == "sleekkit"

    @responses.activate
    def test_injected_session_headers_untouched(self, tmp_path):
        """Test the User-Agent is sent per request, not stored on the session."""
        responses.add(responses.GET, ASSET_URL, body=b"binary")
        session = requests.Session()
        session.headers["User-Agent"] = "editor-plugin/1.0"

        Downloader(session=session).download(ASSET_URL, tmp_path / "sleek")

        assert session.headers["User-Agent"] == "editor-plugin/1.0"
        assert responses.calls[0].request.headers["User-Agent"] == "sleekkit"

    @responses.activate
    def test_download_file_helper(self, tmp_path):
        responses.add(responses.GET, ASSET_URL, body=b"binary")

        result = download_file(ASSET_URL, tmp_path / "sleek", executable=False)

        assert result.read_bytes() == b"binary"


class TestFormatProgress:
    """Test format_progress function."""

    def test_with_total(self):
        progress = DownloadProgress(524288, 1048576, 50)

        assert format_progress(progress) == "0.5/1.0 MB (50%)"
        assert str(progress) == "0.5/1.0 MB (50%)"

    def test_without_total(self):
        assert format_progress(DownloadProgress(1048576, 0, 0)) == "1.0 MB"
