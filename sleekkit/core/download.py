"""
Network download manager for the sleek executable.

This module provides:
- Streaming HTTP/HTTPS downloads via ``requests``
- Manual redirect following with a hop limit
- Progress reporting when the server sends a content length
- Cancellation through a caller-supplied event or deadline
- Atomic activation: bytes go to a temp file that is renamed into place

No retry is performed; every failure is raised once to the caller.
"""

import logging
import tempfile
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple
from urllib.parse import urljoin

import requests

from sleekkit.core.exceptions import (
    DownloadCancelledError,
    DownloadError,
    DownloadFailedError,
    TooManyRedirectsError,
)
from sleekkit.core.filesystem import IS_WINDOWS, make_executable, remove_file

logger = logging.getLogger(__name__)

USER_AGENT = "sleekkit"
MAX_REDIRECTS = 5
CHUNK_SIZE = 8192
REDIRECT_STATUSES = (301, 302, 303, 307, 308)
EXECUTABLE_MODE = 0o755


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: int

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


ProgressCallback = Callable[[DownloadProgress], None]


class Downloader:
    """
    Streams a single URL to a local path.

    Redirects are followed by hand so that each hop gets a fresh partial
    file and the hop count stays bounded. The final destination only ever
    appears through an atomic rename of a fully written file.

    Example:
        >>> downloader = Downloader()
        >>> downloader.download(asset.download_url, Path("~/.sleekkit/sleek"))
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_redirects: int = MAX_REDIRECTS,
        timeout: Optional[float] = None,
        is_windows: bool = IS_WINDOWS,
        user_agent: str = USER_AGENT,
    ):
        """
        Initialize downloader.

        Args:
            session: requests session to use (a new one if None)
            max_redirects: Maximum number of redirect hops to follow
            timeout: Per-request socket timeout in seconds (None: no timeout)
            is_windows: Skip the executable bit when True
            user_agent: User-Agent header sent with every request
        """
        self.session = session or requests.Session()
        self.user_agent = user_agent
        self.max_redirects = max_redirects
        self.timeout = timeout
        self.is_windows = is_windows

    def download(
        self,
        url: str,
        destination: Path,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
        executable: bool = True,
    ) -> Path:
        """
        Download ``url`` to ``destination``.

        Args:
            url: URL to download from
            destination: Final path of the file
            progress_callback: Called with DownloadProgress when size is known
            cancel_event: Download stops once this event is set
            deadline: ``time.monotonic()`` value after which the download stops
            executable: Mark the file executable (POSIX only)

        Returns:
            Path to the downloaded file

        Raises:
            TooManyRedirectsError: If more than ``max_redirects`` hops occur
            DownloadFailedError: On a non-2xx terminal response
            DownloadCancelledError: If cancelled or past the deadline
            DownloadError: On network errors
            OSError: On local I/O errors
        """
        if not url:
            raise ValueError("URL cannot be empty")

        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)

        current_url = url
        redirects = 0

        while True:
            _check_cancelled(cancel_event, deadline)

            temp_fd, temp_path = _open_partial(destination)
            try:
                with open(temp_fd, "wb") as f:
                    next_url = self._attempt(
                        current_url, f, progress_callback, cancel_event, deadline
                    )
            except requests.RequestException as e:
                remove_file(temp_path)
                raise DownloadError(f"Download from {current_url} failed: {e}") from e
            except BaseException:
                remove_file(temp_path)
                raise

            if next_url is None:
                break

            remove_file(temp_path)
            redirects += 1
            if redirects > self.max_redirects:
                raise TooManyRedirectsError(url, self.max_redirects)

            logger.debug(f"Redirect {redirects}: {current_url} -> {next_url}")
            current_url = next_url

        try:
            if executable:
                make_executable(
                    temp_path, is_windows=self.is_windows, mode=EXECUTABLE_MODE
                )
            temp_path.replace(destination)
        except BaseException:
            remove_file(temp_path)
            raise

        logger.info(f"Download complete: {destination}")
        return destination

    def _attempt(
        self,
        url: str,
        file_obj,
        progress_callback: Optional[ProgressCallback],
        cancel_event: Optional[threading.Event],
        deadline: Optional[float],
    ) -> Optional[str]:
        """
        Issue one request.

        Returns:
            The redirect target, or None once the body has been written
        """
        logger.info(f"Downloading from {url}")

        response = self.session.get(
            url,
            stream=True,
            allow_redirects=False,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        with response:
            status = response.status_code

            if status in REDIRECT_STATUSES:
                location = response.headers.get("Location")
                if not location:
                    raise DownloadFailedError(
                        status, url, "redirect without Location header"
                    )
                return urljoin(url, location)

            if not 200 <= status < 300:
                raise DownloadFailedError(status, url)

            _stream_body(response, file_obj, progress_callback, cancel_event, deadline)
            return None


def download_file(
    url: str,
    destination: Path,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs,
) -> Path:
    """
    Download with a default Downloader.

    Example:
        >>> def on_progress(progress):
        ...     print(f"Downloaded {progress.percentage}%")
        >>> download_file(url, Path("sleek"), progress_callback=on_progress)
    """
    return Downloader().download(
        url, destination, progress_callback=progress_callback, **kwargs
    )


def _open_partial(destination: Path) -> Tuple[int, Path]:
    # Same directory as the destination so the final rename stays atomic.
    fd, path = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".part"
    )
    return fd, Path(path)


def _stream_body(
    response: requests.Response,
    file_obj,
    progress_callback: Optional[ProgressCallback],
    cancel_event: Optional[threading.Event],
    deadline: Optional[float],
) -> int:
    total_size = _content_length(response)
    downloaded = 0
    last_percentage = -1

    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        _check_cancelled(cancel_event, deadline)
        if not chunk:
            continue

        file_obj.write(chunk)
        downloaded += len(chunk)

        if progress_callback and total_size > 0:
            percentage = min(100, round(downloaded * 100 / total_size))
            if percentage != last_percentage:
                progress_callback(
                    DownloadProgress(
                        bytes_downloaded=downloaded,
                        total_bytes=total_size,
                        percentage=percentage,
                    )
                )
                last_percentage = percentage

    return downloaded


def _content_length(response: requests.Response) -> int:
    try:
        return int(response.headers.get("content-length") or 0)
    except ValueError:
        return 0


def _check_cancelled(
    cancel_event: Optional[threading.Event], deadline: Optional[float]
) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise DownloadCancelledError("Download cancelled")
    if deadline is not None and time.monotonic() >= deadline:
        raise DownloadCancelledError("Download deadline exceeded")


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> format_progress(DownloadProgress(524288, 1048576, 50))
        '0.5/1.0 MB (50%)'
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024

    if progress.total_bytes > 0:
        return f"{mb_downloaded:.1f}/{mb_total:.1f} MB ({progress.percentage}%)"
    else:
        return f"{mb_downloaded:.1f} MB"
