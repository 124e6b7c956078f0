"""
Installation probe for sleek executables.

Runs ``<path> --version`` with a short timeout to learn whether a file is a
genuine sleek binary and which version it reports. Probing only executes
the binary; it never modifies it.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from sleekkit.core.exceptions import InvalidExecutableError
from sleekkit.tool.version import TOOL_NAME, SemanticVersion, parse_version_from_output

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 5


class InstallationProbe:
    """
    Verify executables and read their versions.

    Example:
        >>> probe = InstallationProbe()
        >>> probe.probe("sleek")
        SemanticVersion(major=0, minor=5, patch=0)
    """

    def __init__(self, timeout: float = PROBE_TIMEOUT, token: str = TOOL_NAME):
        """
        Initialize probe.

        Args:
            timeout: Seconds to wait for ``--version`` to finish
            token: Text the version output must contain
        """
        self.timeout = timeout
        self.token = token

    def version_output(self, path: Union[str, Path]) -> str:
        """
        Run ``--version`` and return its output.

        Raises:
            InvalidExecutableError: If the process cannot run, times out,
                exits non-zero or does not identify itself as sleek
        """
        cmd: List[str] = [str(path), "--version"]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise InvalidExecutableError(
                str(path), f"--version timed out after {self.timeout} seconds"
            )
        except OSError as e:
            raise InvalidExecutableError(str(path), f"failed to run: {e}") from e

        if result.returncode != 0:
            raise InvalidExecutableError(
                str(path), f"--version exited with code {result.returncode}"
            )

        output = result.stdout.strip()
        if self.token.lower() not in output.lower():
            raise InvalidExecutableError(
                str(path), f"output does not mention {self.token!r}: {output[:100]!r}"
            )

        return output

    def verify(self, path: Union[str, Path]) -> None:
        """
        Verify that ``path`` is a working sleek executable.

        Raises:
            InvalidExecutableError: If verification fails
        """
        self.version_output(path)

    def probe_verified(self, path: Union[str, Path]) -> Optional[SemanticVersion]:
        """
        Verify ``path`` and return its version.

        Returns:
            Parsed version, or None if the banner carries no version

        Raises:
            InvalidExecutableError: If verification fails
        """
        version = parse_version_from_output(self.version_output(path))
        logger.debug(f"Probed {path}: {version}")
        return version

    def probe(self, path: Union[str, Path]) -> Optional[SemanticVersion]:
        """
        Get the version reported by ``path``.

        Returns:
            Parsed version, or None on any failure
        """
        try:
            return self.probe_verified(path)
        except InvalidExecutableError as e:
            logger.debug(f"Probe failed: {e}")
            return None
