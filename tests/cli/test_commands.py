"""
Tests for CLI command implementations.
"""

import argparse
import io
from unittest.mock import Mock, patch

import pytest

from sleekkit.cli.commands import check, install, update, which
from sleekkit.cli.commands import format as format_command
from sleekkit.core.exceptions import NoExecutableFoundError
from sleekkit.tool.manager import InstallResult, Resolution, UpdateCheck
from sleekkit.tool.selector import Candidate, SelectionReason, SelectionResult
from sleekkit.tool.version import SemanticVersion


def _args(**kwargs):
    defaults = {
        "config": None,
        "executable": None,
        "quiet": True,
        "verbose": False,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


@pytest.fixture(autouse=True)
def _in_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def _resolution(configured_version=None, downloaded_version=None, selected="configured"):
    configured = Candidate("sleek", configured_version)
    downloaded = Candidate("/home/u/.sleekkit/sleek", downloaded_version)
    path = configured.path if selected == "configured" else downloaded.path
    return Resolution(
        selection=SelectionResult(path, SelectionReason.CONFIGURED_ONLY),
        configured=configured,
        downloaded=downloaded,
    )


@pytest.fixture
def manager(sample_release, storage_dir):
    manager = Mock()
    manager.check_for_updates.return_value = UpdateCheck(
        has_update=True,
        latest=sample_release.version,
        release=sample_release,
        current=SemanticVersion(0, 4, 0),
    )
    manager.install.return_value = InstallResult(
        path=storage_dir / "sleek", version=sample_release.version, tag_name="v0.5.0"
    )
    return manager


class TestWhichCommand:
    """Test which command."""

    def test_prints_selection(self, capsys, manager):
        manager.resolve_executable.return_value = _resolution(SemanticVersion(0, 3, 0))

        with patch("sleekkit.cli.commands.which.create_manager", return_value=manager):
            assert which.run(_args()) == 0

        out = capsys.readouterr().out
        assert "configured: sleek (v0.3.0)" in out
        assert "not available" in out
        assert "[configured-only]" in out

    def test_nothing_found(self, capsys, manager):
        manager.resolve_executable.side_effect = NoExecutableFoundError(
            "No valid sleek executable found"
        )

        with patch("sleekkit.cli.commands.which.create_manager", return_value=manager):
            assert which.run(_args()) == 1

        assert "sleekkit install" in capsys.readouterr().err

    def test_executable_override(self, manager):
        manager.resolve_executable.return_value = _resolution(SemanticVersion(0, 3, 0))

        with patch("sleekkit.cli.commands.which.create_manager", return_value=manager):
            which.run(_args(executable="/opt/sleek"))

        manager.resolve_executable.assert_called_once_with("/opt/sleek")


class TestInstallCommand:
    """Test install command."""

    def test_installs_update(self, capsys, manager):
        with patch("sleekkit.cli.commands.install.create_manager", return_value=manager):
            assert install.run(_args(force=False, timeout=None)) == 0

        kwargs = manager.install.call_args.kwargs
        assert kwargs["release"].tag_name == "v0.5.0"
        assert kwargs["progress_callback"] is None
        assert kwargs["deadline"] is None
        assert "Installed sleek v0.5.0" in capsys.readouterr().out

    def test_up_to_date_skips(self, manager):
        manager.check_for_updates.return_value.has_update = False

        with patch("sleekkit.cli.commands.install.create_manager", return_value=manager):
            assert install.run(_args(force=False, timeout=None)) == 0

        manager.install.assert_not_called()

    def test_force_and_timeout(self, manager):
        manager.check_for_updates.return_value.has_update = False

        with patch("sleekkit.cli.commands.install.create_manager", return_value=manager):
            install.run(_args(force=True, timeout=60.0))

        assert manager.install.call_args.kwargs["deadline"] is not None


class TestUpdateCommand:
    """Test update command."""

    def _run(self, manager, **kwargs):
        options = {"check": False, "if_due": False, "yes": True}
        options.update(kwargs)
        with patch("sleekkit.cli.commands.update.create_manager", return_value=manager):
            return update.run(_args(**options))

    def test_check_only(self, capsys, manager):
        manager.resolve_executable.return_value = _resolution(SemanticVersion(0, 4, 0))

        assert self._run(manager, check=True) == 0

        manager.check_for_updates.assert_called_once_with(SemanticVersion(0, 4, 0))
        manager.install.assert_not_called()
        assert "v0.4.0 → v0.5.0 available" in capsys.readouterr().out

    def test_installs_with_yes(self, manager):
        manager.resolve_executable.return_value = _resolution(
            SemanticVersion(0, 3, 0), SemanticVersion(0, 4, 0), selected="downloaded"
        )

        assert self._run(manager) == 0

        manager.check_for_updates.assert_called_once_with(SemanticVersion(0, 4, 0))
        manager.install.assert_called_once()

    def test_no_executable_checks_anyway(self, manager):
        manager.resolve_executable.side_effect = NoExecutableFoundError("none")

        self._run(manager, check=True)

        manager.check_for_updates.assert_called_once_with(None)

    def test_prompt_declined(self, manager, monkeypatch):
        manager.resolve_executable.return_value = _resolution(SemanticVersion(0, 4, 0))
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert self._run(manager, yes=False) == 0

        manager.install.assert_not_called()

    def test_not_due(self, manager):
        manager.state.is_update_check_due.return_value = False

        assert self._run(manager, if_due=True) == 0

        manager.check_for_updates.assert_not_called()


class TestFormatCommand:
    """Test format command."""

    def test_formats_file_in_place(self, tmp_path):
        sql = tmp_path / "query.sql"
        sql.write_text("select 1", encoding="utf-8")

        with patch(
            "sleekkit.cli.commands.format.resolve_executable_path", return_value="sleek"
        ), patch(
            "sleekkit.cli.commands.format.format_sql", return_value="SELECT\n    1;\n"
        ):
            assert format_command.run(_args(files=[sql])) == 0

        assert sql.read_text(encoding="utf-8") == "SELECT\n    1;\n"

    def test_stdin_to_stdout(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("select 1"))

        with patch(
            "sleekkit.cli.commands.format.resolve_executable_path", return_value="sleek"
        ), patch(
            "sleekkit.cli.commands.format.format_sql", return_value="SELECT 1"
        ) as mock_format:
            assert format_command.run(_args(files=[])) == 0

        assert mock_format.call_args.args[0] == "select 1"
        assert capsys.readouterr().out == "SELECT 1"


class TestCheckCommand:
    """Test check command."""

    def test_unformatted_file(self, tmp_path):
        good = tmp_path / "good.sql"
        bad = tmp_path / "bad.sql"
        good.write_text("SELECT 1", encoding="utf-8")
        bad.write_text("select 1", encoding="utf-8")

        with patch(
            "sleekkit.cli.commands.check.resolve_executable_path", return_value="sleek"
        ), patch(
            "sleekkit.cli.commands.check.check_formatting",
            side_effect=lambda text, executable: text == "SELECT 1",
        ):
            assert check.run(_args(files=[good, bad])) == 1

    def test_stdin_formatted(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("SELECT 1"))

        with patch(
            "sleekkit.cli.commands.check.resolve_executable_path", return_value="sleek"
        ), patch("sleekkit.cli.commands.check.check_formatting", return_value=True):
            assert check.run(_args(files=[])) == 0
