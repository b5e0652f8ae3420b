"""Tests for the click command-line interface."""

import pytest
from click.testing import CliRunner

from checklist import __version__
from checklist.cli import main
from checklist.config import CHECKLIST_FILE_ENV


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, checklist_path):
    """Run the CLI against the test checklist file."""
    def _invoke(*args):
        return runner.invoke(main, ["--file", str(checklist_path), *args])
    return _invoke


class TestCommands:
    """Commands through the CLI."""

    def test_add_then_list(self, invoke, checklist_path):
        """add is silent and list prints the table."""
        result = invoke("add", "gym", "2999-01-01", "3")
        assert result.exit_code == 0, result.output
        assert result.output == ""
        assert checklist_path.read_text(encoding="utf-8") == "gym,2999-01-01,3\n"

        result = invoke("list")
        assert result.exit_code == 0, result.output
        lines = [line.rstrip() for line in result.output.splitlines()]
        assert lines == [
            "task due until  interval",
            "-" * 24,
            "gym  2999-01-01 3",
        ]

    def test_list_empty(self, invoke):
        """An empty checklist lists just the header and rule."""
        result = invoke("list")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["task due until interval", "-" * 23]

    def test_list_ignores_extra_arguments(self, invoke):
        """Arguments after list are accepted and ignored."""
        result = invoke("list", "extra", "-x")
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["task due until interval", "-" * 23]

    def test_check_one_off(self, invoke, checklist_path):
        """Checking a one-off task removes it from the file."""
        checklist_path.write_text("taxes,2024-04-15,0", encoding="utf-8")
        result = invoke("check", "taxes")
        assert result.exit_code == 0, result.output
        assert checklist_path.read_text(encoding="utf-8") == ""

    def test_remove(self, invoke, checklist_path):
        """remove drops the named task."""
        checklist_path.write_text("taxes,2024-04-15,0\ngym,2024-01-01,3", encoding="utf-8")
        result = invoke("remove", "taxes")
        assert result.exit_code == 0, result.output
        assert checklist_path.read_text(encoding="utf-8") == "gym,2024-01-01,3"

    def test_uncheck(self, invoke):
        """uncheck succeeds silently."""
        result = invoke("uncheck", "gym")
        assert result.exit_code == 0
        assert result.output == ""


class TestDashNames:
    """Task names that look like options."""

    def test_add_dash_name(self, invoke, checklist_path):
        """A name such as -5k is taken as the task name."""
        result = invoke("add", "-5k", "2024-01-01")
        assert result.exit_code == 0, result.output
        assert checklist_path.read_text(encoding="utf-8") == "-5k,2024-01-01,0\n"

    @pytest.mark.parametrize("command", ["check", "remove", "uncheck"])
    def test_name_commands_accept_dash_name(self, invoke, checklist_path, command):
        """Commands taking a name accept one starting with a dash."""
        checklist_path.write_text("-5k,2024-01-01,0\n", encoding="utf-8")
        result = invoke(command, "-5k")
        assert result.exit_code == 0, result.output

    def test_double_dash_passes_option_names(self, invoke, checklist_path):
        """After --, even --help is a task name."""
        result = invoke("add", "--", "--help", "2024-01-01")
        assert result.exit_code == 0, result.output
        assert checklist_path.read_text(encoding="utf-8") == "--help,2024-01-01,0\n"

        result = invoke("remove", "--", "--help")
        assert result.exit_code == 0, result.output
        assert checklist_path.read_text(encoding="utf-8") == ""


class TestErrors:
    """Failures are reported with a non-zero exit status."""

    def test_duplicate(self, invoke):
        """Adding the same name twice fails."""
        invoke("add", "gym", "2024-01-01")
        result = invoke("add", "gym", "2024-01-01")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_missing_arguments(self, invoke):
        """Too few arguments are reported."""
        result = invoke("add", "gym")
        assert result.exit_code == 1
        assert "not enough parameters" in result.output

    def test_task_not_found(self, invoke):
        """Unknown names are reported with the name."""
        result = invoke("check", "gym")
        assert result.exit_code == 1
        assert 'cannot find task named "gym"' in result.output

    def test_malformed_file(self, invoke, checklist_path):
        """A corrupt file is reported with its line number."""
        checklist_path.write_text("gym,2024-01-01", encoding="utf-8")
        result = invoke("list")
        assert result.exit_code == 1
        assert "line 1" in result.output

    def test_undecodable_file(self, invoke, checklist_path):
        """A file that is not UTF-8 gives an error message, not a traceback."""
        checklist_path.write_bytes(b"gym,2024-01-01,3\n\xff\xfe,2024-01-01,0\n")
        result = invoke("list")
        assert result.exit_code == 1
        assert "could not read checklist file" in result.output
        assert "Traceback" not in result.output

    def test_unknown_command(self, invoke):
        """Unknown commands are reported as invalid."""
        result = invoke("delete", "gym")
        assert result.exit_code == 1
        assert "invalid command" in result.output

    def test_no_command(self, runner):
        """Running without a command is a usage error."""
        result = runner.invoke(main, [])
        assert result.exit_code != 0
        assert "no command given" in result.output


class TestPathResolution:
    """Where the checklist file comes from."""

    def test_env_variable(self, runner, tmp_path, monkeypatch):
        """CHECKLIST_FILE names the file and missing parents are created."""
        path = tmp_path / "from-env" / "list.txt"
        monkeypatch.setenv(CHECKLIST_FILE_ENV, str(path))
        result = runner.invoke(main, ["add", "gym", "2024-01-01"])
        assert result.exit_code == 0, result.output
        assert path.read_text(encoding="utf-8") == "gym,2024-01-01,0\n"

    def test_file_option_beats_env(self, runner, tmp_path, monkeypatch):
        """--file wins over CHECKLIST_FILE."""
        env_path = tmp_path / "env.txt"
        option_path = tmp_path / "option.txt"
        monkeypatch.setenv(CHECKLIST_FILE_ENV, str(env_path))
        result = runner.invoke(main, ["--file", str(option_path), "add", "gym", "2024-01-01"])
        assert result.exit_code == 0, result.output
        assert option_path.exists()
        assert not env_path.exists()

    def test_config_file(self, runner, tmp_path):
        """checklist_file from --config is used."""
        target = tmp_path / "configured.txt"
        config_path = tmp_path / "config.yaml"
        config_path.write_text(f"checklist_file: {target}\n", encoding="utf-8")
        result = runner.invoke(main, ["--config", str(config_path), "list"])
        assert result.exit_code == 0, result.output
        assert target.exists()

    def test_default_location_created(self, runner, tmp_path):
        """Without other settings the file lives in the data directory."""
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "appdata" / "checklist").exists()


def test_version(runner):
    """--version prints the package version."""
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
