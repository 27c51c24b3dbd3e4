"""End-to-end tests for the fizzy-md entry point."""

import io
import sys
from pathlib import Path

import pytest

from fizzy_md import __version__
from fizzy_md.cli.app import main
from fizzy_md.cli.exit_codes import ExitCode

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake delegates are POSIX scripts")


class TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def interactive_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", TtyStream())


@pytest.fixture
def temp_dir(tmp_path, monkeypatch):
    path = tmp_path / "fizzy-md-tmp"
    path.mkdir()
    monkeypatch.setenv("FIZZY_MD_TEMP_DIR", str(path))
    return path


class TestVersion:
    """Test the version query."""

    @pytest.mark.parametrize("flag", ["--version", "-v"])
    def test_version(self, flag, capsys):
        assert main([flag]) == ExitCode.SUCCESS
        assert capsys.readouterr().out == f"fizzy-md version {__version__}\n"

    def test_version_not_sole_argument_is_forwarded(self, fake_fizzy, interactive_stdin):
        assert main(["card", "--version"]) == 0
        assert fake_fizzy() == ["card", "--version"]


class TestStdinPipe:
    """Test direct conversion of piped stdin."""

    def test_converts_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO("**a**"))

        assert main([]) == ExitCode.SUCCESS
        assert capsys.readouterr().out == "<p><strong>a</strong></p>"

    def test_does_not_start_delegate(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("PATH", str(tmp_path))
        monkeypatch.setattr(sys, "stdin", io.StringIO("## Hi"))

        assert main([]) == ExitCode.SUCCESS
        assert capsys.readouterr().out == "<h2>Hi</h2>"

    def test_interactive_stdin_falls_through_to_delegate(self, fake_fizzy, interactive_stdin):
        assert main([]) == 0
        assert fake_fizzy() == []

    def test_arguments_disable_pipe_mode(self, fake_fizzy, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("ignored"))
        assert main(["board", "list"]) == 0
        assert fake_fizzy() == ["board", "list"]


class TestNormal:
    """Test rewriting and delegation."""

    def test_description_rewritten(self, fake_fizzy, interactive_stdin):
        assert main(["create", "--title", "X", "--description", "## Hi"]) == 0
        assert fake_fizzy() == ["create", "--title", "X", "--description", "<h2>Hi</h2>"]

    def test_delegate_exit_code_propagated(self, fake_fizzy, interactive_stdin, monkeypatch, capsys):
        monkeypatch.setenv("FAKE_FIZZY_EXIT", "7")

        assert main(["card", "show", "1"]) == 7
        assert capsys.readouterr().err == ""

    def test_body_file_staged_and_removed(self, fake_fizzy, interactive_stdin, tmp_path, temp_dir):
        source = tmp_path / "comment.md"
        source.write_text("- one\n- two", encoding="utf-8")

        assert main(["comment", "create", "--body_file", str(source)]) == 0

        forwarded = fake_fizzy()
        assert forwarded[:3] == ["comment", "create", "--body_file"]
        assert Path(forwarded[3]).parent == temp_dir
        assert list(temp_dir.iterdir()) == []

    def test_keep_temp_files(self, fake_fizzy, interactive_stdin, tmp_path, temp_dir, monkeypatch):
        monkeypatch.setenv("FIZZY_MD_KEEP_TEMP_FILES", "1")
        source = tmp_path / "card.html"
        source.write_text("<p>ready</p>", encoding="utf-8")

        assert main(["card", "create", "--description_file", str(source)]) == 0

        staged = Path(fake_fizzy()[3])
        assert staged.read_text(encoding="utf-8") == "<p>ready</p>"

    def test_custom_delegate_name(self, fake_fizzy, interactive_stdin, tmp_path, monkeypatch, make_executable):
        bin_dir = tmp_path / "bin"
        make_executable(bin_dir / "fizzy-dev", "exit 5")
        monkeypatch.setenv("FIZZY_MD_DELEGATE", "fizzy-dev")

        assert main(["card", "list"]) == 5


class TestFailures:
    """Test fizzy-md's own failures."""

    def test_missing_flag_value(self, fake_fizzy, interactive_stdin, capsys):
        assert main(["card", "create", "--description"]) == ExitCode.USAGE_ERROR

        err = capsys.readouterr().err
        assert "fizzy-md error: flag --description requires a value" in err

    def test_missing_file(self, fake_fizzy, interactive_stdin, tmp_path, temp_dir, capsys):
        missing = tmp_path / "nope.md"

        assert main(["card", "create", "--description_file", str(missing)]) == ExitCode.READ_ERROR

        err = capsys.readouterr().err
        assert f"fizzy-md error: failed to read file {missing}" in err
        assert "flag: --description_file" in err
        assert list(temp_dir.iterdir()) == []

    def test_delegate_not_found(self, interactive_stdin, tmp_path, temp_dir, monkeypatch, capsys):
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))
        source = tmp_path / "notes.md"
        source.write_text("# Notes", encoding="utf-8")

        exit_code = main(["card", "create", "--body_file", str(source)])

        assert exit_code == ExitCode.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "fizzy-md error: fizzy command not found in PATH" in err
        assert "Please install fizzy-cli: https://github.com/robzolkos/fizzy-cli" in err
        assert list(temp_dir.iterdir()) == []

    def test_delegate_not_executable(self, interactive_stdin, tmp_path, monkeypatch, capsys):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        (bin_dir / "fizzy").write_text("#!/bin/sh\nexit 0\n")
        monkeypatch.setattr("fizzy_md.cli.app.find_delegate", lambda name: str(bin_dir / name))

        exit_code = main(["card", "list"])

        assert exit_code == ExitCode.UNEXPECTED_ERROR
        assert "fizzy-md error: failed to run" in capsys.readouterr().err

    def test_invalid_configuration(self, monkeypatch, capsys):
        monkeypatch.setenv("FIZZY_MD_LOG_LEVEL", "chatty")

        assert main(["card", "list"]) == ExitCode.CONFIG_ERROR
        assert "Invalid configuration" in capsys.readouterr().err

    @pytest.mark.parametrize("body", ["temp_dir: 5\n", "log_file: [a]\n"])
    def test_config_file_with_non_string_path(self, body, tmp_path, monkeypatch, capsys):
        config = tmp_path / "fizzy-md.yaml"
        config.write_text(body, encoding="utf-8")
        monkeypatch.setenv("FIZZY_MD_CONFIG", str(config))

        assert main(["card", "list"]) == ExitCode.CONFIG_ERROR
        assert "expected a path string" in capsys.readouterr().err

    def test_invalid_configuration_does_not_block_version(self, monkeypatch, capsys):
        monkeypatch.setenv("FIZZY_MD_LOG_LEVEL", "chatty")

        assert main(["--version"]) == ExitCode.SUCCESS
