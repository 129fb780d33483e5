"""
Tests for the command-line entry point (upstream_pins/cli.py).
"""

from unittest.mock import patch

import pytest

from upstream_pins import cli
from upstream_pins import config as config_module
from upstream_pins.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, build_parser, main
from upstream_pins.errors import FetchError, UsageError


SOURCES = """\
sources:
  foo:
    url: https://foo.example/releases
    regexp: 'foo-(\\d+\\.\\d+\\.\\d+)\\.tar'
"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Project directory with settings, registry, pin file and changelog."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("UPSTREAM_PINS_CONFIG", raising=False)
    monkeypatch.delenv("UPSTREAM_PINS_DEBUG", raising=False)
    monkeypatch.setattr(config_module, "CONFIG_LOCATIONS", [".upstream-pins.yml"])
    (tmp_path / "sources.yml").write_text(SOURCES)
    (tmp_path / ".upstream-pins.yml").write_text("sources: sources.yml\nidentity: octocat\n")
    (tmp_path / "Makefile").write_text("FOO_VER := 1.0.0\n")
    (tmp_path / "CHANGELOG.md").write_text("# Changelog\n\n## v1.0.0\n")
    return tmp_path


def fake_get(url):
    return "foo-1.0.0.tar foo-1.1.0.tar"


class TestParser:
    """Tests for argument parsing."""

    def test_no_flags(self):
        """Test default is report-only."""
        assert build_parser().parse_args([]).update is False

    def test_update_flag(self):
        """Test --update enables update mode."""
        assert build_parser().parse_args(["--update"]).update is True

    def test_unknown_argument(self):
        """Test unsupported arguments raise UsageError."""
        with pytest.raises(UsageError, match="unrecognized arguments"):
            build_parser().parse_args(["--force"])


class TestMain:
    """Tests for main()."""

    def test_usage_error_exit_code(self, workdir, capsys):
        """Test usage errors exit 2 before any work."""
        with patch.object(cli, "run") as mock_run:
            assert main(["extra"]) == EXIT_USAGE
            mock_run.assert_not_called()
        assert "error" in capsys.readouterr().err

    def test_report_only(self, workdir, capsys):
        """Test changed items are printed and files left alone."""
        with patch.object(cli, "run", side_effect=_run_with_fetch):
            assert main([]) == EXIT_OK

        assert capsys.readouterr().out == "foo 1.1.0 (current: 1.0.0)\n"
        assert (workdir / "Makefile").read_text() == "FOO_VER := 1.0.0\n"

    def test_update(self, workdir, capsys):
        """Test --update rewrites the pin file and changelog."""
        with patch.object(cli, "run", side_effect=_run_with_fetch):
            assert main(["--update"]) == EXIT_OK

        assert (workdir / "Makefile").read_text() == "FOO_VER := 1.1.0\n"
        assert "* foo 1.1.0 [@octocat](https://github.com/octocat)\n\n## v1.0.0" in (
            workdir / "CHANGELOG.md"
        ).read_text()

    def test_failure_exit_code(self, workdir, capsys):
        """Test run errors are logged to stderr with a non-zero exit."""
        def failing(*args, **kwargs):
            kwargs["fetch"] = _raise_fetch_error
            return cli_run(*args, **kwargs)

        with patch.object(cli, "run", side_effect=failing):
            assert main([]) == EXIT_FAILURE

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "connection reset" in captured.err

    def test_bad_settings_exit_code(self, workdir, capsys):
        """Test an ill-typed setting fails cleanly instead of crashing."""
        (workdir / ".upstream-pins.yml").write_text("pin_file: 2024\n")
        assert main([]) == EXIT_FAILURE
        assert "pin_file" in capsys.readouterr().err

    def test_missing_pin_file(self, workdir, capsys):
        """Test a missing pin file is reported as a failure."""
        (workdir / "Makefile").unlink()
        assert main([]) == EXIT_FAILURE
        assert "Makefile" in capsys.readouterr().err


cli_run = cli.run


def _raise_fetch_error(url):
    raise FetchError(f"Failed to fetch {url}: connection reset")


def _run_with_fetch(*args, **kwargs):
    kwargs["fetch"] = fake_get
    return cli_run(*args, **kwargs)


class TestEntryPoints:
    """Tests for the module entry points."""

    def test_python_dash_m_uses_cli_main(self):
        """Test ``python -m upstream_pins`` dispatches to cli.main."""
        import upstream_pins.__main__ as module_main
        assert module_main.main is main

    def test_cli_module_has_no_script_guard(self):
        """Test cli.py is import-only; entry points live elsewhere."""
        import inspect
        assert '__name__ == "__main__"' not in inspect.getsource(cli)
