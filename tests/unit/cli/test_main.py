"""Unit tests for the CLI application wiring."""

from structured_components_cli import __version__


class TestApp:
    def test_version(self, invoke):
        result = invoke("--version")

        assert result.exit_code == 0
        assert f"structured-components version {__version__}" in result.output

    def test_commands_registered(self, invoke):
        result = invoke("--help")

        assert result.exit_code == 0
        for command in ("init", "make", "clear-cache"):
            assert command in result.output

    def test_verbose_flag_accepted(self, invoke, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = invoke("--verbose", "init")

        assert result.exit_code == 0, result.output
