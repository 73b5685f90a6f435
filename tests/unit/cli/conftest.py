"""Fixtures for CLI command tests."""

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from structured_components.cache import SQLiteCacheStore
from structured_components.registry import ComponentRegistry
from structured_components.provider import boot
from structured_components_cli.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a CliRunner for invoking commands in-process."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner: CliRunner):
    """Invoke the structured-components app with arguments and stdin."""

    def _invoke(*args: str, input: str | None = None):
        return cli_runner.invoke(app, list(args), input=input)

    return _invoke


@pytest.fixture
def cache_store(tmp_path: Path) -> SQLiteCacheStore:
    """The store the config_file fixture points at."""
    return SQLiteCacheStore(tmp_path / "cache.db")


@pytest.fixture
def warm_cache(config_file: Path, app_dir: Path, write_component) -> Path:
    """Boot once so the discovery cache holds both groups (widgets empty)."""
    write_component("Components/UserProfile.py")
    write_component("Components/Counter.py")
    (app_dir / "Widgets").mkdir()
    boot(registry=ComponentRegistry(), config_path=str(config_file))
    return config_file


@pytest.fixture
def groupless_config(app_dir: Path, tmp_path: Path) -> Path:
    path = tmp_path / "groupless.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "components-directory": str(app_dir),
                "cache_path": str(tmp_path / "cache.db"),
                "environment": "testing",
            }
        )
    )
    return path
