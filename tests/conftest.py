"""Shared pytest fixtures for structured-components tests.

Component fixtures are written to a temporary project whose source root is
importable as the ``app`` package.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from structured_components.config import GroupConfig, Settings
from tests.helpers import APP_PACKAGE, VALID_COMPONENT, purge_app_modules, write_module


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of tests."""
    for name in (
        "STRUCTURED_COMPONENTS_CONFIG",
        "STRUCTURED_COMPONENTS_CACHE",
        "STRUCTURED_COMPONENTS_ENV",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Project Fixtures
# =============================================================================


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Create a temporary project with an importable ``app`` source root."""
    root = tmp_path / "project"
    (root / APP_PACKAGE).mkdir(parents=True)

    purge_app_modules()
    monkeypatch.syspath_prepend(str(root))
    yield root
    purge_app_modules()


@pytest.fixture
def app_dir(project: Path) -> Path:
    return project / APP_PACKAGE


@pytest.fixture
def write_component(app_dir: Path):
    """Factory writing a valid component module."""

    def _write(relative: str) -> Path:
        return write_module(app_dir, relative, VALID_COMPONENT)

    return _write


@pytest.fixture
def make_settings(app_dir: Path, tmp_path: Path):
    """Factory building Settings rooted at the temporary app directory."""

    def _make(groups: dict[str, dict] | None = None, **overrides) -> Settings:
        values = {
            "components_directory": str(app_dir),
            "app_path": str(app_dir),
            "namespace": APP_PACKAGE,
            "cache_enabled": True,
            "cache_path": str(tmp_path / "cache.db"),
            "environment": "testing",
            "groups": {
                key: GroupConfig(key=key, **group) for key, group in (groups or {}).items()
            },
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def pages_settings(make_settings) -> Settings:
    """The "pages" group: location Components, suffix components."""
    return make_settings({"pages": {"location": "Components", "suffix": "components"}})


@pytest.fixture
def config_file(app_dir: Path, tmp_path: Path) -> Path:
    """structured-components.yaml with a "pages" and a "widgets" group."""
    path = tmp_path / "structured-components.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "components-directory": str(app_dir),
                "app-path": str(app_dir),
                "namespace": APP_PACKAGE,
                "cache_enabled": True,
                "cache_path": str(tmp_path / "cache.db"),
                "environment": "testing",
                "groups": {
                    "pages": {
                        "location": "Components",
                        "suffix": "components",
                        "description": "Page components",
                    },
                    "widgets": {"location": "Widgets"},
                },
            },
            sort_keys=False,
        )
    )
    return path
