"""Unit tests for configuration loading and validation.

Tests YAML parsing, environment overrides, validation and defaults.
"""

from pathlib import Path

import pytest
import yaml

from structured_components.config import (
    DEFAULT_CACHE_TTL,
    DEFAULT_CONFIG,
    Settings,
    generate_config,
    load_config,
    load_settings,
    validate_config,
    write_config,
)
from structured_components.errors import ConfigurationError


def _valid_raw(**overrides) -> dict:
    raw = {
        "components-directory": "/srv/project/app/Components",
        "groups": {
            "pages": {"location": "Pages", "suffix": "page", "description": "Pages"},
            "widgets": {"location": "Widgets"},
        },
    }
    raw.update(overrides)
    return raw


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_config_file(self, tmp_path: Path):
        """Missing default config file falls back to defaults."""
        config = load_config(base_dir=tmp_path)

        assert config["components-directory"] is None
        assert config["cache_ttl"] == DEFAULT_CACHE_TTL
        assert config["groups"] == {}

    def test_loads_default_config_file(self, tmp_path: Path):
        """structured-components.yaml in base_dir is picked up."""
        (tmp_path / "structured-components.yaml").write_text(
            "components-directory: /srv/app/Components\ncache_ttl: 60\n"
        )

        config = load_config(base_dir=tmp_path)

        assert config["components-directory"] == "/srv/app/Components"
        assert config["cache_ttl"] == 60

    def test_relative_paths_resolve_from_config_dir(self, tmp_path: Path):
        """Relative directories are resolved against the config file location."""
        config_path = tmp_path / "conf" / "sc.yaml"
        config_path.parent.mkdir()
        config_path.write_text("components-directory: app/Components\n")

        config = load_config(str(config_path))

        expected = (tmp_path / "conf" / "app" / "Components").resolve()
        assert config["components-directory"] == str(expected)

    def test_config_path_from_environment(self, tmp_path: Path, monkeypatch):
        """STRUCTURED_COMPONENTS_CONFIG selects the config file."""
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("namespace: shop\n")
        monkeypatch.setenv("STRUCTURED_COMPONENTS_CONFIG", str(config_path))

        config = load_config()

        assert config["namespace"] == "shop"

    def test_missing_explicit_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            load_config(str(tmp_path / "nonexistent.yaml"))

    def test_invalid_yaml_raises(self, tmp_path: Path):
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("groups: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(config_path))

    def test_non_mapping_raises(self, tmp_path: Path):
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError):
            load_config(str(config_path))

    @pytest.mark.parametrize("value,expected", [("true", True), ("0", False), ("off", False)])
    def test_cache_override_from_environment(self, tmp_path, monkeypatch, value, expected):
        """STRUCTURED_COMPONENTS_CACHE overrides cache_enabled."""
        monkeypatch.setenv("STRUCTURED_COMPONENTS_CACHE", value)

        config = load_config(base_dir=tmp_path)

        assert config["cache_enabled"] is expected

    def test_invalid_cache_override_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STRUCTURED_COMPONENTS_CACHE", "sometimes")

        config = load_config(base_dir=tmp_path)

        assert config["cache_enabled"] is None

    def test_environment_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STRUCTURED_COMPONENTS_ENV", "development")

        config = load_config(base_dir=tmp_path)

        assert config["environment"] == "development"

    def test_load_does_not_modify_defaults(self, tmp_path: Path):
        (tmp_path / "structured-components.yaml").write_text(
            "groups:\n  pages:\n    location: Pages\n"
        )

        load_config(base_dir=tmp_path)

        assert DEFAULT_CONFIG["groups"] == {}


class TestValidateConfig:
    """Tests for validate_config function."""

    def test_valid_config(self):
        settings = validate_config(_valid_raw())

        assert settings.components_directory == "/srv/project/app/Components"
        assert list(settings.groups) == ["pages", "widgets"]
        assert settings.groups["pages"].suffix == "page"
        assert settings.groups["widgets"].suffix is None

    def test_app_path_and_namespace_defaults(self):
        """app-path defaults to the parent directory, namespace to its name."""
        settings = validate_config(_valid_raw())

        assert settings.app_path == "/srv/project/app"
        assert settings.namespace == "app"

    def test_explicit_app_path_and_namespace(self):
        settings = validate_config(
            _valid_raw(**{"app-path": "/srv/project/src", "namespace": "project"})
        )

        assert settings.app_path == "/srv/project/src"
        assert settings.namespace == "project"

    def test_missing_directory_raises(self):
        with pytest.raises(ConfigurationError, match="components-directory"):
            validate_config(_valid_raw(**{"components-directory": None}))

    def test_group_without_location_raises(self):
        raw = _valid_raw(groups={"broken": {"suffix": "x"}})

        with pytest.raises(ConfigurationError, match="groups.broken"):
            validate_config(raw)

    def test_groups_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="groups must be a mapping"):
            validate_config(_valid_raw(groups=["Pages"]))

    def test_reports_all_violations(self):
        """Every violation is listed, not just the first."""
        raw = {
            "components-directory": "",
            "cache_ttl": -5,
            "cache_enabled": "yes",
            "groups": {"a": {}, "b": "Pages"},
        }

        with pytest.raises(ConfigurationError) as exc_info:
            validate_config(raw)

        assert len(exc_info.value.violations) == 5

    def test_null_groups_means_no_groups(self):
        settings = validate_config(_valid_raw(groups=None))

        assert settings.groups == {}


class TestSettings:
    """Tests for Settings behaviour."""

    def _settings(self, **overrides) -> Settings:
        values = {"components_directory": "/a/b", "app_path": "/a", "namespace": "a"}
        values.update(overrides)
        return Settings(**values)

    @pytest.mark.parametrize(
        "environment,expected", [("production", True), ("prod", True), ("development", False)]
    )
    def test_cache_defaults_to_production_only(self, environment, expected):
        settings = self._settings(environment=environment)

        assert settings.use_cache is expected

    def test_explicit_cache_flag_wins(self):
        assert self._settings(environment="development", cache_enabled=True).use_cache
        assert not self._settings(environment="production", cache_enabled=False).use_cache

    def test_group_lookup_by_key_or_location(self):
        settings = validate_config(_valid_raw())

        assert settings.group("pages").location == "Pages"
        assert settings.group("Widgets").key == "widgets"
        assert settings.group("missing") is None


class TestWriteConfig:
    """Tests for generate_config and write_config."""

    def test_write_produces_loadable_config(self, tmp_path: Path):
        config_path = tmp_path / "structured-components.yaml"
        write_config(config_path, generate_config("app/Components"))

        settings = load_settings(str(config_path))

        assert settings.components_directory == str(
            (tmp_path / "app" / "Components").resolve()
        )
        assert settings.groups["pages"].suffix == "page"

    def test_write_includes_header(self, tmp_path: Path):
        config_path = tmp_path / "nested" / "config.yaml"
        write_config(config_path, generate_config())

        content = config_path.read_text()
        assert content.startswith("# Structured Components Configuration")
        assert yaml.safe_load(content)["components-directory"] == "app/Components"
