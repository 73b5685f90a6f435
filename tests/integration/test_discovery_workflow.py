"""Integration tests for the init -> make -> boot -> clear-cache workflow.

Runs the CLI against a temporary project and boots the registry from the
config file it writes, the way an application would at startup.
"""

import importlib
import runpy

import pytest
from typer.testing import CliRunner

from structured_components import ComponentRegistry, boot
from structured_components_cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workspace(project, runner, monkeypatch):
    """Project root as working directory, holding an init-generated config."""
    monkeypatch.chdir(project)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return project


def boot_registry() -> ComponentRegistry:
    importlib.invalidate_caches()
    registry = ComponentRegistry()
    boot(registry=registry)
    return registry


class TestDiscoveryWorkflow:
    """End-to-end component lifecycle."""

    def test_made_component_registered_at_boot(self, runner, workspace):
        result = runner.invoke(app, ["make", "UserProfile", "-g", "pages"])
        assert result.exit_code == 0, result.output

        registry = boot_registry()

        assert registry.tags() == ["user-profile-page"]
        assert registry.get("user-profile-page") == "app.Components.Pages.UserProfile"

    def test_nested_component(self, runner, workspace):
        runner.invoke(app, ["make", "Admin/Dashboard", "-g", "pages"])

        registry = boot_registry()

        assert registry.get("admin.-dashboard-page") == "app.Components.Pages.Admin.Dashboard"

    def test_new_component_visible_after_clearing_cache(self, runner, workspace):
        """Production caching hides new components until the cache is cleared."""
        runner.invoke(app, ["make", "UserProfile", "-g", "pages"])
        boot_registry()

        runner.invoke(app, ["make", "Counter", "-g", "pages"])
        assert "counter-page" not in boot_registry()

        result = runner.invoke(app, ["clear-cache", "-f"])
        assert result.exit_code == 0, result.output

        registry = boot_registry()
        assert registry.tags() == ["counter-page", "user-profile-page"]

    def test_development_environment_skips_cache(self, runner, workspace, monkeypatch):
        monkeypatch.setenv("STRUCTURED_COMPONENTS_ENV", "development")
        runner.invoke(app, ["make", "UserProfile", "-g", "pages"])
        boot_registry()

        runner.invoke(app, ["make", "Counter", "-g", "pages"])

        assert "counter-page" in boot_registry()

    def test_generated_pytest_module_passes(self, runner, workspace):
        """The generated test module imports and renders the component."""
        runner.invoke(app, ["make", "UserProfile", "-g", "pages", "--test"])
        importlib.invalidate_caches()

        test_module = workspace / "tests" / "components" / "Pages" / "test_user_profile.py"
        namespace = runpy.run_path(str(test_module))

        namespace["test_user_profile_renders"]()

    def test_preview_matches_registered_tag(self, runner, workspace):
        preview = runner.invoke(app, ["make", "Admin/Dashboard", "-g", "pages", "--preview"])
        runner.invoke(app, ["make", "Admin/Dashboard", "-g", "pages"])

        registry = boot_registry()

        assert registry.tags() == ["admin.-dashboard-page"]
        assert "admin.-dashboard-page" in preview.output
