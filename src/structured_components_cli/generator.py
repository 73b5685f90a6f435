"""Component file generator used by the make command.

Renders a component module, its template and optionally a test module from
string.Template stubs. A custom stub replaces the component module stub and
receives the same placeholders:

    $class_name     UserProfile
    $module         app.Pages.Admin.UserProfile
    $tag            admin.-user-profile-page
    $view_name      components.admin.-user-profile-page
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import Optional

from structured_components.config import Settings
from structured_components.errors import ResourceNotFound
from structured_components.paths import SOURCE_EXTENSION, path_to_class_name

logger = logging.getLogger(__name__)

TEMPLATES_DIR = "templates"
TESTS_DIR = "tests/components"

COMPONENT_STUB = '''"""$class_name component."""

from structured_components import Component


class $class_name(Component):
    template_name = "$view_name"

    def render(self) -> str:
        return self.view_name()
'''

INLINE_COMPONENT_STUB = '''"""$class_name component."""

from structured_components import Component


class $class_name(Component):
    def render(self) -> str:
        return """
            <div>
                {# $tag #}
            </div>
        """
'''

TEMPLATE_STUB = """<div>
    {# $tag #}
</div>
"""

PYTEST_STUB = '''"""Tests for the $class_name component."""

from $module import $class_name


def test_${function_name}_renders():
    component = $class_name()

    assert component.render()
'''

UNITTEST_STUB = '''"""Tests for the $class_name component."""

import unittest

from $module import $class_name


class ${class_name}Test(unittest.TestCase):
    def test_renders(self):
        component = $class_name()

        self.assertTrue(component.render())


if __name__ == "__main__":
    unittest.main()
'''


@dataclass
class GeneratedFiles:
    """Paths written by generate_component()."""

    component: Path
    template: Optional[Path] = None
    test: Optional[Path] = None

    def all(self) -> list[Path]:
        return [p for p in (self.component, self.template, self.test) if p is not None]


def snake(value: str) -> str:
    """UserProfile -> user_profile"""
    value = re.sub(r"(.)(?=[A-Z])", r"\1_", value)
    return re.sub(r"[^0-9a-zA-Z]+", "_", value).strip("_").lower()


def component_file(settings: Settings, component_path: str) -> Path:
    """Module path for ``<location>/<Name>`` under the components directory."""
    return Path(settings.components_directory) / f"{component_path}{SOURCE_EXTENSION}"


def view_name(tag: str) -> str:
    return f"components.{tag}"


def template_file(settings: Settings, tag: str) -> Path:
    return Path(settings.app_path) / TEMPLATES_DIR / "components" / f"{tag}.html"


def component_test_file(settings: Settings, component_path: str) -> Path:
    """Test module location, relative paths mirroring the component's."""
    project_root = Path(settings.app_path).parent
    *directories, name = component_path.split("/")
    return project_root.joinpath(TESTS_DIR, *directories, f"test_{snake(name)}.py")


def generate_component(
    settings: Settings,
    component_path: str,
    tag: str,
    force: bool = False,
    inline: bool = False,
    test: bool = False,
    unittest: bool = False,
    stub: Optional[Path] = None,
) -> GeneratedFiles:
    """
    Write a new component module.

    Args:
        settings: Validated configuration
        component_path: ``<location>/<Name>`` relative to the components directory
        tag: Registration tag the component will receive (suffix included)
        force: Overwrite existing files
        inline: Render markup from the class instead of a template file
        test: Generate a pytest test module
        unittest: Generate a unittest test module
        stub: Custom component module stub

    Returns:
        GeneratedFiles with every path written

    Raises:
        FileExistsError: If the component exists and force is not set
        ResourceNotFound: If the custom stub does not exist
    """
    target = component_file(settings, component_path)
    if target.exists() and not force:
        raise FileExistsError(f"Component already exists: {target}")

    if stub is not None:
        stub = Path(stub)
        if not stub.is_file():
            raise ResourceNotFound(f"Stub file not found: {stub}")
        component_stub = stub.read_text()
    else:
        component_stub = INLINE_COMPONENT_STUB if inline else COMPONENT_STUB

    class_name = component_path.split("/")[-1]
    context = {
        "class_name": class_name,
        "module": path_to_class_name(str(target), settings.app_path, settings.namespace),
        "tag": tag,
        "view_name": view_name(tag),
        "function_name": snake(class_name),
    }

    generated = GeneratedFiles(component=target)
    _write(target, Template(component_stub).safe_substitute(context))

    if not inline:
        generated.template = template_file(settings, tag)
        if force or not generated.template.exists():
            _write(generated.template, Template(TEMPLATE_STUB).safe_substitute(context))

    if test or unittest:
        generated.test = component_test_file(settings, component_path)
        if force or not generated.test.exists():
            test_stub = UNITTEST_STUB if unittest else PYTEST_STUB
            _write(generated.test, Template(test_stub).safe_substitute(context))

    return generated


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    logger.debug(f"Wrote {path}")
