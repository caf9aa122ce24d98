"""Shared pytest configuration for sprig examples.

Provides ``example_module`` and ``example_app``, which load the
``app.py`` next to the requesting test. Each call re-executes app.py in
an isolated module namespace, so every test gets a new App, a new model
registry, and fresh seed data.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest


@pytest.fixture
def example_module(request: pytest.FixtureRequest) -> ModuleType:
    """Execute the sibling app.py and return its module."""
    app_path = Path(request.path).parent / "app.py"
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(example_module: ModuleType):
    """The ``app`` attribute of a freshly executed app.py."""
    return example_module.app
