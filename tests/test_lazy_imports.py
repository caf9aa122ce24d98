"""Tests for sprig.__init__ — lazy imports cover all public names."""

import pytest

import sprig


@pytest.mark.parametrize("name", sprig.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(sprig, name)
    assert obj is not None, f"sprig.{name} resolved to None"


def test_resolves_to_defining_module() -> None:
    from sprig.app import App
    from sprig.templating.returns import Render

    assert sprig.App is App
    assert sprig.Render is Render


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        sprig.__getattr__("ThisDoesNotExist")
