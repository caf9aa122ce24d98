"""Look up the App named by a ``module:attribute`` target."""

import importlib

from sprig.app import App


def resolve_app(target: str) -> App:
    """Import the module part of *target* and return its App.

    The attribute defaults to ``app`` (``myproject.web`` means
    ``myproject.web:app``). Import and lookup errors propagate; anything
    that is not an App raises ``TypeError``.
    """
    module_name, _, attr = target.partition(":")
    app = getattr(importlib.import_module(module_name), attr or "app")
    if not isinstance(app, App):
        msg = f"{target!r} is a {type(app).__name__}, not a sprig.App"
        raise TypeError(msg)
    return app
