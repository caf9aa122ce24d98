"""Sprig — a minimal MVC web substrate.

Routes map URL patterns to actions, actions return ``Render``
instructions, and templates are composed inside layouts. Models live in
an in-memory registry owned by the app.

Basic usage::

    from sprig import App, AppConfig, Render

    app = App(AppConfig(template_dir="app/views"))

    @app.registry.model
    @dataclass
    class Tag:
        id: int
        name: str

    @app.get("/tags/:id")
    def show(params, raw_input):
        return Render("tags/show.html", tag=app.registry.get(Tag, id=params["id"]))

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ActionError",
    "ActionSet",
    "App",
    "AppConfig",
    "ConfigurationError",
    "DictLoader",
    "FileSystemLoader",
    "HTTPError",
    "MissingVariable",
    "ModelRegistry",
    "Outcome",
    "RecordNotFound",
    "Render",
    "RouteNotFound",
    "SprigError",
    "TemplateError",
    "TemplateNotFound",
    "TemplateSyntaxError",
]

_ERRORS = frozenset(
    {
        "ActionError",
        "ConfigurationError",
        "HTTPError",
        "MissingVariable",
        "RecordNotFound",
        "RouteNotFound",
        "SprigError",
        "TemplateError",
        "TemplateNotFound",
        "TemplateSyntaxError",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sprig`` fast while providing a clean top-level API.
    """
    if name == "App":
        from sprig.app import App

        return App

    if name == "AppConfig":
        from sprig.config import AppConfig

        return AppConfig

    if name == "ActionSet":
        from sprig.actions import ActionSet

        return ActionSet

    if name == "Outcome":
        from sprig.dispatch import Outcome

        return Outcome

    if name == "ModelRegistry":
        from sprig.models.registry import ModelRegistry

        return ModelRegistry

    if name in ("Render", "DictLoader", "FileSystemLoader"):
        from sprig import templating as _tmpl

        return getattr(_tmpl, name)

    if name in _ERRORS:
        from sprig import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
