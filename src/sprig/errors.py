"""Sprig exception hierarchy.

Shared across RouteTable, Router, Environment, Dispatcher, and the model
registry so every module raises and catches the same types.
"""

from dataclasses import dataclass


class SprigError(Exception):
    """Base for all sprig-specific errors."""


class ConfigurationError(SprigError):
    """Raised when app configuration is invalid.

    Route patterns are checked at registration, layouts at first render.
    Either way the error is fatal to the setup step that triggered it.
    """


class TemplateSyntaxError(ConfigurationError):
    """A template could not be parsed."""

    def __init__(self, message: str, *, template: str | None = None, line: int | None = None) -> None:
        self.template = template
        self.line = line
        where = ""
        if template is not None:
            where = f" in {template!r}"
            if line is not None:
                where += f" at line {line}"
        super().__init__(f"{message}{where}")


@dataclass(frozen=True, slots=True)
class HTTPError(SprigError):
    """An error that maps directly to an HTTP status code.

    The dispatcher converts these to an ``Outcome`` with the same status.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class TemplateError(SprigError):
    """Base for render-time template failures."""


class TemplateNotFound(TemplateError):  # noqa: N818
    """The named template does not exist in the loader."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name!r}")


class MissingVariable(TemplateError):
    """A marker referenced a name absent from the rendering context."""

    def __init__(self, variable: str, *, template: str | None = None) -> None:
        self.variable = variable
        self.template = template
        where = f" in template {template!r}" if template else ""
        super().__init__(f"Missing variable {variable!r}{where}")


class ActionError(SprigError):
    """Base for domain errors raised by application actions."""


class RecordNotFound(ActionError):  # noqa: N818
    """A model lookup found no matching entity."""

    def __init__(self, model: type, criteria: dict[str, object]) -> None:
        self.model = model
        self.criteria = criteria
        terms = ", ".join(f"{k}={v!r}" for k, v in criteria.items())
        super().__init__(f"No {model.__name__} with {terms}")
