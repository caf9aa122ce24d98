"""Action sets — composable groups of routes.

Shared behaviour is composed by explicit registration instead of
controller inheritance: build an ``ActionSet``, then ``app.include()`` it,
optionally under a prefix.

Usage::

    tags = ActionSet("tags")

    @tags.get("/tags/:id")
    def show(params, raw_input):
        return Render("tags/show.html", tag=registry.get(Tag, id=params["id"]))

    app.include(tags)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sprig._internal.types import Action
from sprig.errors import ConfigurationError
from sprig.routing.route import METHODS
from sprig.routing.router import parse_pattern


@dataclass(frozen=True, slots=True)
class PendingRoute:
    """A route waiting to be compiled into the route table."""

    method: str
    pattern: str
    action: Action
    name: str | None = None


def join_pattern(prefix: str, pattern: str) -> str:
    """Join a mount prefix and a route pattern with exactly one slash."""
    prefix = prefix.rstrip("/")
    tail = pattern.strip("/")
    if not tail:
        return prefix or "/"
    return f"{prefix}/{tail}"


class ActionSet:
    """An ordered, reusable list of routes.

    Patterns and methods are validated as they are added, so a bad
    pattern fails at import time rather than on the first request.
    """

    __slots__ = ("_pending", "name")

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._pending: list[PendingRoute] = []

    @property
    def pending(self) -> tuple[PendingRoute, ...]:
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def add(self, method: str, pattern: str, action: Action, *, name: str | None = None) -> None:
        """Add a route explicitly."""
        verb = method.upper()
        if verb not in METHODS:
            allowed = ", ".join(sorted(METHODS))
            msg = f"Unsupported method {method!r} for {pattern!r}. Use one of: {allowed}."
            raise ConfigurationError(msg)
        parse_pattern(pattern)
        self._pending.append(PendingRoute(verb, pattern, action, name))

    def extend(self, routes: tuple[PendingRoute, ...], *, prefix: str = "") -> None:
        """Append already-validated routes, re-validating under *prefix*."""
        for pending in routes:
            self.add(
                pending.method,
                join_pattern(prefix, pending.pattern) if prefix else pending.pattern,
                pending.action,
                name=pending.name,
            )

    def route(
        self,
        pattern: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Action], Action]:
        """Register an action for one or more methods via decorator.

        Args:
            pattern: URL pattern. Use ``:name`` for variable segments.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name. Defaults to the function name.
        """

        def decorator(func: Action) -> Action:
            for method in methods or ["GET"]:
                self.add(method, pattern, func, name=name)
            return func

        return decorator

    def get(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["GET"], name=name)

    def post(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["POST"], name=name)

    def put(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["PUT"], name=name)

    def patch(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["PATCH"], name=name)

    def delete(self, pattern: str, *, name: str | None = None) -> Callable[[Action], Action]:
        return self.route(pattern, methods=["DELETE"], name=name)


def describe(action: Callable[..., Any]) -> str:
    """Human-readable action name for route listings."""
    module = getattr(action, "__module__", None)
    qualname = getattr(action, "__qualname__", None) or repr(action)
    return f"{module}.{qualname}" if module else qualname
