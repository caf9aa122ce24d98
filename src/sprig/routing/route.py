"""Route segments, Route, and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


@dataclass(frozen=True, slots=True)
class Literal:
    """A fixed path segment, compared exactly (case-sensitive).

    ``/tags`` parses to ``Literal("tags")``.
    """

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Variable:
    """A named path segment that captures any non-empty value.

    ``/:id`` parses to ``Variable("id")``.
    """

    name: str

    def __str__(self) -> str:
        return f":{self.name}"


Segment: TypeAlias = Literal | Variable


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup and appended to the route table. Never
    mutated afterwards.
    """

    method: str
    segments: tuple[Segment, ...]
    action: Callable[..., Any]
    name: str | None = None

    @property
    def pattern(self) -> str:
        """The route pattern rebuilt from its segments (``/tags/:id``)."""
        return "/" + "/".join(str(seg) for seg in self.segments)

    @property
    def variables(self) -> tuple[str, ...]:
        """Variable names in segment order."""
        return tuple(seg.name for seg in self.segments if isinstance(seg, Variable))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]

    @property
    def action(self) -> Callable[..., Any]:
        return self.route.action
