"""Route table and first-match router.

Routes are registered during setup and compiled into read-only lookup
buckets when the app freezes. Precedence is registration order: among
routes that could match the same path, the first one registered wins.
"""

from collections.abc import Callable, Iterator
from typing import Any

from sprig.errors import ConfigurationError, RouteNotFound
from sprig.routing.route import METHODS, Literal, Route, RouteMatch, Segment, Variable


def split_path(path: str) -> list[str]:
    """Split a URL path into segments.

    Leading and trailing slashes do not produce empty segments::

        "/tags/32/"  -> ["tags", "32"]
        "/"          -> []
    """
    stripped = path.strip("/")
    if not stripped:
        return []
    return stripped.split("/")


def parse_pattern(pattern: str) -> tuple[Segment, ...]:
    """Parse a route pattern string into literal and variable segments.

    Examples::

        "/tags"                  -> (Literal("tags"),)
        "/tags/:id"              -> (Literal("tags"), Variable("id"))
        "/tags/:tag_id/items"    -> (Literal("tags"), Variable("tag_id"), Literal("items"))

    Raises ``ConfigurationError`` for a bare ``:`` segment, an empty inner
    segment (``/tags//items``), or a duplicate variable name.
    """
    segments: list[Segment] = []
    seen: set[str] = set()
    for part in split_path(pattern):
        if not part:
            msg = f"Empty segment in route pattern {pattern!r}."
            raise ConfigurationError(msg)
        if part.startswith(":"):
            name = part[1:]
            if not name:
                msg = f"Unnamed variable segment ':' in route pattern {pattern!r}."
                raise ConfigurationError(msg)
            if name in seen:
                msg = f"Duplicate variable {name!r} in route pattern {pattern!r}."
                raise ConfigurationError(msg)
            seen.add(name)
            segments.append(Variable(name))
        else:
            segments.append(Literal(part))
    return tuple(segments)


class RouteTable:
    """Ordered, append-only collection of routes.

    Usage::

        table = RouteTable()
        table.register("GET", "/tags/:id", show_tag)
        table.compile()
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def register(
        self,
        method: str,
        pattern: str,
        action: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        """Parse *pattern* and append a new route.

        Raises ``ConfigurationError`` for unknown methods and malformed
        patterns, ``RuntimeError`` once the table is compiled.
        """
        if self._compiled:
            msg = "Cannot register routes after compilation."
            raise RuntimeError(msg)

        verb = method.upper()
        if verb not in METHODS:
            allowed = ", ".join(sorted(METHODS))
            msg = f"Unsupported method {method!r} for {pattern!r}. Use one of: {allowed}."
            raise ConfigurationError(msg)

        route = Route(
            method=verb,
            segments=parse_pattern(pattern),
            action=action,
            name=name or getattr(action, "__name__", None),
        )
        self._routes.append(route)
        return route

    def compile(self) -> None:
        """Freeze the table. No more routes can be registered."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    def __len__(self) -> int:
        return len(self._routes)


def match_segments(segments: tuple[Segment, ...], parts: list[str]) -> dict[str, str] | None:
    """Match path parts against route segments of the same length.

    Returns the captured parameters, or ``None`` on the first mismatch.
    """
    params: dict[str, str] = {}
    for seg, part in zip(segments, parts, strict=True):
        if isinstance(seg, Literal):
            if seg.text != part:
                return None
        elif part:
            params[seg.name] = part
        else:
            return None
    return params


class Router:
    """First-match router over a compiled route table.

    Candidates are bucketed by ``(method, segment count)`` with
    registration order preserved inside each bucket, so a lookup only
    walks routes of the right shape.

    Usage::

        router = Router(table)
        match = router.resolve("GET", "/tags/32")
        if match is not None:
            match.action(match.params, {})
    """

    __slots__ = ("_buckets", "_table")

    def __init__(self, table: RouteTable) -> None:
        if not table.compiled:
            table.compile()
        self._table = table
        buckets: dict[tuple[str, int], list[Route]] = {}
        for route in table:
            buckets.setdefault((route.method, len(route.segments)), []).append(route)
        self._buckets: dict[tuple[str, int], tuple[Route, ...]] = {
            key: tuple(routes) for key, routes in buckets.items()
        }

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._table)

    def resolve(self, method: str, path: str) -> RouteMatch | None:
        """Find the first route matching *method* and *path*.

        Returns ``None`` when nothing matches. Never raises for a
        well-formed method string.
        """
        parts = split_path(path)
        for route in self._buckets.get((method.upper(), len(parts)), ()):
            params = match_segments(route.segments, parts)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    def match(self, method: str, path: str) -> RouteMatch:
        """Like ``resolve`` but raises ``RouteNotFound`` when nothing matches."""
        result = self.resolve(method, path)
        if result is None:
            raise RouteNotFound(f"No route matches {method} {path!r}")
        return result
