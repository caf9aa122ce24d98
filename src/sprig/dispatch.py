"""Request dispatcher — one request in, one ``Outcome`` out.

The only place per-request failures are contained. Routing misses become
404s, anything raised by an action or a render becomes a 500 with an
opaque body. Shared state (route table, templates, model registry) is
never written here.
"""

import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from sprig.errors import RouteNotFound, TemplateNotFound
from sprig.routing.router import Router
from sprig.templating.environment import get_template
from sprig.templating.layout import LayoutComposer
from sprig.templating.returns import DEFAULT_LAYOUT, Render

logger = logging.getLogger("sprig.server")

NOT_FOUND_BODY = "Not Found"
INTERNAL_ERROR_BODY = "Internal Server Error"


class Outcome(NamedTuple):
    """Status code and body produced for one request."""

    status: int
    body: str


class Dispatcher:
    """Route, run the action, render the result.

    Usage::

        dispatcher = Dispatcher(router, LayoutComposer(env), default_layout="layout.html")
        status, body = dispatcher.handle("GET", "/tags/32", {})
    """

    __slots__ = ("_default_layout", "composer", "debug", "router")

    def __init__(
        self,
        router: Router,
        composer: LayoutComposer,
        *,
        default_layout: str | None = None,
        debug: bool = False,
    ) -> None:
        self.router = router
        self.composer = composer
        self.debug = debug
        self._default_layout = default_layout

    def handle(self, method: str, path: str, raw_input: Mapping[str, Any] | None = None) -> Outcome:
        """Process a single request through routing, action, and rendering."""
        try:
            match = self.router.match(method, path)
        except RouteNotFound as exc:
            logger.debug("404 %s %s", method, path)
            return Outcome(404, exc.detail if self.debug else NOT_FOUND_BODY)

        # Whatever the action or the render raises, status and detail stay private.
        try:
            result = match.action(dict(match.params), dict(raw_input or {}))
            body = self.finish(result)
        except Exception as exc:
            logger.exception("500 %s %s", method, path)
            if self.debug:
                return Outcome(500, f"500: {type(exc).__name__}: {exc}")
            return Outcome(500, INTERNAL_ERROR_BODY)
        return Outcome(200, body)

    def finish(self, result: Any) -> str:
        """Turn an action's return value into a response body."""
        if isinstance(result, Render):
            layout = self._layout_for(result)
            layout_context = result.layout_context
            if layout_context is None:
                layout_context = result.context
            return self.composer.render_with_layout(
                result.template, result.context, layout, layout_context
            )
        if isinstance(result, str):
            return str(result)
        msg = f"Action returned {type(result).__name__}; expected Render or str."
        raise TypeError(msg)

    def _layout_for(self, result: Render) -> str | None:
        if result.layout is not DEFAULT_LAYOUT:
            return result.layout
        if self._default_layout is None:
            return None
        # A missing default layout means "no layout"; an explicit one must exist.
        try:
            get_template(self.composer.env, self._default_layout)
        except TemplateNotFound:
            return None
        return self._default_layout
