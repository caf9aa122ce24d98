"""Render — the instruction an action returns to get a rendered page.

Frozen dataclass. The dispatcher inspects it and hands it to the layout
composer; actions never render templates themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class _DefaultLayout:
    """Sentinel: use the app's configured default layout."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DEFAULT_LAYOUT"


DEFAULT_LAYOUT: Any = _DefaultLayout()


@dataclass(frozen=True, slots=True)
class Render:
    """Render a template, optionally inside a layout.

    Usage::

        return Render("tags/show.html", tag=tag)
        return Render("tags/show.html", tag=tag).with_layout("admin.html", title="Admin")
        return Render("tags/_row.html", tag=tag).without_layout()

    The layout sees the body context unless ``with_layout`` supplies its
    own context.
    """

    template: str
    context: dict[str, Any] = field(default_factory=dict)
    layout: Any = DEFAULT_LAYOUT
    layout_context: dict[str, Any] | None = None

    def __init__(self, template: str, /, **context: Any) -> None:
        object.__setattr__(self, "template", template)
        object.__setattr__(self, "context", context)
        object.__setattr__(self, "layout", DEFAULT_LAYOUT)
        object.__setattr__(self, "layout_context", None)

    def with_layout(self, layout: str, /, **context: Any) -> Render:
        """Return a new Render wrapped in *layout*.

        Keyword arguments become the layout's context; without them the
        layout shares the body context.
        """
        return self._evolve(layout, context or None)

    def without_layout(self) -> Render:
        """Return a new Render that skips the layout (fragment mode)."""
        return self._evolve(None, None)

    def _evolve(self, layout: Any, layout_context: dict[str, Any] | None) -> Render:
        new = Render(self.template, **self.context)
        object.__setattr__(new, "layout", layout)
        object.__setattr__(new, "layout_context", layout_context)
        return new
