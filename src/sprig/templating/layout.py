"""Layout composition — render a body, then wrap it in a layout.

A layout is an ordinary kida template with exactly one
``{% block content %}{% endblock %}`` slot at its top level. The rendered
body is injected there with ``render_with_blocks``, the same way kida
composes page layouts without ``{% extends %}``.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from kida import Environment, Template
from kida.nodes import Block, Node

from sprig.errors import ConfigurationError
from sprig.templating.environment import get_template, render, translate_errors

CONTENT_BLOCK = "content"


class LayoutComposer:
    """Composes body templates inside layout templates.

    Usage::

        composer = LayoutComposer(env)
        page = composer.render_with_layout("tags/show.html", {"tag": tag}, "layout.html", {"title": "Tag"})
    """

    __slots__ = ("env",)

    def __init__(self, env: Environment) -> None:
        self.env = env

    def render_with_layout(
        self,
        body_template: str,
        body_context: Mapping[str, Any],
        layout_template: str | None,
        layout_context: Mapping[str, Any] | None = None,
    ) -> str:
        """Render *body_template*, then *layout_template* around it.

        With ``layout_template=None`` the body render is returned as is.
        Raises ``ConfigurationError`` when the layout does not have
        exactly one top-level content slot.
        """
        body = render(self.env, body_template, body_context)
        if layout_template is None:
            return body

        layout = get_template(self.env, layout_template)
        check_layout(layout, layout_template)
        with translate_errors(layout_template):
            return layout.render_with_blocks({CONTENT_BLOCK: body}, dict(layout_context or {}))


def check_layout(layout: Template, name: str) -> None:
    """Require exactly one unconditional ``content`` block at the top level.

    A slot inside ``for`` or ``if`` (or a conditional block) would repeat
    or drop the body.
    """
    ast = layout._optimized_ast  # preserved by kida for introspection
    positions = list(_slot_positions(ast.body if ast is not None else (), top_level=True))
    if len(positions) != 1:
        msg = (
            f"Layout {name!r} must contain exactly one "
            f"{{% block {CONTENT_BLOCK} %}} slot, found {len(positions)}."
        )
        raise ConfigurationError(msg)
    if not positions[0]:
        msg = (
            f"Layout {name!r} places its {{% block {CONTENT_BLOCK} %}} slot "
            "inside a loop or condition; it must sit at the top level."
        )
        raise ConfigurationError(msg)


def _slot_positions(nodes: Iterable[Node], *, top_level: bool) -> Iterator[bool]:
    """Yield, for each content block found, whether it renders exactly once."""
    for node in nodes:
        once = top_level and isinstance(node, Block) and node.condition is None
        if isinstance(node, Block) and node.name == CONTENT_BLOCK:
            yield once
        # Plain blocks render once, so a slot nested in one still counts as top level.
        yield from _slot_positions(node.iter_child_nodes(), top_level=once)
