"""Templating — kida templates composed inside layouts.

Templates are compiled once by kida, cached, and rendered against
per-call contexts. Values are HTML-escaped unless filtered through
``safe`` or already ``Markup``.
"""

from kida import ChoiceLoader, DictLoader, FileSystemLoader

from sprig.templating.environment import create_environment, get_template, render
from sprig.templating.layout import CONTENT_BLOCK, LayoutComposer, check_layout
from sprig.templating.returns import DEFAULT_LAYOUT, Render

__all__ = [
    "CONTENT_BLOCK",
    "DEFAULT_LAYOUT",
    "ChoiceLoader",
    "DictLoader",
    "FileSystemLoader",
    "LayoutComposer",
    "Render",
    "check_layout",
    "create_environment",
    "get_template",
    "render",
]
