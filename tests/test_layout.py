"""Tests for sprig.templating.layout — body-in-layout composition."""

import pytest
from kida import DictLoader

from sprig.config import AppConfig
from sprig.errors import ConfigurationError, MissingVariable, TemplateNotFound
from sprig.templating.environment import create_environment
from sprig.templating.layout import LayoutComposer

LAYOUT = "<html><title>{{ title }}</title><body>{% block content %}{% endblock %}</body></html>"


def _composer(**templates: str) -> LayoutComposer:
    return LayoutComposer(create_environment(AppConfig(), DictLoader(templates)))


class TestRenderWithLayout:
    def test_body_inserted_at_slot(self) -> None:
        composer = _composer(layout=LAYOUT, body="<p>{{ msg }}</p>")
        page = composer.render_with_layout("body", {"msg": "hi"}, "layout", {"title": "T"})
        assert page == "<html><title>T</title><body><p>hi</p></body></html>"

    def test_body_not_re_escaped(self) -> None:
        composer = _composer(layout="[{% block content %}{% endblock %}]", body="{{ msg }}")
        page = composer.render_with_layout("body", {"msg": "<b>"}, "layout", {})
        assert page == "[&lt;b&gt;]"

    def test_safe_body_markup_survives(self) -> None:
        composer = _composer(layout="[{% block content %}{% endblock %}]", body="{{ html | safe }}")
        page = composer.render_with_layout("body", {"html": "<em>x</em>"}, "layout", {})
        assert page == "[<em>x</em>]"

    def test_no_layout_is_pass_through(self) -> None:
        composer = _composer(body="<p>{{ msg }}</p>")
        assert composer.render_with_layout("body", {"msg": "hi"}, None) == "<p>hi</p>"

    def test_layout_context_is_separate(self) -> None:
        composer = _composer(layout="{{ msg }}|{% block content %}{% endblock %}", body="{{ msg }}")
        with pytest.raises(MissingVariable):
            composer.render_with_layout("body", {"msg": "hi"}, "layout", {})

    def test_layout_without_context(self) -> None:
        composer = _composer(layout="<main>{% block content %}{% endblock %}</main>", body="x")
        assert composer.render_with_layout("body", {}, "layout") == "<main>x</main>"

    def test_slot_nested_in_plain_block(self) -> None:
        layout = "<body>{% block page %}<main>{% block content %}{% endblock %}</main>{% endblock %}</body>"
        composer = _composer(layout=layout, body="x")
        assert composer.render_with_layout("body", {}, "layout") == "<body><main>x</main></body>"


class TestLayoutErrors:
    def test_zero_slots(self) -> None:
        composer = _composer(layout="<html></html>", body="x")
        with pytest.raises(ConfigurationError, match="found 0"):
            composer.render_with_layout("body", {}, "layout", {})

    def test_two_slots(self) -> None:
        composer = _composer(
            layout="{% block content %}{% endblock %}{% block content %}{% endblock %}", body="x"
        )
        with pytest.raises(ConfigurationError, match="found 2"):
            composer.render_with_layout("body", {}, "layout", {})

    def test_slot_inside_conditional(self) -> None:
        composer = _composer(
            layout="{% if show %}<div>{% block content %}{% endblock %}</div>{% endif %}", body="x"
        )
        with pytest.raises(ConfigurationError):
            composer.render_with_layout("body", {}, "layout", {"show": True})

    def test_slot_inside_loop(self) -> None:
        composer = _composer(
            layout="<main>{% for x in xs %}{% block content %}{% endblock %}{% endfor %}</main>", body="x"
        )
        with pytest.raises(ConfigurationError):
            composer.render_with_layout("body", {}, "layout", {"xs": [1, 2]})

    def test_missing_layout(self) -> None:
        composer = _composer(body="x")
        with pytest.raises(TemplateNotFound):
            composer.render_with_layout("body", {}, "nope", {})

    def test_missing_body(self) -> None:
        composer = _composer(layout=LAYOUT)
        with pytest.raises(TemplateNotFound):
            composer.render_with_layout("nope", {}, "layout", {"title": "T"})
