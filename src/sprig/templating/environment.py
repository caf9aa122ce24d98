"""Kida environment setup and error translation.

Creates a kida Environment from sprig's AppConfig. The environment is
created once during ``App._freeze()`` and shared by every request; kida
caches compiled templates behind its own lock.

kida's exceptions are translated into sprig's error tree at this seam so
the dispatcher and callers only ever see ``TemplateError`` subclasses.
"""

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from kida import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFoundError,
    UndefinedError,
)
from kida import TemplateSyntaxError as KidaSyntaxError
from kida.environment.protocols import Loader
from kida.lexer import LexerError

from sprig.config import AppConfig
from sprig.errors import MissingVariable, TemplateNotFound, TemplateSyntaxError

logger = logging.getLogger("sprig.templating")


def create_environment(config: AppConfig, loader: Loader | None = None) -> Environment:
    """Create a kida Environment from app configuration.

    *loader* replaces the default ``FileSystemLoader(config.template_dir)``,
    e.g. a ``DictLoader`` in tests.
    """
    if loader is None:
        loader = ChoiceLoader([FileSystemLoader(str(config.template_dir))])
    return Environment(
        loader=loader,
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


@contextmanager
def translate_errors(name: str) -> Iterator[None]:
    """Re-raise kida load and render failures as sprig errors."""
    try:
        yield
    except TemplateNotFoundError as exc:
        logger.error("Template %r not found", name)
        raise TemplateNotFound(name) from exc
    except UndefinedError as exc:
        template = exc.template if exc.template != "<template>" else name
        logger.error("Render of %r failed: missing %r", name, exc.name)
        raise MissingVariable(exc.name, template=template) from exc
    except (KidaSyntaxError, LexerError) as exc:
        logger.error("Template %r does not parse", name)
        raise TemplateSyntaxError(exc.message, template=name, line=exc.lineno) from exc


def get_template(env: Environment, name: str) -> Template:
    """Load *name* through *env*, compiling it on first use."""
    with translate_errors(name):
        return env.get_template(name)


def render(env: Environment, name: str, context: Mapping[str, Any]) -> str:
    """Render template *name* with *context*.

    Missing context values are a hard error (``MissingVariable``), never
    a silent blank.
    """
    with translate_errors(name):
        return env.get_template(name).render(dict(context))
