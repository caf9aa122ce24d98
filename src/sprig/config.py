"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. Shared defaults live here instead of on a base
controller class; override per app with ``AppConfig(...)`` or
``dataclasses.replace``.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(template_dir="views", default_layout=None)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Templates
    template_dir: str | Path = "app/views"
    default_layout: str | None = "layout.html"  # Applied when a Render picks no layout
    autoescape: bool = True

    # Forms: POST with a ``_method`` field dispatches as PUT/PATCH/DELETE
    method_override: bool = True

    # Logging
    log_level: str = "info"
