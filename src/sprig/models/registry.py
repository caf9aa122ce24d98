"""In-memory model registry.

An explicit service that catalogs every constructed entity, per type, in
construction order. The app owns one registry and hands it to whatever
needs it; there is no ambient class-level catalog.

Usage::

    registry = ModelRegistry()

    @registry.model
    @dataclass
    class Tag:
        name: str

    Tag("python")
    Tag("web")
    registry.all(Tag)   # [Tag(name='python'), Tag(name='web')]

Append-only: there is no removal, and entries live as long as the
registry does.
"""

import functools
import logging
import threading
from typing import Any, TypeVar

from sprig.errors import RecordNotFound

logger = logging.getLogger("sprig.models")

T = TypeVar("T")

_MISSING = object()


class ModelRegistry:
    """Per-type, append-only catalogs of entity instances.

    Thread safety:
        Appends for one type are serialized by that type's lock. Locks
        are created lazily under a single guard lock. Reads copy the
        catalog under the same per-type lock.
    """

    __slots__ = ("_catalogs", "_guard", "_locks")

    def __init__(self) -> None:
        self._catalogs: dict[type, list[Any]] = {}
        self._locks: dict[type, threading.Lock] = {}
        self._guard = threading.Lock()

    def model(self, cls: type[T]) -> type[T]:
        """Class decorator: every construction of *cls* is registered.

        Instances are filed under their concrete type, so a subclass
        never shows up in its parent's catalog. Subclasses that define
        their own ``__init__`` should be decorated too.
        """
        original_init = cls.__init__
        registry = self

        @functools.wraps(original_init)
        def __init__(instance: Any, *args: Any, **kwargs: Any) -> None:
            original_init(instance, *args, **kwargs)
            # Only the outermost wrapper registers (super().__init__ chains)
            if type(instance).__init__ is __init__:
                registry.register(instance)

        cls.__init__ = __init__  # type: ignore[method-assign]
        return cls

    def register(self, instance: object) -> None:
        """Append *instance* to its type's catalog."""
        cls = type(instance)
        with self._lock_for(cls):
            catalog = self._catalogs[cls]
            catalog.append(instance)
            position = len(catalog)
        logger.debug("Registered %s #%d", cls.__name__, position)

    def all(self, cls: type[T]) -> list[T]:
        """Every instance of *cls* ever constructed, in construction order."""
        with self._lock_for(cls):
            return list(self._catalogs.get(cls, ()))

    def count(self, cls: type) -> int:
        with self._lock_for(cls):
            return len(self._catalogs.get(cls, ()))

    def find_by(self, cls: type[T], **criteria: Any) -> T | None:
        """First instance whose attributes match every criterion, else ``None``.

        Criteria are opaque keys: a captured path segment ``"32"`` matches
        an attribute holding ``32``.
        """
        for instance in self.all(cls):
            if all(_matches(instance, name, key) for name, key in criteria.items()):
                return instance
        return None

    def get(self, cls: type[T], **criteria: Any) -> T:
        """Like ``find_by`` but raises ``RecordNotFound`` on a miss."""
        instance = self.find_by(cls, **criteria)
        if instance is None:
            raise RecordNotFound(cls, criteria)
        return instance

    def types(self) -> tuple[type, ...]:
        """Types with at least one registered instance, in first-seen order."""
        with self._guard:
            return tuple(cls for cls, catalog in self._catalogs.items() if catalog)

    def _lock_for(self, cls: type) -> threading.Lock:
        lock = self._locks.get(cls)
        if lock is None:
            with self._guard:
                lock = self._locks.setdefault(cls, threading.Lock())
                self._catalogs.setdefault(cls, [])
        return lock


def _matches(instance: object, name: str, key: Any) -> bool:
    value = getattr(instance, name, _MISSING)
    if value is _MISSING:
        return False
    return str(value) == str(key)
