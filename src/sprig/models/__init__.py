"""In-memory model registry — stands in for a persistence layer.

Not a database: no durability, no transactions, no removal.
"""

from sprig.errors import RecordNotFound
from sprig.models.registry import ModelRegistry

__all__ = [
    "ModelRegistry",
    "RecordNotFound",
]
