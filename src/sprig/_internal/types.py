"""Shared type aliases used across sprig modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Action: called as action(params, raw_input); returns Render or str
Action: TypeAlias = Callable[[dict[str, str], dict[str, Any]], Any]
