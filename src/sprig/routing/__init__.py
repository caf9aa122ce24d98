"""Routing — ordered route table with first-match resolution.

Routes are registered during setup and compiled into a read-only
lookup structure when the app freezes.
"""

from sprig.routing.route import Literal, Route, RouteMatch, Variable
from sprig.routing.router import RouteTable, Router, parse_pattern

__all__ = [
    "Literal",
    "Route",
    "RouteMatch",
    "RouteTable",
    "Router",
    "Variable",
    "parse_pattern",
]
