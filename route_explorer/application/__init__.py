"""
Application layer - query use cases.

Orchestrates the services against the listing port and turns failures
into renderable outcomes.
"""

from .circular_query import AIRLINE_REQUIRED_MESSAGE, CircularRouteQueryEngine
from .outcome import QueryOutcome
from .route_query import RouteQueryEngine
from .session import QuerySession

__all__ = [
    "AIRLINE_REQUIRED_MESSAGE",
    "CircularRouteQueryEngine",
    "QueryOutcome",
    "QuerySession",
    "RouteQueryEngine",
]
