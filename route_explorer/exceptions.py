"""
Custom exceptions for the route_explorer package.

Provides a hierarchy of exceptions for clear error handling
of remote listing calls, schedule generation, and form input.
"""

from typing import Any, Optional


class RouteExplorerError(Exception):
    """Base exception for all route explorer errors."""
    pass


class ListingUnavailableError(RouteExplorerError):
    """Raised when the listing API fails, times out, or returns a non-2xx response."""
    def __init__(self, status_code: int, message: str = "", payload: Optional[Any] = None):
        self.status_code = status_code
        self.message = message or f"Listing API returned status code {status_code}"
        self.payload = payload
        super().__init__(self.message)


class ScheduleServiceError(RouteExplorerError):
    """Raised when the schedule generation service rejects or fails a request."""
    def __init__(self, status_code: int, message: str = "", payload: Optional[Any] = None):
        self.status_code = status_code
        self.message = message or f"Schedule service returned status code {status_code}"
        self.payload = payload
        super().__init__(self.message)


class InvalidFilterError(RouteExplorerError):
    """Raised when form input cannot be turned into a valid query."""
    def __init__(self, parameter_name: str, message: str = ""):
        self.parameter_name = parameter_name
        self.message = message or f"Invalid value for {parameter_name}"
        super().__init__(self.message)
