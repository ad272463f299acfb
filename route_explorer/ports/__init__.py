"""Port interfaces for the remote collaborators."""

from .listing_provider import RouteListingProvider, RoutePage
from .schedule_service import ScheduleService

__all__ = ["RouteListingProvider", "RoutePage", "ScheduleService"]
