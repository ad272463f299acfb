"""Adapters implementing the collaborator ports over HTTP."""

from .http_listing_client import HttpListingClient
from .http_schedule_client import HttpScheduleClient

__all__ = ["HttpListingClient", "HttpScheduleClient"]
