"""
Route Explorer configuration module.

Centralizes all configuration values, magic numbers, and defaults
used throughout the explorer. Endpoint locations are read from the
environment (optionally via a .env file); everything else is fixed.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class ApiConfig:
    """Remote collaborator endpoints and HTTP behaviour."""

    listing_url: str = os.getenv("ROUTE_API_URL", "http://localhost:3000")
    schedule_url: str = os.getenv(
        "SCHEDULE_API_URL", "http://localhost:3001/api/schedule"
    )
    timeout_seconds: float = float(os.getenv("ROUTE_API_TIMEOUT_SECONDS", "15"))
    connect_timeout_seconds: float = 5.0
    max_retries: int = 2
    backoff_seconds: float = 0.5
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class QueryConfig:
    """Paging and filter bounds for route queries."""

    # Server-delegated pagination
    page_limit: int = 20

    # Upper bound per directional call in aggregate mode
    aggregate_page_cap: int = 100

    # Duration slider bounds (minutes)
    min_duration: int = 0
    max_route_duration: int = 1440  # 24 hours
    max_circular_duration: int = 4320  # 3 days
    duration_step: int = 5

    # Circular routes
    circular_default_limit: int = 20
    circular_limit_options: tuple = (10, 20, 50, 100, 200)
    circular_page_size: int = 20
    circular_page_size_options: tuple = (10, 20, 50, 100)


@dataclass(frozen=True)
class SearchConfig:
    """Suggestion box behaviour."""

    min_query_length: int = 2
    max_results: int = 10


@dataclass(frozen=True)
class PageConfig:
    """Streamlit page configuration."""

    title: str = "Route Explorer"
    icon: str = ":airplane:"
    layout: str = "wide"
    sidebar_state: str = "expanded"


@dataclass(frozen=True)
class ScheduleFormConfig:
    """Bounds and defaults for the schedule builder form."""

    min_days: int = 1
    max_days: int = 30
    default_days: int = 3
    default_turnaround_minutes: int = 45
    default_rest_hours: int = 8
    default_single_leg_ratio: float = 0.4
    default_operating_start: str = "06:00"
    default_operating_end: str = "23:00"


class ExplorerConfig:
    """Main configuration container providing access to all config sections."""

    api = ApiConfig()
    query = QueryConfig()
    search = SearchConfig()
    page = PageConfig()
    schedule = ScheduleFormConfig()
