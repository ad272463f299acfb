"""
Pages module for explorer views.

Provides the route, circular-route, reference-list and schedule builder views.
"""

from route_explorer.dashboard.pages.airlines_view import render_airlines_view
from route_explorer.dashboard.pages.airports_view import render_airports_view
from route_explorer.dashboard.pages.circular_view import render_circular_view
from route_explorer.dashboard.pages.countries_view import render_countries_view
from route_explorer.dashboard.pages.routes_view import render_routes_view
from route_explorer.dashboard.pages.schedule_view import render_schedule_view

__all__ = [
    "render_airlines_view",
    "render_airports_view",
    "render_circular_view",
    "render_countries_view",
    "render_routes_view",
    "render_schedule_view",
]
