"""
Components module for reusable UI elements.

Provides route and circular-route forms, tables, pagination controls,
and styling components for the explorer.
"""

from route_explorer.dashboard.components.circular_filters import render_circular_filters
from route_explorer.dashboard.components.circular_table import (
    render_circular_detail,
    render_circular_table,
)
from route_explorer.dashboard.components.pagination_controls import (
    render_materialized_pagination,
    render_page_size_select,
    render_server_pagination,
)
from route_explorer.dashboard.components.route_filters import (
    RouteFilterAction,
    render_route_filters,
)
from route_explorer.dashboard.components.route_table import (
    render_route_detail,
    render_route_table,
)
from route_explorer.dashboard.components.styles import apply_custom_css, apply_page_config

__all__ = [
    "RouteFilterAction",
    "apply_custom_css",
    "apply_page_config",
    "render_circular_detail",
    "render_circular_filters",
    "render_circular_table",
    "render_materialized_pagination",
    "render_page_size_select",
    "render_route_detail",
    "render_route_filters",
    "render_route_table",
    "render_server_pagination",
]
