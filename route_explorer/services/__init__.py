"""
Services module for the route query engine.

Provides the query-string codec, directional aggregation, client-side
filtering, pagination, suggestion search and display formatting.
"""

from route_explorer.services.aggregator import DirectionalAggregator, merge_unique
from route_explorer.services.client_filters import (
    apply_client_filters,
    filter_by_airline_name,
    filter_by_duration,
)
from route_explorer.services.form_state import (
    circular_filters_from_form,
    route_filters_from_form,
    schedule_config_from_form,
)
from route_explorer.services.formatting import (
    aggregate_banner,
    format_distance,
    format_duration,
)
from route_explorer.services.pagination import (
    MaterializedPagination,
    Pagination,
    ServerPagination,
    initial_pagination,
)
from route_explorer.services.query_codec import (
    aggregate_link_params,
    consume_auto_apply,
    decode,
    decode_circular,
    encode,
    encode_circular,
    write_params,
)
from route_explorer.services.search_service import search_airlines, search_airports

__all__ = [
    # Query codec
    "decode",
    "encode",
    "decode_circular",
    "encode_circular",
    "write_params",
    "consume_auto_apply",
    "aggregate_link_params",
    # Aggregation
    "DirectionalAggregator",
    "merge_unique",
    # Client-side filters
    "apply_client_filters",
    "filter_by_airline_name",
    "filter_by_duration",
    # Pagination
    "MaterializedPagination",
    "ServerPagination",
    "Pagination",
    "initial_pagination",
    # Search
    "search_airports",
    "search_airlines",
    # Form layer
    "route_filters_from_form",
    "circular_filters_from_form",
    "schedule_config_from_form",
    # Formatting
    "format_duration",
    "format_distance",
    "aggregate_banner",
]
