"""
Query outcome type shared by the route and circular-route engines.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

from route_explorer.schemas.results import FetchResult, QueryStatus
from route_explorer.services.pagination import MaterializedPagination, Pagination


@dataclass(frozen=True)
class QueryOutcome:
    """
    Everything a view needs to render one query.

    Attributes:
        filters: The FilterState / CircularFilterState that was run.
        result: Fetch status and the fetched (server page or full) records.
        pagination: Window state; None when the query failed.
    """

    filters: Any
    result: FetchResult
    pagination: Optional[Pagination] = None

    @property
    def status(self) -> QueryStatus:
        return self.result.status

    @property
    def is_error(self) -> bool:
        return self.result.is_error

    @property
    def page_records(self) -> tuple:
        """Records to render for the current page."""
        if isinstance(self.pagination, MaterializedPagination):
            return self.pagination.page_items
        return self.result.records

    @property
    def total(self) -> int:
        if self.pagination is None:
            return 0
        return self.pagination.total

    def with_pagination(self, pagination: Pagination) -> "QueryOutcome":
        return replace(self, pagination=pagination)
