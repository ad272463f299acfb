"""
Pagination window.

Two disciplines, represented as a tagged variant so slicing and reset
rules live on the type:

- ServerPagination: offset/limit forwarded to the listing API, which
  reports the authoritative total (direct-mode route queries).
- MaterializedPagination: the full filtered result set is held in
  memory and paged locally (aggregate-mode and fetch-all queries).

A query lifecycle never mixes the two. A new query always starts on
the first page; only page moves keep a position.
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, Tuple, Union

from route_explorer.schemas.filters import QueryMode

__all__ = [
    "MaterializedPagination",
    "Pagination",
    "ServerPagination",
    "initial_pagination",
]


@dataclass(frozen=True)
class ServerPagination:
    """
    Offset/limit window over a server-paginated listing.

    Attributes:
        offset: Zero-based index of the first record on the page.
        limit: Page size forwarded to the API.
        total: Total count reported by the API for the last call.
    """

    offset: int = 0
    limit: int = 20
    total: int = 0

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset must be >= 0")
        if self.limit <= 0:
            raise ValueError("limit must be > 0")
        if self.total < 0:
            raise ValueError("total must be >= 0")

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.limit))

    @property
    def page(self) -> int:
        """One-based page number of the current offset."""
        return self.offset // self.limit + 1

    @property
    def last_offset(self) -> int:
        """Offset of the last valid page for ``total``."""
        return (self.total_pages - 1) * self.limit

    @property
    def has_previous(self) -> bool:
        return self.offset > 0

    @property
    def has_next(self) -> bool:
        return self.offset + self.limit < self.total

    @property
    def is_beyond_total(self) -> bool:
        return self.offset > self.last_offset

    def clamped(self) -> "ServerPagination":
        """Same window, moved back to the last valid page if past the end."""
        if self.is_beyond_total:
            return replace(self, offset=self.last_offset)
        return self

    def for_page(self, page: int) -> "ServerPagination":
        """Window for a one-based ``page``, clamped to ``[1, total_pages]``."""
        page = min(max(page, 1), self.total_pages)
        return replace(self, offset=(page - 1) * self.limit)

    def next_page(self) -> "ServerPagination":
        return self.for_page(self.page + 1)

    def previous_page(self) -> "ServerPagination":
        return self.for_page(self.page - 1)

    def with_total(self, total: int) -> "ServerPagination":
        return replace(self, total=total)

    def to_params(self) -> Dict[str, int]:
        return {"limit": self.limit, "offset": self.offset}

    def display_range(self, shown: int) -> Tuple[int, int]:
        """One-based (first, last) indices of ``shown`` records on this page."""
        if self.total == 0 or shown == 0:
            return (0, 0)
        return (self.offset + 1, min(self.offset + shown, self.total))


@dataclass(frozen=True)
class MaterializedPagination:
    """
    Page window over a fully fetched, in-memory result set.

    ``page`` is clamped to ``[1, total_pages]`` on construction, so asking
    for a page past the end yields the last page rather than an empty one.

    Attributes:
        items: Every record in the (filtered) result set.
        page: One-based current page.
        page_size: Records per page.
    """

    items: tuple = ()
    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be > 0")
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "page", min(max(self.page, 1), self.total_pages))

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def total(self) -> int:
        return self.total_items

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.items) / self.page_size))

    @property
    def page_items(self) -> tuple:
        start = (self.page - 1) * self.page_size
        end = min(self.page * self.page_size, len(self.items))
        return self.items[start:end]

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def for_page(self, page: int) -> "MaterializedPagination":
        return replace(self, page=page)

    def first_page(self) -> "MaterializedPagination":
        return self.for_page(1)

    def last_page(self) -> "MaterializedPagination":
        return self.for_page(self.total_pages)

    def next_page(self) -> "MaterializedPagination":
        return self.for_page(self.page + 1)

    def previous_page(self) -> "MaterializedPagination":
        return self.for_page(self.page - 1)

    def with_page_size(self, page_size: int) -> "MaterializedPagination":
        """Change the page size; always returns to the first page."""
        return replace(self, page_size=page_size, page=1)

    def display_range(self) -> Tuple[int, int]:
        shown = len(self.page_items)
        if shown == 0:
            return (0, 0)
        first = (self.page - 1) * self.page_size + 1
        return (first, first + shown - 1)


Pagination = Union[ServerPagination, MaterializedPagination]


def initial_pagination(
    mode: QueryMode, page_size: int, items: tuple = ()
) -> Pagination:
    """First-page pagination for ``mode`` in its own discipline."""
    if mode is QueryMode.AGGREGATE:
        return MaterializedPagination(items=items, page=1, page_size=page_size)
    return ServerPagination(offset=0, limit=page_size)

