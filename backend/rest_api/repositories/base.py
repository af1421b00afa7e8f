"""
Base filter objects shared by the domain repositories.
"""

from dataclasses import dataclass

from shared.config.constants import Limits, SortOrder


@dataclass
class RepositoryFilters:
    """Base filters for paged repository queries."""

    # Pagination (1-based page)
    page: int = 1
    limit: int = Limits.DEFAULT_PAGE_SIZE

    # Soft delete
    include_deleted: bool = False

    # Search
    search: str | None = None

    # Ordering
    sort_by: str | None = None
    sort_order: str = SortOrder.DESC

    def __post_init__(self):
        """Validate and normalize filters."""
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        if self.search:
            self.search = self.search.strip()[:Limits.MAX_SEARCH_TERM_LENGTH] or None
        order = (self.sort_order or "").lower()
        self.sort_order = order if order in SortOrder.ALL else SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
