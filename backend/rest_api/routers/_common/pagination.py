"""
Standardized Pagination for all routers.
Provides consistent page/limit pagination across list endpoints.

Usage:
    from rest_api.routers._common.pagination import Pagination, get_pagination

    @router.get("/karats")
    def list_karats(
        pagination: Pagination = Depends(get_pagination),
        db: Session = Depends(get_db),
    ):
        filters = KaratFilters(page=pagination.page, limit=pagination.limit)
        ...
"""

from dataclasses import dataclass

from fastapi import Query

from shared.config.constants import Limits


@dataclass
class Pagination:
    """
    Pagination parameters with validation.

    Attributes:
        page: 1-based page number
        limit: Maximum items per page (1 to max_limit)
        max_limit: Maximum allowed limit (default 200)
    """

    page: int = 1
    limit: int = Limits.DEFAULT_PAGE_SIZE
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        """Validate and normalize values."""
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), self.max_limit)


def get_pagination(
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> Pagination:
    """
    FastAPI dependency for pagination.

    Usage:
        @router.get("/items")
        def list_items(pagination: Pagination = Depends(get_pagination)):
            ...
    """
    return Pagination(page=page, limit=limit)
