"""
Shared Pydantic schemas used across the application.

Every REST response uses the same envelope:
    {"success": true, "message": "...", "data": ..., "pagination": {...}}
Errors carry ``error_code`` and ``details`` instead of ``data``.
"""

from typing import Any

from pydantic import BaseModel


# =============================================================================
# Pagination
# =============================================================================


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""

    page: int
    page_size: int
    total_count: int
    total_pages: int

    model_config = {
        "json_schema_extra": {
            "example": {"page": 1, "page_size": 10, "total_count": 42, "total_pages": 5}
        }
    }

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> "PaginationMeta":
        """Derive total_pages from the counts (0 pages when nothing matches)."""
        total_pages = (total_count + page_size - 1) // page_size if page_size > 0 else 0
        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
        )


# =============================================================================
# Response Envelope
# =============================================================================


def success_response(
    data: Any = None,
    message: str = "OK",
    pagination: PaginationMeta | None = None,
) -> dict[str, Any]:
    """
    Build a success envelope.

    ``pagination`` is only included for list responses.
    """
    body: dict[str, Any] = {"success": True, "message": message, "data": data}
    if pagination is not None:
        body["pagination"] = pagination.model_dump()
    return body


def error_response(
    message: str,
    error_code: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an error envelope."""
    return {
        "success": False,
        "message": message,
        "error_code": error_code,
        "details": details or {},
    }
