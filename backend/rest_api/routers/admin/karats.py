"""
Karat master endpoints.

CLEAN-ARCH: Thin router that delegates to KaratService / KaratBulkService.
Typed service errors are rendered into the error envelope by the global
exception handlers.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.config.constants import Limits, SortOrder
from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import (
    BulkDeleteRequest,
    BulkStatusRequest,
    KaratCreate,
    KaratUpdate,
)
from shared.utils.schemas import success_response
from shared.utils.validators import sanitize_search_term
from rest_api.repositories import KaratFilters
from rest_api.routers._common import Pagination, get_pagination
from rest_api.routers.admin._base import actor, require_admin, require_reader
from rest_api.services.domain import KaratBulkService, KaratService


router = APIRouter(tags=["admin-karats"])


def _get_service(db: Session) -> KaratService:
    """Get KaratService instance."""
    return KaratService(db)


# =============================================================================
# Bulk operations (declared before /karats/{karat_id} routes)
# =============================================================================


@router.post("/karats/bulk/delete")
def bulk_delete_karats(
    body: BulkDeleteRequest,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Permanently delete several karats. Requires ADMIN role."""
    result = KaratBulkService(db).bulk_hard_delete(body.ids)
    return success_response(
        result, f"{result.deleted_count} karat(s) deleted permanently"
    )


@router.patch("/karats/bulk/status")
def bulk_update_karat_status(
    body: BulkStatusRequest,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Set the status of several karats. Requires ADMIN role."""
    user_id, user_email = actor(user)
    result = KaratBulkService(db).bulk_update_status(body.ids, body.status, user_id, user_email)
    return success_response(
        result, f"{result.modified_count} karat(s) updated to {body.status}"
    )


# =============================================================================
# Queries
# =============================================================================


@router.get("/karats")
def list_karats(
    division_id: int | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_TERM_LENGTH),
    include_deleted: bool = False,
    sort_by: str = "created_at",
    sort_order: str = SortOrder.DESC,
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: dict = Depends(require_reader),
) -> dict:
    """
    List karats with filtering, sorting and pagination.

    Soft-deleted karats are hidden unless include_deleted is set.
    """
    filters = KaratFilters(
        page=pagination.page,
        limit=pagination.limit,
        include_deleted=include_deleted,
        search=sanitize_search_term(search) or None,
        sort_by=sort_by,
        sort_order=sort_order,
        division_id=division_id,
        status=status_filter,
    )
    items, meta = _get_service(db).list(filters)
    return success_response(items, "Karats retrieved successfully", pagination=meta)


@router.get("/karats/division/{division_id}")
def list_karats_by_division(
    division_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_reader),
) -> dict:
    """Active karats of a division, ordered by code."""
    items = _get_service(db).list_by_division(division_id)
    return success_response(items, "Karats retrieved successfully")


@router.get("/karats/{karat_id}")
def get_karat(
    karat_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_reader),
) -> dict:
    """Get a karat. Soft-deleted karats are returned with their deletion marker."""
    return success_response(_get_service(db).get_by_id(karat_id), "Karat retrieved successfully")


# =============================================================================
# Commands
# =============================================================================


@router.post("/karats", status_code=status.HTTP_201_CREATED)
def create_karat(
    body: KaratCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Create a karat. Requires ADMIN role."""
    user_id, user_email = actor(user)
    karat = _get_service(db).create(body.model_dump(), user_id, user_email)
    return success_response(karat, "Karat created successfully")


@router.api_route("/karats/{karat_id}", methods=["PUT", "PATCH"])
def update_karat(
    karat_id: int,
    body: KaratUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Update the supplied fields of a karat. Requires ADMIN role."""
    user_id, user_email = actor(user)
    karat = _get_service(db).update(
        karat_id, body.model_dump(exclude_unset=True), user_id, user_email
    )
    return success_response(karat, "Karat updated successfully")


@router.patch("/karats/{karat_id}/toggle-status")
def toggle_karat_status(
    karat_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Flip a karat between active and inactive. Requires ADMIN role."""
    user_id, user_email = actor(user)
    karat = _get_service(db).toggle_status(karat_id, user_id, user_email)
    return success_response(karat, f"Karat status changed to {karat.status}")


@router.delete("/karats/{karat_id}")
def delete_karat(
    karat_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Soft delete a karat. Requires ADMIN role."""
    user_id, user_email = actor(user)
    karat = _get_service(db).delete(karat_id, user_id, user_email)
    return success_response(karat, "Karat deleted successfully")


@router.post("/karats/{karat_id}/restore")
def restore_karat(
    karat_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Restore a soft-deleted karat. Requires ADMIN role."""
    user_id, user_email = actor(user)
    karat = _get_service(db).restore(karat_id, user_id, user_email)
    return success_response(karat, "Karat restored successfully")


@router.delete("/karats/{karat_id}/permanent")
def hard_delete_karat(
    karat_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Permanently delete a karat. Requires ADMIN role."""
    karat = _get_service(db).hard_delete(karat_id)
    return success_response(karat, "Karat permanently deleted")
