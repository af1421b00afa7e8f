"""
Division management endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.utils.admin_schemas import DivisionCreate
from shared.utils.schemas import success_response
from rest_api.routers.admin._base import actor, require_admin, require_reader
from rest_api.services.domain import DivisionService


router = APIRouter(tags=["admin-divisions"])


@router.get("/divisions")
def list_divisions(
    db: Session = Depends(get_db),
    user: dict = Depends(require_reader),
) -> dict:
    """List live divisions ordered by code."""
    return success_response(DivisionService(db).list_divisions(), "Divisions retrieved successfully")


@router.get("/divisions/{division_id}")
def get_division(
    division_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_reader),
) -> dict:
    """Get a specific division."""
    return success_response(DivisionService(db).get_by_id(division_id), "Division retrieved successfully")


@router.post("/divisions", status_code=status.HTTP_201_CREATED)
def create_division(
    body: DivisionCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Create a division. Requires ADMIN role."""
    user_id, user_email = actor(user)
    division = DivisionService(db).create(body.model_dump(), user_id, user_email)
    return success_response(division, "Division created successfully")
