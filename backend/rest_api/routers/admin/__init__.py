"""
Admin API router - combines all admin sub-routers.

This module provides a single router that includes all admin endpoints
organized by domain:

- divisions: Division master (organizational scope)
- karats: Karat master CRUD, soft delete/restore, toggle and bulk operations

All routes are prefixed with /api/admin
"""

from fastapi import APIRouter

from .divisions import router as divisions_router
from .karats import router as karats_router


# Create the main admin router
router = APIRouter()

# Scope first, then the records scoped by it
router.include_router(divisions_router)
router.include_router(karats_router)


__all__ = ["router"]
