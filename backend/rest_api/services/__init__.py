"""
Services module for business logic.

CLEAN ARCHITECTURE:
- domain/: Application services (business logic) - USE THESE
- crud/: Repository pattern, soft delete, actor stamping

Usage:
    from rest_api.services.domain import KaratService
    service = KaratService(db)
    karats = service.list_by_division(division_id)

Domain services are imported from their subpackage; repositories depend on
crud/ and must stay importable without loading domain/.
"""

# CRUD utilities (commonly used in domain services)
from .crud import (
    BaseRepository,
    DivisionScopedRepository,
    soft_delete,
    restore_entity,
    set_created_by,
    set_updated_by,
)

__all__ = [
    "BaseRepository",
    "DivisionScopedRepository",
    "soft_delete",
    "restore_entity",
    "set_created_by",
    "set_updated_by",
]
