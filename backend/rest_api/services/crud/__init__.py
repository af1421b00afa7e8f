"""
CRUD Services - Generic operations for entity management.

Provides:
- Repository Pattern: type-safe data access with soft-delete awareness
- soft_delete / restore_entity: lifecycle with audit trail
- set_created_by / set_updated_by: actor stamping
"""

from .repository import BaseRepository, DivisionScopedRepository
from .soft_delete import (
    soft_delete,
    restore_entity,
    set_created_by,
    set_updated_by,
)

__all__ = [
    # Repository Pattern
    "BaseRepository",
    "DivisionScopedRepository",
    # Soft delete
    "soft_delete",
    "restore_entity",
    "set_created_by",
    "set_updated_by",
]
