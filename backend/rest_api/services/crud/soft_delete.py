"""
Soft delete helpers for consistent lifecycle operations across all entities.

This module provides functions to:
- Soft delete entities (set is_active=False with audit trail)
- Restore soft-deleted entities
- Set created_by/updated_by audit fields
"""

from typing import TypeVar

from sqlalchemy.orm import Session

from rest_api.models import AuditMixin
from shared.infrastructure.db import safe_commit


# Type variable for generic entity operations
T = TypeVar("T", bound=AuditMixin)


def soft_delete(db: Session, entity: T, user_id: int | None, user_email: str | None) -> T:
    """
    Perform soft delete on an entity with audit trail.

    Business fields (a karat's ``status``) are left untouched.

    Args:
        db: Database session
        entity: The entity to soft delete (must inherit from AuditMixin)
        user_id: ID of the actor performing the deletion
        user_email: Email of the actor performing the deletion

    Returns:
        The soft-deleted entity

    Raises:
        Exception: Re-raises any exception after rollback
    """
    entity.soft_delete(user_id, user_email)
    safe_commit(db)
    db.refresh(entity)
    return entity


def restore_entity(db: Session, entity: T, user_id: int | None, user_email: str | None) -> T:
    """
    Restore a soft-deleted entity.

    Args:
        db: Database session
        entity: The entity to restore (must inherit from AuditMixin)
        user_id: ID of the actor performing the restoration
        user_email: Email of the actor performing the restoration

    Returns:
        The restored entity

    Raises:
        ValueError: If entity is None
        Exception: Re-raises any exception after rollback
    """
    if entity is None:
        raise ValueError("Cannot restore None entity")

    entity.restore(user_id, user_email)
    safe_commit(db)
    db.refresh(entity)
    return entity


def set_created_by(entity: T, user_id: int | None, user_email: str | None) -> T:
    """Set created_by fields on a new entity."""
    entity.set_created_by(user_id, user_email)
    return entity


def set_updated_by(entity: T, user_id: int | None, user_email: str | None) -> T:
    """Set updated_by fields on an entity being updated."""
    entity.set_updated_by(user_id, user_email)
    return entity
