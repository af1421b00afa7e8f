"""
Base Service Classes for Clean Architecture.

CLEAN-ARCH: Provides base classes for application services that:
- Use Repository for data access (not direct queries)
- Convert entities to output DTOs
- Handle business rule validation and orchestration
- Turn Store failures into typed errors

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from rest_api.services.base_service import DivisionScopedService

    class KaratService(DivisionScopedService[KaratMaster, KaratOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=KaratMaster,
                output_schema=KaratOutput,
                entity_name="Karat",
            )
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Generic, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.services.crud.repository import BaseRepository, DivisionScopedRepository
from rest_api.services.crud.soft_delete import (
    restore_entity,
    set_created_by,
    set_updated_by,
    soft_delete,
)
from shared.infrastructure.db import safe_commit
from shared.config.logging import get_logger
from shared.utils.exceptions import DatabaseError, DuplicateEntityError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(ABC, Generic[ModelT]):
    """
    Abstract base service for domain operations.

    Subclasses implement specific business logic while this class
    provides common infrastructure (repository access, logging).
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        repository: BaseRepository[ModelT] | None = None,
    ):
        self._db = db
        self._model = model
        self._repo = repository or BaseRepository(model, db)

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT]:
        """Repository for data access."""
        return self._repo


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD and soft-delete lifecycle.

    Provides standard methods that can be overridden for custom business
    logic. Uses Repository for all data access.

    Responsibilities:
    - Data access via Repository (not direct queries)
    - DTO transformation via output schema
    - Actor stamping on every mutation
    - Business rule validation through hooks
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        repository: BaseRepository[ModelT] | None = None,
    ):
        super().__init__(db, model, repository)
        self._output_schema = output_schema
        self._entity_name = entity_name

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_by_id(
        self,
        entity_id: int,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
    ) -> OutputT:
        """
        Get entity by ID.

        Args:
            entity_id: Entity primary key.
            options: SQLAlchemy loader options.
            include_deleted: Include soft-deleted entities.

        Returns:
            Output DTO.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(
            entity_id,
            options=options,
            include_deleted=include_deleted,
        )

        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)

        return self.to_output(entity)

    def get_entity(
        self,
        entity_id: int,
        *,
        include_deleted: bool = False,
    ) -> ModelT:
        """Get raw entity (for internal use). Raises NotFoundError."""
        entity = self._repo.find_by_id(entity_id, include_deleted=include_deleted)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def list_all(
        self,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> list[OutputT]:
        """List all entities."""
        entities = self._repo.find_all(
            options=options,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
            order_by=order_by,
        )
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(
        self,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> OutputT:
        """
        Create new entity.

        Args:
            data: Entity data dictionary.
            user_id: Creating actor ID.
            user_email: Creating actor email.

        Returns:
            Output DTO for created entity.

        Raises:
            ValidationError: If data is invalid.
            DatabaseError: If creation fails.
        """
        clean = self._validate_create(data)

        entity = self._model(**clean)
        set_created_by(entity, user_id, user_email)
        self._db.add(entity)

        self._commit("create", clean)
        self._db.refresh(entity)

        self._after_create(entity, user_id, user_email)
        return self.to_output(entity)

    def update(
        self,
        entity_id: int,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> OutputT:
        """
        Update a live entity.

        Raises:
            NotFoundError: If entity not found or soft-deleted.
            ValidationError: If data is invalid.
            DatabaseError: If update fails.
        """
        entity = self.get_entity(entity_id)

        changes = self._validate_update(entity, data)

        old_values = {k: getattr(entity, k) for k in changes if hasattr(entity, k)}

        for field_name, value in changes.items():
            setattr(entity, field_name, value)

        set_updated_by(entity, user_id, user_email)

        self._commit("update", {**old_values, **changes})
        self._db.refresh(entity)

        self._after_update(entity, old_values, user_id, user_email)
        return self.to_output(entity)

    def delete(
        self,
        entity_id: int,
        user_id: int | None,
        user_email: str | None,
    ) -> OutputT:
        """
        Soft delete a live entity.

        Raises:
            NotFoundError: If entity not found or already deleted.
        """
        entity = self.get_entity(entity_id)
        self._validate_delete(entity)

        try:
            soft_delete(self._db, entity, user_id, user_email)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {self._entity_name}", error=str(e), entity_id=entity_id)
            raise DatabaseError(f"delete {self._entity_name.lower()}") from e

        self._after_delete(entity, user_id, user_email)
        return self.to_output(entity)

    def restore(
        self,
        entity_id: int,
        user_id: int | None,
        user_email: str | None,
    ) -> OutputT:
        """
        Restore a soft-deleted entity.

        Raises:
            NotFoundError: If no soft-deleted entity has this id.
        """
        entity = self._repo.find_deleted_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"Deleted {self._entity_name.lower()}", entity_id)

        try:
            restore_entity(self._db, entity, user_id, user_email)
        except SQLAlchemyError as e:
            logger.error(f"Failed to restore {self._entity_name}", error=str(e), entity_id=entity_id)
            raise DatabaseError(f"restore {self._entity_name.lower()}") from e

        return self.to_output(entity)

    def hard_delete(self, entity_id: int) -> OutputT:
        """
        Permanently remove an entity, live or soft-deleted.

        Returns:
            Snapshot of the removed entity.
        """
        entity = self.get_entity(entity_id, include_deleted=True)
        snapshot = self.to_output(entity)

        self._repo.delete(entity)
        self._commit("hard delete")
        return snapshot

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Transaction Handling
    # =========================================================================

    def _commit(self, operation: str, data: dict[str, Any] | None = None) -> None:
        """
        Commit the unit of work, translating Store failures.

        The session is rolled back before any error is raised, so a failed
        write never partially applies.
        """
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            raise self._on_integrity_error(e, data or {}) from e
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to {operation} {self._entity_name}",
                error=str(e),
            )
            raise DatabaseError(f"{operation} {self._entity_name.lower()}") from e

    def _on_integrity_error(self, error: IntegrityError, data: dict[str, Any]) -> Exception:
        """Map a constraint violation to a typed error. Override per entity."""
        return DuplicateEntityError(self._entity_name)

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate data before create and return the normalized field set.

        Raises:
            ValidationError: If validation fails.
        """
        return data

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate data before update and return the changes to apply.

        Raises:
            ValidationError: If validation fails.
        """
        return data

    def _validate_delete(self, entity: ModelT) -> None:
        """Validate before soft delete. Override to block deletion."""
        pass

    # =========================================================================
    # Lifecycle Hooks (override in subclasses)
    # =========================================================================

    def _after_create(self, entity: ModelT, user_id: int | None, user_email: str | None) -> None:
        """Hook called after entity creation."""
        pass

    def _after_update(
        self,
        entity: ModelT,
        old_values: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> None:
        """Hook called after entity update."""
        pass

    def _after_delete(self, entity: ModelT, user_id: int | None, user_email: str | None) -> None:
        """Hook called after soft delete."""
        pass


class DivisionScopedService(BaseCRUDService[ModelT, OutputT], Generic[ModelT, OutputT]):
    """
    Service for division-scoped entities.

    Extends BaseCRUDService with division filtering.
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        repository: DivisionScopedRepository[ModelT] | None = None,
    ):
        super().__init__(
            db=db,
            model=model,
            output_schema=output_schema,
            entity_name=entity_name,
            repository=repository or DivisionScopedRepository(model, db),
        )

    def list_by_division_all(
        self,
        division_id: int,
        *,
        include_deleted: bool = False,
        order_by: Any | None = None,
    ) -> list[OutputT]:
        """List every entity of a division regardless of business status."""
        repo: DivisionScopedRepository = self._repo
        entities = repo.find_by_division(
            division_id,
            include_deleted=include_deleted,
            order_by=order_by,
        )
        return [self.to_output(e) for e in entities]
