"""
Repository Pattern for database access.

Provides a clean abstraction layer between business logic and data access,
with soft-delete awareness built in.

Usage:
    from rest_api.services.crud.repository import (
        BaseRepository,
        DivisionScopedRepository,
    )

    division_repo = BaseRepository(Division, db)
    divisions = division_repo.find_all(order_by=Division.code)

    # Division-scoped repository
    karat_repo = DivisionScopedRepository(KaratMaster, db)
    karats = karat_repo.find_by_division(division_id=5, order_by=KaratMaster.code)
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import select, func
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from rest_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Base repository providing common database operations.

    Soft-deleted rows (``is_active`` False) are hidden unless a call passes
    ``include_deleted=True``.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_deleted_filter(self, query: Select, include_deleted: bool) -> Select:
        """Hide soft-deleted rows if model supports soft delete."""
        if hasattr(self._model, "is_active") and not include_deleted:
            query = query.where(self._model.is_active.is_(True))
        return query

    def _apply_options(
        self, query: Select, options: list[Any] | None
    ) -> Select:
        """Apply eager loading options."""
        if options:
            query = query.options(*options)
        return query

    @staticmethod
    def _apply_window(
        query: Select,
        *,
        limit: int | None,
        offset: int | None,
        order_by: Any | None,
    ) -> Select:
        """Apply ordering and pagination."""
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    def find_by_id(
        self,
        entity_id: int,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            options: SQLAlchemy loader options (selectinload, joinedload).
            include_deleted: Include soft-deleted entities.

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_deleted_filter(query, include_deleted)
        query = self._apply_options(query, options)
        return self._session.scalar(query)

    def find_deleted_by_id(self, entity_id: int) -> ModelT | None:
        """Find a soft-deleted entity by primary key."""
        query = self._base_query().where(
            self._model.id == entity_id,
            self._model.is_active.is_(False),
        )
        return self._session.scalar(query)

    def find_all(
        self,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities.

        Args:
            options: SQLAlchemy loader options.
            include_deleted: Include soft-deleted entities.
            limit: Maximum number of results.
            offset: Number of results to skip.
            order_by: Column/expression (or list of them) to order by.

        Returns:
            Sequence of entities.
        """
        query = self._base_query()
        query = self._apply_deleted_filter(query, include_deleted)
        query = self._apply_options(query, options)
        query = self._apply_window(query, limit=limit, offset=offset, order_by=order_by)
        return self._session.scalars(query).all()

    def find_by_ids(
        self,
        entity_ids: Sequence[int],
        *,
        include_deleted: bool = False,
    ) -> Sequence[ModelT]:
        """
        Find multiple entities by IDs, ordered by id.

        Returns:
            Sequence of found entities (may be less than requested).
        """
        if not entity_ids:
            return []

        query = self._base_query().where(self._model.id.in_(entity_ids))
        query = self._apply_deleted_filter(query, include_deleted)
        query = query.order_by(self._model.id)
        return self._session.scalars(query).all()

    def exists(self, entity_id: int, *, include_deleted: bool = False) -> bool:
        """Check if entity exists by ID."""
        query = select(func.count()).select_from(self._model).where(self._model.id == entity_id)
        if hasattr(self._model, "is_active") and not include_deleted:
            query = query.where(self._model.is_active.is_(True))
        return (self._session.scalar(query) or 0) > 0

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity from session (not committed)."""
        self._session.delete(entity)


class DivisionScopedRepository(BaseRepository[ModelT]):
    """
    Repository for division-scoped entities.

    The model must have a `division_id` column.

    Usage:
        repo = DivisionScopedRepository(KaratMaster, db)
        karats = repo.find_by_division(division_id=5)
    """

    def _division_query(self, division_id: int) -> Select:
        """Create division-filtered query."""
        if not hasattr(self._model, "division_id"):
            raise AttributeError(
                f"Model {self._model.__name__} does not have division_id column. "
                "Use BaseRepository instead."
            )
        return self._base_query().where(self._model.division_id == division_id)

    def find_by_division(
        self,
        division_id: int,
        *,
        options: list[Any] | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities within division scope.

        Args:
            division_id: The division ID for filtering.
            options: SQLAlchemy loader options.
            include_deleted: Include soft-deleted entities.
            limit: Maximum results.
            offset: Skip count.
            order_by: Order expression.

        Returns:
            Sequence of entities.
        """
        query = self._division_query(division_id)
        query = self._apply_deleted_filter(query, include_deleted)
        query = self._apply_options(query, options)
        query = self._apply_window(query, limit=limit, offset=offset, order_by=order_by)
        return self._session.scalars(query).all()
