"""
Karat Repository - Data access for karat purity standards.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.orm import Session

from rest_api.models import KaratMaster
from rest_api.services.crud.repository import DivisionScopedRepository
from shared.config.constants import RecordStatus, SortOrder
from shared.utils.validators import escape_like_pattern, normalize_code
from .base import RepositoryFilters


# Public sort keys mapped to columns
SORTABLE_COLUMNS = {
    "code": KaratMaster.code,
    "description": KaratMaster.description,
    "standard_purity": KaratMaster.standard_purity,
    "created_at": KaratMaster.created_at,
    "updated_at": KaratMaster.updated_at,
}
DEFAULT_SORT = "created_at"


@dataclass
class KaratFilters(RepositoryFilters):
    """Filters specific to karats."""

    division_id: int | None = None
    status: str | None = None

    def __post_init__(self):
        super().__post_init__()
        if self.sort_by not in SORTABLE_COLUMNS:
            self.sort_by = DEFAULT_SORT


class KaratRepository(DivisionScopedRepository[KaratMaster]):
    """
    Repository for KaratMaster entities.

    Usage:
        repo = KaratRepository(db)
        if repo.code_exists("k18", division_id=1):
            ...
        items, total = repo.find_page(KaratFilters(division_id=1, page=2))
    """

    def __init__(self, session: Session):
        super().__init__(KaratMaster, session)

    def code_exists(
        self,
        code: str,
        division_id: int,
        exclude_id: int | None = None,
    ) -> bool:
        """
        Check whether a code is already taken inside a division.

        Soft-deleted rows keep their code reserved, so they count.
        """
        query = (
            select(func.count())
            .select_from(KaratMaster)
            .where(
                KaratMaster.code == normalize_code(code),
                KaratMaster.division_id == division_id,
            )
        )
        if exclude_id is not None:
            query = query.where(KaratMaster.id != exclude_id)
        return (self._session.scalar(query) or 0) > 0

    def _apply_filters(self, query: Select, filters: KaratFilters) -> Select:
        """Apply karat-specific filters."""
        query = self._apply_deleted_filter(query, filters.include_deleted)

        if filters.division_id is not None:
            query = query.where(KaratMaster.division_id == filters.division_id)

        if filters.status:
            query = query.where(KaratMaster.status == filters.status)

        if filters.search:
            pattern = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(
                or_(
                    KaratMaster.code.ilike(pattern, escape="\\"),
                    KaratMaster.description.ilike(pattern, escape="\\"),
                )
            )

        return query

    def find_page(self, filters: KaratFilters) -> tuple[Sequence[KaratMaster], int]:
        """
        Find one page of karats matching filters.

        Returns:
            (items, total_count) where total_count ignores pagination.
        """
        count_query = self._apply_filters(
            select(func.count()).select_from(KaratMaster), filters
        )
        total = self._session.scalar(count_query) or 0

        column = SORTABLE_COLUMNS[filters.sort_by]
        ordering = column.asc() if filters.sort_order == SortOrder.ASC else column.desc()

        query = self._apply_filters(self._base_query(), filters)
        # id breaks ties so pages never overlap
        query = self._apply_window(
            query,
            limit=filters.limit,
            offset=filters.offset,
            order_by=[ordering, KaratMaster.id.asc()],
        )
        return self._session.scalars(query).all(), total

    def find_active_by_division(self, division_id: int) -> Sequence[KaratMaster]:
        """Live karats with status active in a division, ordered by code."""
        query = self._division_query(division_id).where(
            KaratMaster.is_active.is_(True),
            KaratMaster.status == RecordStatus.ACTIVE,
        )
        return self._session.scalars(query.order_by(KaratMaster.code.asc())).all()

    def delete_by_ids(self, entity_ids: Sequence[int]) -> int:
        """
        Hard delete rows by id, live or soft-deleted.

        Returns:
            Number of rows removed. Unknown ids are ignored.
        """
        if not entity_ids:
            return 0
        result = self._session.execute(
            delete(KaratMaster)
            .where(KaratMaster.id.in_(entity_ids))
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0
