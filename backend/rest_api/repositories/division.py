"""
Division Repository - Data access for divisions.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Division
from rest_api.services.crud.repository import BaseRepository
from shared.utils.validators import normalize_code


class DivisionRepository(BaseRepository[Division]):
    """Repository for Division entities."""

    def __init__(self, session: Session):
        super().__init__(Division, session)

    def find_by_code(self, code: str) -> Division | None:
        """Find a division by its (normalized) code, deleted or not."""
        return self._session.scalar(
            select(Division).where(Division.code == normalize_code(code))
        )
