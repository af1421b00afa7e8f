"""
Repository Pattern implementation for the domain entities.

Usage:
    from rest_api.repositories import KaratRepository, KaratFilters

    repo = KaratRepository(db)
    items, total = repo.find_page(KaratFilters(division_id=1, search="18"))
    taken = repo.code_exists("K18", division_id=1)
"""

from .base import RepositoryFilters
from .division import DivisionRepository
from .karat import KaratRepository, KaratFilters, SORTABLE_COLUMNS

__all__ = [
    # Base
    "RepositoryFilters",
    # Division
    "DivisionRepository",
    # Karat
    "KaratRepository",
    "KaratFilters",
    "SORTABLE_COLUMNS",
]
