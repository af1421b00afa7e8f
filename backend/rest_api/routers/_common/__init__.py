"""
Common utilities shared across routers.

NOTE: Admin schemas live in shared/utils/admin_schemas.py
(services should not import from routers).
"""

from shared.security.auth import get_user_id, get_user_email
from .pagination import Pagination, get_pagination

__all__ = [
    # Actor helpers
    "get_user_id",
    "get_user_email",
    # Pagination
    "Pagination",
    "get_pagination",
]
