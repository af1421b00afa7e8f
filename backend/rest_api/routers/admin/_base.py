"""
Shared dependencies and helpers for admin routers.

This module provides the role dependencies and actor helpers used across
all admin sub-routers.
"""

from typing import Any

from fastapi import Depends

from shared.config.constants import Roles
from shared.security.auth import (
    current_user_context as current_user,
    get_user_email,
    get_user_id,
    require_roles,
)


# =============================================================================
# Role-based Dependencies
# =============================================================================


def require_admin(user: dict = Depends(current_user)) -> dict:
    """Dependency that requires ADMIN role."""
    require_roles(user, [Roles.ADMIN])
    return user


def require_reader(user: dict = Depends(current_user)) -> dict:
    """Dependency for read endpoints: any authenticated actor with a known role."""
    require_roles(user, Roles.ALL)
    return user


# =============================================================================
# Common Utility Functions
# =============================================================================


def actor(user: dict[str, Any]) -> tuple[int, str]:
    """(user_id, user_email) pair stamped on every mutation."""
    return get_user_id(user), get_user_email(user)
