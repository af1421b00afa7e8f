"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, RecordStatus, KaratLimits

    if status not in RecordStatus.ALL:
        ...

    if len(code) > KaratLimits.MAX_CODE_LENGTH:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """Actor role constants."""

    ADMIN: Final[str] = "ADMIN"
    MANAGER: Final[str] = "MANAGER"
    VIEWER: Final[str] = "VIEWER"

    ALL: Final[list[str]] = [ADMIN, MANAGER, VIEWER]


# =============================================================================
# Entity Status Constants
# =============================================================================


class RecordStatus:
    """Business status of a master record (independent of soft delete)."""

    ACTIVE: Final[str] = "active"
    INACTIVE: Final[str] = "inactive"

    ALL: Final[tuple[str, ...]] = (ACTIVE, INACTIVE)

    @staticmethod
    def flipped(status: str) -> str:
        """Return the opposite status."""
        return RecordStatus.INACTIVE if status == RecordStatus.ACTIVE else RecordStatus.ACTIVE


class SortOrder:
    """Sort direction constants for list endpoints."""

    ASC: Final[str] = "asc"
    DESC: Final[str] = "desc"

    ALL: Final[tuple[str, ...]] = (ASC, DESC)


# =============================================================================
# Validation Constants
# =============================================================================


class KaratLimits:
    """Karat master validation limits."""

    MAX_CODE_LENGTH: Final[int] = 10
    MAX_DESCRIPTION_LENGTH: Final[int] = 200

    MIN_PURITY: Final[float] = 0.0
    MAX_PURITY: Final[float] = 100.0

    # Minimum/maximum acceptance bounds are only bounded below
    MIN_RANGE_VALUE: Final[float] = 0.0

    CODE_PATTERN: Final[str] = r"^[A-Z0-9]{1,10}$"


class Limits:
    """Generic validation limits."""

    MAX_SEARCH_TERM_LENGTH: Final[int] = 100

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 200

    # Storage identifiers are BigInteger primary keys
    MAX_ENTITY_ID: Final[int] = 2**63 - 1

    # Upper bound for a single bulk request
    MAX_BULK_IDS: Final[int] = 1000
