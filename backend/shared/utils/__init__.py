"""
Utilities module: Exceptions, validators.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ForbiddenError,
    ValidationError,
    DuplicateCodeError,
)
from shared.utils.validators import (
    is_valid_entity_id,
    coerce_entity_id,
    find_invalid_ids,
    escape_like_pattern,
    sanitize_search_term,
    normalize_code,
)

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "ForbiddenError",
    "ValidationError",
    "DuplicateCodeError",
    # validators
    "is_valid_entity_id",
    "coerce_entity_id",
    "find_invalid_ids",
    "escape_like_pattern",
    "sanitize_search_term",
    "normalize_code",
]
