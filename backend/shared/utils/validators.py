"""
Shared validators for input sanitization and identifier formats.
"""

import re
from typing import Any, Callable, Iterable

from shared.config.constants import Limits

# Predicate deciding whether a value is a well-formed storage identifier
IdPredicate = Callable[[Any], bool]

_DIGITS_RE = re.compile(r"^[0-9]+$")

# Longer digit strings are out of BigInteger range
_MAX_ID_DIGITS = len(str(Limits.MAX_ENTITY_ID))


def is_valid_entity_id(value: Any) -> bool:
    """
    Check that a value is a well-formed storage identifier.

    Identifiers are BigInteger primary keys, so a positive int (booleans
    excluded) or a string of decimal digits within range is accepted.

    >>> is_valid_entity_id(12), is_valid_entity_id("12"), is_valid_entity_id("12a")
    (True, True, False)
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 < value <= Limits.MAX_ENTITY_ID
    if isinstance(value, str):
        candidate = value.strip()
        if len(candidate) > _MAX_ID_DIGITS or not _DIGITS_RE.match(candidate):
            return False
        return 0 < int(candidate) <= Limits.MAX_ENTITY_ID
    return False


def coerce_entity_id(value: Any) -> int:
    """
    Convert an identifier that passed is_valid_entity_id to int.

    Raises:
        ValueError: If the value is not a valid identifier.
    """
    if not is_valid_entity_id(value):
        raise ValueError(f"Invalid identifier: {value!r}")
    return int(value.strip()) if isinstance(value, str) else int(value)


def find_invalid_ids(ids: Iterable[Any], predicate: IdPredicate = is_valid_entity_id) -> list[Any]:
    """Return every id rejected by the predicate, in input order."""
    return [entity_id for entity_id in ids if not predicate(entity_id)]


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards; they are escaped with a backslash so a
    search term is matched literally.
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


def sanitize_search_term(term: str | None, max_length: int = Limits.MAX_SEARCH_TERM_LENGTH) -> str:
    """
    Sanitize search term for safe use in queries.

    Trims whitespace, limits length and strips control characters.
    """
    if not term:
        return ""

    term = term.strip()

    if len(term) > max_length:
        term = term[:max_length]

    # Remove null bytes and other control characters
    term = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", term)

    return term


def normalize_code(code: str) -> str:
    """Master codes are compared and stored trimmed and uppercased."""
    return code.strip().upper()
