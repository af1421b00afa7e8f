"""
Karat field validation.

Pure functions: no session, no I/O. Each check raises a typed
ValidationError subclass carrying its error_code; the first violated rule
wins, except for missing fields which are reported together.

Usage:
    from rest_api.services.domain.karat_validator import validate_create, validate_update

    clean = validate_create({"karatCode": "k18", "division": 1, ...})
    changes = validate_update({"minimum": 70}, current=karat)
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Mapping

from shared.config.constants import KaratLimits, RecordStatus
from shared.utils.exceptions import (
    InvalidDescriptionError,
    InvalidDivisionError,
    InvalidKaratCodeError,
    InvalidMaximumError,
    InvalidMinimumError,
    InvalidMinMaxRangeError,
    InvalidNumericValueError,
    InvalidPurityError,
    InvalidPurityRangeError,
    InvalidStatusError,
    InvalidValueRangeError,
    RequiredFieldsMissingError,
)
from shared.utils.validators import coerce_entity_id, is_valid_entity_id, normalize_code

REQUIRED_FIELDS: tuple[str, ...] = (
    "code",
    "division_id",
    "description",
    "standard_purity",
    "minimum",
    "maximum",
)
NUMERIC_FIELDS: tuple[str, ...] = ("standard_purity", "minimum", "maximum")

# Wire names accepted next to the canonical ones
FIELD_ALIASES: dict[str, str] = {
    "karatCode": "code",
    "division": "division_id",
    "divisionId": "division_id",
    "standardPurity": "standard_purity",
    "isActive": "active",
}

# Keys that may appear in an update; everything else is dropped
UPDATABLE_FIELDS: frozenset[str] = frozenset(REQUIRED_FIELDS) | {"status", "active"}

_CODE_RE = re.compile(KaratLimits.CODE_PATTERN)
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def canonicalize(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Fold wire aliases onto canonical field names.

    A canonical key wins over its alias when both are supplied.
    """
    result: dict[str, Any] = {}
    for key, value in fields.items():
        name = FIELD_ALIASES.get(key, key)
        if name in result and key != name:
            continue
        result[name] = value
    return result


def parse_number(value: Any) -> float | None:
    """
    Parse a finite number from an int, float, Decimal or numeric text.

    Returns None for booleans, NaN, infinities and anything unparseable.

    >>> parse_number("75.5"), parse_number(True), parse_number("nan")
    (75.5, None, None)
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, Decimal)):
            number = float(value)
        elif isinstance(value, str):
            text = value.strip()
            if not _NUMBER_RE.match(text):
                return None
            number = float(text)
        else:
            return None
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _validate_code(value: Any) -> str:
    if value is None or isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidKaratCodeError(value, KaratLimits.MAX_CODE_LENGTH)
    if isinstance(value, int) and not 0 <= value < 10 ** KaratLimits.MAX_CODE_LENGTH:
        raise InvalidKaratCodeError(value, KaratLimits.MAX_CODE_LENGTH)
    code = normalize_code(str(value))
    if not _CODE_RE.match(code):
        raise InvalidKaratCodeError(value, KaratLimits.MAX_CODE_LENGTH)
    return code


def _validate_description(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidDescriptionError(KaratLimits.MAX_DESCRIPTION_LENGTH)
    description = value.strip()
    if not description or len(description) > KaratLimits.MAX_DESCRIPTION_LENGTH:
        raise InvalidDescriptionError(KaratLimits.MAX_DESCRIPTION_LENGTH)
    return description


def _validate_division(value: Any) -> int:
    if not is_valid_entity_id(value):
        raise InvalidDivisionError(value)
    return coerce_entity_id(value)


def _check_purity_range(purity: float) -> None:
    if not KaratLimits.MIN_PURITY <= purity <= KaratLimits.MAX_PURITY:
        raise InvalidPurityRangeError(purity)


def validate_status(value: Any) -> str:
    """Accept exactly "active" or "inactive"."""
    if isinstance(value, str) and value in RecordStatus.ALL:
        return value
    raise InvalidStatusError(value, RecordStatus.ALL)


def _resolve_status(data: Mapping[str, Any]) -> str:
    """Fold ``status`` and the boolean ``active`` view into one status."""
    status = validate_status(data["status"]) if "status" in data else None

    if "active" in data:
        flag = data["active"]
        if not isinstance(flag, bool):
            raise InvalidStatusError(flag, RecordStatus.ALL)
        from_flag = RecordStatus.ACTIVE if flag else RecordStatus.INACTIVE
        if status is not None and status != from_flag:
            raise InvalidStatusError(f"{status}/active={flag}", RecordStatus.ALL)
        status = from_flag

    return status


def validate_create(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate a full candidate record.

    Returns:
        Normalized fields: code, division_id, description,
        standard_purity, minimum, maximum.

    Raises:
        RequiredFieldsMissingError: Any required field absent or blank.
        InvalidNumericValueError: A numeric field does not parse.
        InvalidPurityRangeError: Purity outside [0, 100].
        InvalidValueRangeError: Negative minimum or maximum.
        InvalidMinMaxRangeError: minimum >= maximum.
        InvalidKaratCodeError / InvalidDescriptionError / InvalidDivisionError
    """
    data = canonicalize(fields)

    missing = [name for name in REQUIRED_FIELDS if _is_blank(data.get(name))]
    if missing:
        raise RequiredFieldsMissingError(list(REQUIRED_FIELDS), missing)

    numbers = {name: parse_number(data[name]) for name in NUMERIC_FIELDS}
    not_numeric = [name for name, number in numbers.items() if number is None]
    if not_numeric:
        raise InvalidNumericValueError(not_numeric)

    purity = numbers["standard_purity"]
    minimum = numbers["minimum"]
    maximum = numbers["maximum"]

    _check_purity_range(purity)

    negative = [
        name
        for name, number in (("minimum", minimum), ("maximum", maximum))
        if number < KaratLimits.MIN_RANGE_VALUE
    ]
    if negative:
        raise InvalidValueRangeError(negative)

    if minimum >= maximum:
        raise InvalidMinMaxRangeError(minimum, maximum)

    return {
        "code": _validate_code(data["code"]),
        "description": _validate_description(data["description"]),
        "division_id": _validate_division(data["division_id"]),
        "standard_purity": purity,
        "minimum": minimum,
        "maximum": maximum,
    }


def validate_update(fields: Mapping[str, Any], current: Any) -> dict[str, Any]:
    """
    Validate a partial update against the persisted record.

    Only supplied fields are checked. The minimum/maximum ordering is always
    checked on the final pair, falling back to ``current`` for the omitted side.

    Args:
        fields: Partial field set (canonical names or wire aliases).
        current: Object exposing the persisted ``minimum`` and ``maximum``.

    Returns:
        Normalized changes, possibly empty. ``active`` is folded into ``status``.
    """
    data = {k: v for k, v in canonicalize(fields).items() if k in UPDATABLE_FIELDS}
    changes: dict[str, Any] = {}

    if "code" in data:
        changes["code"] = _validate_code(data["code"])

    if "division_id" in data:
        changes["division_id"] = _validate_division(data["division_id"])

    if "description" in data:
        changes["description"] = _validate_description(data["description"])

    if "standard_purity" in data:
        purity = parse_number(data["standard_purity"])
        if purity is None:
            raise InvalidPurityError(data["standard_purity"])
        _check_purity_range(purity)
        changes["standard_purity"] = purity

    if "minimum" in data:
        minimum = parse_number(data["minimum"])
        if minimum is None or minimum < KaratLimits.MIN_RANGE_VALUE:
            raise InvalidMinimumError(data["minimum"])
        changes["minimum"] = minimum

    if "maximum" in data:
        maximum = parse_number(data["maximum"])
        if maximum is None or maximum < KaratLimits.MIN_RANGE_VALUE:
            raise InvalidMaximumError(data["maximum"])
        changes["maximum"] = maximum

    if "status" in data or "active" in data:
        changes["status"] = _resolve_status(data)

    final_min = changes.get("minimum", current.minimum)
    final_max = changes.get("maximum", current.maximum)
    if final_min >= final_max:
        raise InvalidMinMaxRangeError(final_min, final_max)

    return changes
