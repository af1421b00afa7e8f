"""
Tests for karat field validation (pure functions, no database).
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from rest_api.services.domain.karat_validator import (
    canonicalize,
    parse_number,
    validate_create,
    validate_status,
    validate_update,
)
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


def _valid(**overrides):
    fields = {
        "code": "k18",
        "division_id": 1,
        "description": "18 karat gold",
        "standard_purity": 75,
        "minimum": 74.5,
        "maximum": 75.5,
    }
    fields.update(overrides)
    return fields


CURRENT = SimpleNamespace(minimum=74.5, maximum=75.5)


class TestParseNumber:
    """Numeric parsing accepts numbers and numeric text only."""

    @pytest.mark.parametrize(
        "value, expected",
        [(75, 75.0), (75.5, 75.5), ("75.5", 75.5), (" 1e2 ", 100.0), (Decimal("0.5"), 0.5)],
    )
    def test_parses_numbers(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", [True, False, None, "", "abc", "nan", "inf", float("nan"), [1]])
    def test_rejects_non_numbers(self, value):
        assert parse_number(value) is None

    def test_rejects_int_beyond_float_range(self):
        assert parse_number(10**400) is None


class TestCanonicalize:
    """Wire aliases fold onto canonical names."""

    def test_aliases_are_folded(self):
        data = canonicalize({"karatCode": "K18", "division": 3, "standardPurity": 75})
        assert data == {"code": "K18", "division_id": 3, "standard_purity": 75}

    def test_canonical_name_wins_over_alias(self):
        data = canonicalize({"division_id": 1, "divisionId": 2})
        assert data["division_id"] == 1

        data = canonicalize({"divisionId": 2, "division_id": 1})
        assert data["division_id"] == 1


class TestValidateCreate:
    """Create validation runs the rules in a fixed order."""

    def test_valid_record_is_normalized(self):
        clean = validate_create(_valid(code="  k18 ", description="  18 karat gold  ", division_id="1"))
        assert clean == {
            "code": "K18",
            "description": "18 karat gold",
            "division_id": 1,
            "standard_purity": 75.0,
            "minimum": 74.5,
            "maximum": 75.5,
        }

    def test_wire_aliases_accepted(self):
        clean = validate_create({
            "karatCode": "K22",
            "division": 2,
            "description": "22 karat gold",
            "standardPurity": "91.6",
            "minimum": "91",
            "maximum": "92",
        })
        assert clean["code"] == "K22"
        assert clean["division_id"] == 2
        assert clean["standard_purity"] == 91.6

    def test_missing_fields_reported_together(self):
        with pytest.raises(RequiredFieldsMissingError) as exc:
            validate_create({"code": "K18", "description": "  "})
        assert exc.value.error_code == "REQUIRED_FIELDS_MISSING"
        assert exc.value.details["missing_fields"] == [
            "division_id",
            "description",
            "standard_purity",
            "minimum",
            "maximum",
        ]

    def test_non_numeric_values(self):
        with pytest.raises(InvalidNumericValueError) as exc:
            validate_create(_valid(standard_purity="abc", maximum="x"))
        assert exc.value.error_code == "INVALID_NUMERIC_VALUES"
        assert exc.value.details["fields"] == ["standard_purity", "maximum"]

    @pytest.mark.parametrize("field", ["standard_purity", "minimum", "maximum"])
    def test_huge_integer_is_not_numeric(self, field):
        with pytest.raises(InvalidNumericValueError) as exc:
            validate_create(_valid(**{field: 10**400}))
        assert exc.value.details["fields"] == [field]

    @pytest.mark.parametrize("purity", [-0.1, 100.01, 150])
    def test_purity_out_of_range(self, purity):
        with pytest.raises(InvalidPurityRangeError):
            validate_create(_valid(standard_purity=purity))

    @pytest.mark.parametrize("purity", [0, 100])
    def test_purity_bounds_inclusive(self, purity):
        assert validate_create(_valid(standard_purity=purity))["standard_purity"] == purity

    def test_negative_range_values(self):
        with pytest.raises(InvalidValueRangeError) as exc:
            validate_create(_valid(minimum=-1, maximum=-0.5))
        assert exc.value.details["fields"] == ["minimum", "maximum"]

    @pytest.mark.parametrize("minimum, maximum", [(75.5, 75.5), (76, 75)])
    def test_minimum_must_be_below_maximum(self, minimum, maximum):
        with pytest.raises(InvalidMinMaxRangeError) as exc:
            validate_create(_valid(minimum=minimum, maximum=maximum))
        assert exc.value.error_code == "INVALID_MIN_MAX_RANGE"

    def test_purity_checked_before_min_max(self):
        with pytest.raises(InvalidPurityRangeError):
            validate_create(_valid(standard_purity=101, minimum=80, maximum=70))

    @pytest.mark.parametrize("code", ["K-18", "K18K18K18K18", "Ä18", True, -18])
    def test_invalid_code(self, code):
        with pytest.raises(InvalidKaratCodeError):
            validate_create(_valid(code=code))

    def test_description_too_long(self):
        with pytest.raises(InvalidDescriptionError):
            validate_create(_valid(description="x" * 201))

    def test_description_at_limit(self):
        assert len(validate_create(_valid(description="x" * 200))["description"]) == 200

    @pytest.mark.parametrize("division", ["abc", 0, -3, 1.5, True])
    def test_invalid_division_reference(self, division):
        with pytest.raises(InvalidDivisionError):
            validate_create(_valid(division_id=division))

    def test_oversized_code_and_division(self):
        with pytest.raises(InvalidKaratCodeError):
            validate_create(_valid(code=10**5000))

        for division in ("1" * 5000, 10**5000):
            with pytest.raises(InvalidDivisionError) as exc:
                validate_create(_valid(division_id=division))
            assert len(exc.value.details["value"]) <= 103


class TestValidateUpdate:
    """Partial updates validate only supplied fields, plus the final range."""

    def test_empty_update_has_no_changes(self):
        assert validate_update({}, CURRENT) == {}

    def test_unknown_fields_are_dropped(self):
        assert validate_update({"id": 9, "created_by_id": 4}, CURRENT) == {}

    def test_minimum_checked_against_persisted_maximum(self):
        with pytest.raises(InvalidMinMaxRangeError):
            validate_update({"minimum": 80}, CURRENT)

    def test_maximum_checked_against_persisted_minimum(self):
        with pytest.raises(InvalidMinMaxRangeError):
            validate_update({"maximum": 74}, CURRENT)

    def test_both_bounds_replaced(self):
        changes = validate_update({"minimum": "80", "maximum": 90}, CURRENT)
        assert changes == {"minimum": 80.0, "maximum": 90.0}

    def test_invalid_purity(self):
        with pytest.raises(InvalidPurityError):
            validate_update({"standard_purity": "high"}, CURRENT)

    def test_purity_range(self):
        with pytest.raises(InvalidPurityRangeError):
            validate_update({"standardPurity": 120}, CURRENT)

    @pytest.mark.parametrize("value", ["abc", -1])
    def test_invalid_minimum(self, value):
        with pytest.raises(InvalidMinimumError):
            validate_update({"minimum": value}, CURRENT)

    @pytest.mark.parametrize("value", [None, -0.5])
    def test_invalid_maximum(self, value):
        with pytest.raises(InvalidMaximumError):
            validate_update({"maximum": value}, CURRENT)

    @pytest.mark.parametrize(
        "field, error",
        [
            ("standardPurity", InvalidPurityError),
            ("minimum", InvalidMinimumError),
            ("maximum", InvalidMaximumError),
        ],
    )
    def test_huge_integer_rejected_per_field(self, field, error):
        with pytest.raises(error):
            validate_update({field: 10**400}, CURRENT)

    def test_code_normalized(self):
        assert validate_update({"karatCode": " k22 "}, CURRENT) == {"code": "K22"}

    def test_active_flag_folds_into_status(self):
        assert validate_update({"isActive": False}, CURRENT) == {"status": "inactive"}
        assert validate_update({"active": True}, CURRENT) == {"status": "active"}

    def test_status_and_matching_flag(self):
        assert validate_update({"status": "inactive", "active": False}, CURRENT) == {
            "status": "inactive"
        }

    def test_conflicting_status_and_flag(self):
        with pytest.raises(InvalidStatusError):
            validate_update({"status": "active", "active": False}, CURRENT)

    def test_non_boolean_flag(self):
        with pytest.raises(InvalidStatusError):
            validate_update({"active": "yes"}, CURRENT)


class TestValidateStatus:
    """Status values are an exact, closed set."""

    @pytest.mark.parametrize("value", ["active", "inactive"])
    def test_accepts_known_statuses(self, value):
        assert validate_status(value) == value

    @pytest.mark.parametrize("value", ["archived", "", None, 1, "ACTIVE", " inactive ", "Inactive"])
    def test_rejects_unknown_statuses(self, value):
        with pytest.raises(InvalidStatusError) as exc:
            validate_status(value)
        assert exc.value.error_code == "INVALID_STATUS"
        assert exc.value.status_code == 400
