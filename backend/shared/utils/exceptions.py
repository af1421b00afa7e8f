"""
Centralized HTTP exceptions for consistent error handling.

Every exception carries a machine-readable ``error_code`` and a ``details``
dict next to the human-readable ``detail``. The REST layer turns them into
the standard ``{success, message, error_code, details}`` envelope.

Usage:
    from shared.utils.exceptions import NotFoundError, DuplicateCodeError

    raise NotFoundError("Karat", karat_id)
    raise DuplicateCodeError("K18", division_id=3)
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)

# Longest rendering of a rejected value echoed back in details
MAX_RENDERED_VALUE = 100


def render_value(value: Any) -> str:
    """Render a rejected input for messages, truncated and never raising."""
    try:
        text = str(value)
    except ValueError:
        return f"<{type(value).__name__} too large>"
    if len(text) > MAX_RENDERED_VALUE:
        return text[:MAX_RENDERED_VALUE] + "..."
    return text


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    error_code: str = "APP_ERROR"

    def __init__(
        self,
        status_code: int,
        detail: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}

        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, error_code=self.error_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def to_dict(self) -> dict[str, Any]:
        """Response envelope for this error."""
        return {
            "success": False,
            "message": self.detail,
            "error_code": self.error_code,
            "details": self.details,
        }


# =============================================================================
# 401 / 403 Errors
# =============================================================================


class AuthenticationError(AppException):
    """Missing or invalid credentials (401)."""

    error_code = "UNAUTHORIZED"

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("delete karats")
    """

    error_code = "FORBIDDEN"

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            action=action,
            **log_context,
        )


class InsufficientRoleError(ForbiddenError):
    """Actor doesn't have the required role."""

    def __init__(self, required_roles: list[str], **log_context: Any):
        roles_str = ", ".join(required_roles)
        super().__init__(
            f"perform this action (requires role: {roles_str})",
            required_roles=required_roles,
            **log_context,
        )


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Karat", 123)
    """

    error_code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            details={"entity": entity, "id": entity_id},
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Quantity must be positive", field="quantity")
    """

    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        detail: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        **log_context: Any,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
            details=details,
            **log_context,
        )


class RequiredFieldsMissingError(ValidationError):
    """One or more mandatory create fields are absent."""

    error_code = "REQUIRED_FIELDS_MISSING"

    def __init__(self, required: list[str], missing: list[str], **log_context: Any):
        super().__init__(
            f"All fields are required: {', '.join(required)}",
            details={"missing_fields": missing},
            missing_fields=missing,
            **log_context,
        )


class InvalidNumericValueError(ValidationError):
    """A numeric field does not parse as a finite number (create)."""

    error_code = "INVALID_NUMERIC_VALUES"

    def __init__(self, fields: list[str], **log_context: Any):
        super().__init__(
            "Standard purity, minimum, and maximum must be valid numbers",
            details={"fields": fields},
            fields=fields,
            **log_context,
        )


class InvalidPurityRangeError(ValidationError):
    """Standard purity outside [0, 100]."""

    error_code = "INVALID_PURITY_RANGE"

    def __init__(self, value: float, **log_context: Any):
        super().__init__(
            "Standard purity must be between 0 and 100",
            details={"field": "standard_purity", "value": value},
            value=value,
            **log_context,
        )


class InvalidValueRangeError(ValidationError):
    """Minimum or maximum is negative (create)."""

    error_code = "INVALID_VALUE_RANGE"

    def __init__(self, fields: list[str], **log_context: Any):
        super().__init__(
            "Minimum and maximum values cannot be negative",
            details={"fields": fields},
            fields=fields,
            **log_context,
        )


class InvalidMinMaxRangeError(ValidationError):
    """Minimum is not strictly below maximum."""

    error_code = "INVALID_MIN_MAX_RANGE"

    def __init__(self, minimum: float, maximum: float, **log_context: Any):
        super().__init__(
            "Minimum value must be less than maximum value",
            details={"minimum": minimum, "maximum": maximum},
            minimum=minimum,
            maximum=maximum,
            **log_context,
        )


class InvalidPurityError(ValidationError):
    """Standard purity supplied on update is not a number."""

    error_code = "INVALID_PURITY"

    def __init__(self, value: Any, **log_context: Any):
        super().__init__(
            "Standard purity must be a valid number",
            details={"field": "standard_purity", "value": render_value(value)},
            **log_context,
        )


class InvalidMinimumError(ValidationError):
    """Minimum supplied on update is not a non-negative number."""

    error_code = "INVALID_MINIMUM"

    def __init__(self, value: Any, **log_context: Any):
        super().__init__(
            "Minimum must be a valid non-negative number",
            details={"field": "minimum", "value": render_value(value)},
            **log_context,
        )


class InvalidMaximumError(ValidationError):
    """Maximum supplied on update is not a non-negative number."""

    error_code = "INVALID_MAXIMUM"

    def __init__(self, value: Any, **log_context: Any):
        super().__init__(
            "Maximum must be a valid non-negative number",
            details={"field": "maximum", "value": render_value(value)},
            **log_context,
        )


class InvalidKaratCodeError(ValidationError):
    """Code is empty, too long, or not uppercase alphanumeric."""

    error_code = "INVALID_KARAT_CODE"

    def __init__(self, value: Any, max_length: int, **log_context: Any):
        super().__init__(
            f"Karat code must be 1-{max_length} uppercase letters and numbers",
            details={"field": "code", "value": render_value(value)},
            **log_context,
        )


class InvalidDescriptionError(ValidationError):
    """Description is empty or too long."""

    error_code = "INVALID_DESCRIPTION"

    def __init__(self, max_length: int, **log_context: Any):
        super().__init__(
            f"Description is required and cannot exceed {max_length} characters",
            details={"field": "description", "max_length": max_length},
            **log_context,
        )


class InvalidDivisionError(ValidationError):
    """Division reference is malformed or does not resolve."""

    error_code = "INVALID_DIVISION"

    def __init__(self, value: Any, **log_context: Any):
        super().__init__(
            f"Invalid division: {render_value(value)}",
            details={"field": "division_id", "value": render_value(value)},
            **log_context,
        )


class InvalidStatusError(ValidationError):
    """Status outside {active, inactive}."""

    error_code = "INVALID_STATUS"

    def __init__(self, value: Any, allowed: tuple[str, ...], **log_context: Any):
        allowed_str = " or ".join(f"'{s}'" for s in allowed)
        super().__init__(
            f"Status must be either {allowed_str}",
            details={"value": render_value(value), "allowed": list(allowed)},
            **log_context,
        )


class IdsRequiredError(ValidationError):
    """Bulk operation received no identifiers."""

    error_code = "IDS_REQUIRED"

    def __init__(self, **log_context: Any):
        super().__init__("IDs array is required and cannot be empty", **log_context)


class InvalidIdFormatError(ValidationError):
    """One or more identifiers are malformed. Names every offender."""

    error_code = "INVALID_ID_FORMAT"

    def __init__(self, invalid_ids: list[Any], **log_context: Any):
        rendered = [render_value(i) for i in invalid_ids]
        super().__init__(
            f"Invalid ID format for: {', '.join(rendered)}",
            details={"invalid_ids": rendered},
            invalid_ids=rendered,
            **log_context,
        )


class DuplicateEntityError(ValidationError):
    """Entity already exists."""

    error_code = "DUPLICATE_ENTITY"

    def __init__(self, entity: str, identifier: str | None = None, **log_context: Any):
        if identifier:
            detail = f"{entity} with identifier '{identifier}' already exists"
        else:
            detail = f"{entity} already exists"

        super().__init__(
            detail,
            details={"entity": entity, "identifier": identifier},
            entity=entity,
            identifier=identifier,
            **log_context,
        )


class DuplicateCodeError(DuplicateEntityError):
    """Karat code already used within the division."""

    error_code = "DUPLICATE_CODE"

    def __init__(self, code: str, division_id: int | None = None, **log_context: Any):
        super().__init__("Karat code", code, division_id=division_id, **log_context)
        self.detail = f"Karat code '{code}' already exists in this division"
        self.details["division_id"] = division_id


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """Internal server error (500)."""

    error_code = "INTERNAL_ERROR"

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    error_code = "DATABASE_ERROR"

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error during {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)
