"""
Division Service - the organizational scope karats belong to.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Division
from rest_api.repositories import DivisionRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import KaratLimits
from shared.config.logging import get_logger
from shared.utils.admin_schemas import DivisionOutput
from shared.utils.exceptions import DuplicateEntityError, ValidationError
from shared.utils.validators import normalize_code

logger = get_logger(__name__)


class DivisionService(BaseCRUDService[Division, DivisionOutput]):
    """
    Service for division management.

    Business rules:
    - Division codes are uppercase, unique and at most 10 characters
    """

    def __init__(self, db: Session):
        self._divisions = DivisionRepository(db)
        super().__init__(
            db=db,
            model=Division,
            output_schema=DivisionOutput,
            entity_name="Division",
            repository=self._divisions,
        )

    def list_divisions(self) -> list[DivisionOutput]:
        """Live divisions ordered by code."""
        return self.list_all(order_by=Division.code)

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        code = data.get("code")
        description = data.get("description")

        if not isinstance(code, str) or not code.strip():
            raise ValidationError("Division code is required", details={"field": "code"})
        code = normalize_code(code)
        if len(code) > KaratLimits.MAX_CODE_LENGTH or not (code.isascii() and code.isalnum()):
            raise ValidationError(
                f"Division code must be 1-{KaratLimits.MAX_CODE_LENGTH} letters and numbers",
                details={"field": "code", "value": code},
            )

        if not isinstance(description, str) or not description.strip():
            raise ValidationError(
                "Division description is required", details={"field": "description"}
            )
        description = description.strip()
        if len(description) > KaratLimits.MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Division description cannot exceed {KaratLimits.MAX_DESCRIPTION_LENGTH} characters",
                details={"field": "description"},
            )

        if self._divisions.find_by_code(code) is not None:
            raise DuplicateEntityError("Division", code)

        return {"code": code, "description": description}

    def _on_integrity_error(self, error: IntegrityError, data: dict[str, Any]) -> Exception:
        return DuplicateEntityError("Division", data.get("code"))

    def _after_create(self, entity: Division, user_id: int | None, user_email: str | None) -> None:
        logger.info("Division created", division_id=entity.id, code=entity.code, user_id=user_id)
