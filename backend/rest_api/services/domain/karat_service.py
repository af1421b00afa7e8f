"""
Karat Service - Clean Architecture Implementation.

CLEAN-ARCH: Handles the karat master lifecycle.
Uses Repository for data access, not direct queries.

Usage:
    from rest_api.services.domain import KaratService

    service = KaratService(db)
    karat = service.create(data, user_id, user_email)
    karats = service.list_by_division(division_id)
    service.toggle_status(karat.id, user_id, user_email)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import KaratMaster
from rest_api.repositories import DivisionRepository, KaratFilters, KaratRepository
from rest_api.services.base_service import DivisionScopedService
from rest_api.services.domain.karat_validator import (
    validate_create,
    validate_status,
    validate_update,
)
from shared.config.constants import RecordStatus
from shared.config.logging import get_logger
from shared.utils.admin_schemas import KaratOutput
from shared.utils.exceptions import DuplicateCodeError, InvalidDivisionError
from shared.utils.schemas import PaginationMeta

logger = get_logger(__name__)


class KaratService(DivisionScopedService[KaratMaster, KaratOutput]):
    """
    Service for karat master management.

    Business rules:
    - Codes are uppercase and unique per division, soft-deleted rows included
    - 0 <= standard_purity <= 100, minimum/maximum >= 0, minimum < maximum
    - status is the only business state; active is derived from it
    - Soft delete is orthogonal to status and keeps the row readable by id
    """

    def __init__(self, db: Session):
        self._karats = KaratRepository(db)
        self._divisions = DivisionRepository(db)
        super().__init__(
            db=db,
            model=KaratMaster,
            output_schema=KaratOutput,
            entity_name="Karat",
            repository=self._karats,
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_by_id(self, entity_id: int, **kwargs: Any) -> KaratOutput:
        """
        Get a karat by id.

        Soft-deleted karats are returned too, with is_active False and
        deleted_at set.
        """
        kwargs.setdefault("include_deleted", True)
        return super().get_by_id(entity_id, **kwargs)

    def list(self, filters: KaratFilters) -> tuple[list[KaratOutput], PaginationMeta]:
        """
        Filtered, sorted and paginated listing.

        Returns:
            (items, pagination metadata)
        """
        if filters.status is not None:
            filters.status = validate_status(filters.status)

        entities, total = self._karats.find_page(filters)
        meta = PaginationMeta.build(filters.page, filters.limit, total)
        return [self.to_output(e) for e in entities], meta

    def list_by_division(self, division_id: int) -> list[KaratOutput]:
        """Active, non-deleted karats of a division ordered by code."""
        entities = self._karats.find_active_by_division(division_id)
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Command Methods
    # =========================================================================

    def set_status(
        self,
        entity_id: int,
        status: Any,
        user_id: int | None,
        user_email: str | None,
    ) -> KaratOutput:
        """Single status transition entry point."""
        return self.update(entity_id, {"status": status}, user_id, user_email)

    def toggle_status(
        self,
        entity_id: int,
        user_id: int | None,
        user_email: str | None,
    ) -> KaratOutput:
        """Flip active <-> inactive on a live karat."""
        entity = self.get_entity(entity_id)
        return self.set_status(
            entity_id, RecordStatus.flipped(entity.status), user_id, user_email
        )

    def hard_delete(self, entity_id: int) -> KaratOutput:
        snapshot = super().hard_delete(entity_id)
        logger.info(
            "Karat permanently deleted",
            karat_id=entity_id,
            code=snapshot.code,
            division_id=snapshot.division_id,
        )
        return snapshot

    def restore(self, entity_id: int, user_id: int | None, user_email: str | None) -> KaratOutput:
        restored = super().restore(entity_id, user_id, user_email)
        logger.info("Karat restored", karat_id=entity_id, user_id=user_id)
        return restored

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Validate fields, then division existence, then code uniqueness."""
        clean = validate_create(data)

        self._ensure_division_exists(clean["division_id"])

        if self._karats.code_exists(clean["code"], clean["division_id"]):
            raise DuplicateCodeError(clean["code"], division_id=clean["division_id"])

        clean["status"] = RecordStatus.ACTIVE
        return clean

    def _validate_update(self, entity: KaratMaster, data: dict[str, Any]) -> dict[str, Any]:
        """Validate the partial set against current values."""
        changes = validate_update(data, entity)

        division_id = changes.get("division_id", entity.division_id)
        code = changes.get("code", entity.code)

        if division_id != entity.division_id:
            self._ensure_division_exists(division_id)

        if code != entity.code or division_id != entity.division_id:
            if self._karats.code_exists(code, division_id, exclude_id=entity.id):
                raise DuplicateCodeError(code, division_id=division_id)

        return changes

    def _ensure_division_exists(self, division_id: int) -> None:
        if not self._divisions.exists(division_id):
            raise InvalidDivisionError(division_id)

    def _on_integrity_error(self, error: IntegrityError, data: dict[str, Any]) -> Exception:
        # Lost a race with a concurrent writer on uq_karat_code_division
        return DuplicateCodeError(data.get("code", ""), division_id=data.get("division_id"))

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def _after_create(self, entity: KaratMaster, user_id: int | None, user_email: str | None) -> None:
        logger.info(
            "Karat created",
            karat_id=entity.id,
            code=entity.code,
            division_id=entity.division_id,
            user_id=user_id,
        )

    def _after_update(
        self,
        entity: KaratMaster,
        old_values: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
    ) -> None:
        changed = sorted(k for k, v in old_values.items() if getattr(entity, k) != v)
        logger.info(
            "Karat updated",
            karat_id=entity.id,
            changed_fields=changed,
            status=entity.status,
            user_id=user_id,
        )

    def _after_delete(self, entity: KaratMaster, user_id: int | None, user_email: str | None) -> None:
        logger.info("Karat soft-deleted", karat_id=entity.id, code=entity.code, user_id=user_id)
