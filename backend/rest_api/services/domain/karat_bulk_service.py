"""
Karat bulk operations.

Bulk requests only fail on malformed input: a missing or empty id list, a
malformed id, or an unknown status. Ids that match nothing are simply not
counted.
"""

from __future__ import annotations

from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import KaratMaster
from rest_api.repositories import KaratRepository
from rest_api.services.base_service import BaseService
from rest_api.services.crud.soft_delete import set_updated_by
from rest_api.services.domain.karat_validator import validate_status
from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import BulkDeleteResult, BulkStatusResult
from shared.utils.exceptions import (
    DatabaseError,
    IdsRequiredError,
    InvalidIdFormatError,
    ValidationError,
)
from shared.utils.validators import IdPredicate, coerce_entity_id, find_invalid_ids, is_valid_entity_id

logger = get_logger(__name__)


class KaratBulkService(BaseService[KaratMaster]):
    """
    Bulk hard delete and bulk status update.

    Identifier format is checked by ``id_validator`` and parsed by ``id_parser``.

    Usage:
        service = KaratBulkService(db)
        result = service.bulk_update_status([3, 1, 2], "inactive", user_id, email)
        result.matched_count, result.modified_count
    """

    def __init__(
        self,
        db: Session,
        id_validator: IdPredicate = is_valid_entity_id,
        id_parser: Callable[[Any], int] = coerce_entity_id,
    ):
        self._karats = KaratRepository(db)
        super().__init__(db, KaratMaster, self._karats)
        self._id_validator = id_validator
        self._id_parser = id_parser

    def _parse_ids(self, ids: Any) -> list[int]:
        """
        Validate an id list and return unique ids in ascending order.

        Raises:
            IdsRequiredError: Missing, empty, or not a list.
            InvalidIdFormatError: Lists every id the predicate rejects.
        """
        if not isinstance(ids, (list, tuple)) or not ids:
            raise IdsRequiredError()

        invalid = find_invalid_ids(ids, self._id_validator)
        if invalid:
            raise InvalidIdFormatError(invalid)

        if len(ids) > Limits.MAX_BULK_IDS:
            raise ValidationError(
                f"At most {Limits.MAX_BULK_IDS} ids per request",
                error_code="TOO_MANY_IDS",
                details={"max": Limits.MAX_BULK_IDS, "received": len(ids)},
            )

        return sorted({self._id_parser(i) for i in ids})

    def bulk_hard_delete(self, ids: Any) -> BulkDeleteResult:
        """
        Permanently remove every matching karat, live or soft-deleted.

        Returns:
            deleted_count (rows removed) and requested_count (ids received).
        """
        entity_ids = self._parse_ids(ids)

        try:
            deleted = self._karats.delete_by_ids(entity_ids)
            safe_commit(self._db)
        except SQLAlchemyError as e:
            logger.error("Bulk karat delete failed", error=str(e), requested=len(ids))
            raise DatabaseError("bulk delete karats") from e

        logger.info("Karats bulk deleted", deleted_count=deleted, requested_count=len(ids))
        return BulkDeleteResult(deleted_count=deleted, requested_count=len(ids))

    def bulk_update_status(
        self,
        ids: Any,
        status: Any,
        user_id: int | None,
        user_email: str | None,
    ) -> BulkStatusResult:
        """
        Apply a status to every live matching karat.

        Only rows whose status actually changes are stamped with the actor.

        Returns:
            matched_count (live rows found), modified_count (rows changed)
            and requested_count (ids received).
        """
        if not isinstance(ids, (list, tuple)) or not ids:
            raise IdsRequiredError()
        new_status = validate_status(status)
        entity_ids = self._parse_ids(ids)

        entities = self._karats.find_by_ids(entity_ids)
        modified = 0
        for entity in entities:
            if entity.set_status(new_status):
                set_updated_by(entity, user_id, user_email)
                modified += 1

        try:
            safe_commit(self._db)
        except SQLAlchemyError as e:
            logger.error("Bulk karat status update failed", error=str(e), requested=len(ids))
            raise DatabaseError("bulk update karat status") from e

        logger.info(
            "Karats bulk status updated",
            status=new_status,
            matched_count=len(entities),
            modified_count=modified,
            user_id=user_id,
        )
        return BulkStatusResult(
            matched_count=len(entities),
            modified_count=modified,
            requested_count=len(ids),
        )
