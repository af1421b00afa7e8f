"""
Domain Services - Clean Architecture Application Layer.

CLEAN-ARCH: Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import KaratService

    # In router
    service = KaratService(db)
    karats = service.list_by_division(division_id)
"""

from .division_service import DivisionService
from .karat_service import KaratService
from .karat_bulk_service import KaratBulkService
from .karat_validator import validate_create, validate_update, validate_status

__all__ = [
    "DivisionService",
    "KaratService",
    "KaratBulkService",
    # Validation
    "validate_create",
    "validate_update",
    "validate_status",
]
