"""
Pydantic schemas for admin API endpoints.
Centralized to avoid circular imports between routers and services.

Request bodies are deliberately loose (``Any``): field rules live in the
karat validator so every failure surfaces with its own error_code instead
of a generic schema error. Both snake_case names and the camelCase wire
names are accepted.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field


# =============================================================================
# Division Schemas
# =============================================================================


class DivisionSummary(BaseModel):
    id: int
    code: str
    description: str

    model_config = {"from_attributes": True}


class DivisionOutput(BaseModel):
    id: int
    code: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class DivisionCreate(BaseModel):
    code: Any = None
    description: Any = None


# =============================================================================
# Karat Schemas
# =============================================================================


class KaratOutput(BaseModel):
    """
    Karat as returned by the API.

    ``status`` is the business state and ``active`` its boolean view.
    ``is_active`` False plus ``deleted_at`` marks a soft-deleted record.
    """

    id: int
    code: str
    division_id: int
    division: DivisionSummary | None = None
    description: str
    standard_purity: float
    minimum: float
    maximum: float
    status: str
    active: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    created_by_id: int | None = None
    created_by_email: str | None = None
    updated_by_id: int | None = None
    updated_by_email: str | None = None
    deleted_by_id: int | None = None
    deleted_by_email: str | None = None

    model_config = {"from_attributes": True}


class KaratCreate(BaseModel):
    code: Any = Field(default=None, validation_alias=AliasChoices("code", "karatCode"))
    division_id: Any = Field(
        default=None, validation_alias=AliasChoices("division_id", "division", "divisionId")
    )
    description: Any = None
    standard_purity: Any = Field(
        default=None, validation_alias=AliasChoices("standard_purity", "standardPurity")
    )
    minimum: Any = None
    maximum: Any = None


class KaratUpdate(KaratCreate):
    """Partial update. Only fields present in the body are applied."""

    status: Any = None
    active: Any = Field(default=None, validation_alias=AliasChoices("active", "isActive"))


# =============================================================================
# Bulk Schemas
# =============================================================================


class BulkDeleteRequest(BaseModel):
    ids: Any = None


class BulkStatusRequest(BaseModel):
    ids: Any = None
    status: Any = None


class BulkDeleteResult(BaseModel):
    deleted_count: int
    requested_count: int


class BulkStatusResult(BaseModel):
    matched_count: int
    modified_count: int
    requested_count: int
