"""
Karat Master Model: purity standards scoped to a division.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import RecordStatus
from .base import AuditMixin, Base, BigIntPK

if TYPE_CHECKING:
    from .division import Division


class KaratMaster(AuditMixin, Base):
    """
    Karat purity standard: a coded purity value plus its acceptance range.

    ``status`` is the business state; ``active`` is derived from it and can
    never disagree. Soft delete uses the AuditMixin ``is_active`` marker.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id/email from AuditMixin.
    """

    __tablename__ = "karat_master"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # "K18", "K22"
    division_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("division.id"), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    standard_purity: Mapped[float] = mapped_column(Float, nullable=False)  # percent, 75.0 for 18K
    minimum: Mapped[float] = mapped_column(Float, nullable=False)
    maximum: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RecordStatus.ACTIVE, index=True
    )

    division: Mapped["Division"] = relationship(back_populates="karats")

    __table_args__ = (
        # Soft-deleted rows keep their code reserved
        UniqueConstraint("code", "division_id", name="uq_karat_code_division"),
        CheckConstraint(
            "standard_purity >= 0 AND standard_purity <= 100",
            name="ck_karat_purity_range",
        ),
        CheckConstraint("minimum >= 0 AND maximum >= 0", name="ck_karat_non_negative"),
        CheckConstraint("minimum < maximum", name="ck_karat_min_below_max"),
        CheckConstraint("status IN ('active', 'inactive')", name="ck_karat_status"),
        Index("ix_karat_created_at", "created_at"),
    )

    @hybrid_property
    def active(self) -> bool:
        """Business active flag, derived from status."""
        return self.status == RecordStatus.ACTIVE

    @active.inplace.expression
    @classmethod
    def _active_expression(cls):
        return cls.status == RecordStatus.ACTIVE

    def set_status(self, status: str) -> bool:
        """
        Apply a status transition.

        Returns:
            True if the value changed.
        """
        if self.status == status:
            return False
        self.status = status
        return True
