"""
Division Model: organizational scope for master data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import AuditMixin, Base, BigIntPK

if TYPE_CHECKING:
    from .karat import KaratMaster


class Division(AuditMixin, Base):
    """
    Business division (e.g. "Gold", "Silver") that scopes master records.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id/email from AuditMixin.
    """

    __tablename__ = "division"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(200), nullable=False)

    karats: Mapped[list["KaratMaster"]] = relationship(back_populates="division")
