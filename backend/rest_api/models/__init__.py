"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and AuditMixin
- division: Division
- karat: KaratMaster
"""

# Base classes
from .base import Base, AuditMixin

# Organizational scope
from .division import Division

# Master data
from .karat import KaratMaster

__all__ = [
    # Base
    "Base",
    "AuditMixin",
    # Division
    "Division",
    # Karat
    "KaratMaster",
]
