"""
SQLAlchemy models for Interview Calendar Sync.

This module exports all database models for easy importing and
ensures Alembic can discover them for migrations.
"""

from src.models.base import Base, BaseModel, GUID
from src.models.integrations import CalendarIntegration

__all__ = [
    "Base",
    "BaseModel",
    "GUID",
    "CalendarIntegration",
]
