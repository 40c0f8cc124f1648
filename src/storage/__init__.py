"""
Persistence for calendar integrations.

Provides the database-backed IntegrationStore used by the sync client.
"""

from src.storage.integration_store import SQLAlchemyIntegrationStore

__all__ = ["SQLAlchemyIntegrationStore"]
