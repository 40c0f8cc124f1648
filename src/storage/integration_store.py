"""
Database-backed integration store.

Implements the IntegrationStore protocol over the calendar_integrations
table, plus the save/delete operations used when a user connects or
disconnects their calendar.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.calendar_sync.exceptions import IntegrationNotFoundError
from src.calendar_sync.protocols import IntegrationStore
from src.calendar_sync.types import IntegrationRecord
from src.models.integrations import CalendarIntegration

logger = logging.getLogger(__name__)


class SQLAlchemyIntegrationStore(IntegrationStore):
    """
    IntegrationStore implementation using async SQLAlchemy.

    Each call opens its own session, so concurrent operations for
    different users never share a transaction. Concurrent refreshes for the
    same user are last-write-wins.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: str = "google",
    ):
        """
        Initialize the store.

        Args:
            session_factory: Factory for async sessions
            provider: Calendar provider whose integrations are managed
        """
        self._session_factory = session_factory
        self._provider = provider

    async def _get_row(
        self,
        session: AsyncSession,
        user_id: str,
        include_deleted: bool = False,
    ) -> Optional[CalendarIntegration]:
        stmt = select(CalendarIntegration).where(
            CalendarIntegration.user_id == user_id,
            CalendarIntegration.provider == self._provider,
        )
        if not include_deleted:
            stmt = stmt.where(CalendarIntegration.deleted_at.is_(None))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_integration(self, user_id: str) -> Optional[IntegrationRecord]:
        """
        Get a user's active integration.

        Args:
            user_id: The user's ID

        Returns:
            IntegrationRecord if found, None otherwise
        """
        async with self._session_factory() as session:
            row = await self._get_row(session, user_id)
            if row is None:
                return None
            return IntegrationRecord(
                user_id=row.user_id,
                access_token=row.access_token,
                refresh_token=row.refresh_token,
                token_expiry=row.token_expiry,
            )

    async def update_tokens(
        self,
        user_id: str,
        access_token: str,
        expires_in: int,
    ) -> None:
        """
        Store a refreshed access token and its absolute expiry.

        Args:
            user_id: The user's ID
            access_token: New access token
            expires_in: Token lifetime in seconds from now

        Raises:
            IntegrationNotFoundError: If the integration was removed meanwhile
        """
        async with self._session_factory() as session:
            row = await self._get_row(session, user_id)
            if row is None:
                raise IntegrationNotFoundError(user_id)

            now = datetime.now(timezone.utc)
            row.access_token = access_token
            row.token_expiry = now + timedelta(seconds=expires_in)
            row.updated_at = now
            await session.commit()

        logger.info(f"Updated OAuth token for user {user_id}")

    async def save_integration(
        self,
        user_id: str,
        access_token: str,
        refresh_token: str,
        token_expiry: datetime,
    ) -> CalendarIntegration:
        """
        Create or replace a user's integration.

        Args:
            user_id: The user's ID
            access_token: Access token from authorization
            refresh_token: Refresh token from authorization
            token_expiry: When the access token expires

        Returns:
            The saved CalendarIntegration
        """
        async with self._session_factory() as session:
            # A disconnected row is revived; user_id/provider is unique
            existing = await self._get_row(session, user_id, include_deleted=True)

            if existing:
                existing.deleted_at = None
                existing.access_token = access_token
                existing.refresh_token = refresh_token
                existing.token_expiry = token_expiry
                existing.updated_at = datetime.now(timezone.utc)
                await session.commit()
                logger.info(f"Updated calendar integration for user {user_id}")
                return existing

            integration = CalendarIntegration(
                user_id=user_id,
                provider=self._provider,
                access_token=access_token,
                refresh_token=refresh_token,
                token_expiry=token_expiry,
            )
            session.add(integration)
            await session.commit()
            await session.refresh(integration)

        logger.info(f"Created calendar integration for user {user_id}")
        return integration

    async def delete_integration(self, user_id: str) -> bool:
        """
        Disconnect a user's calendar (soft delete).

        Returns:
            True if an integration was deleted, False if none existed
        """
        async with self._session_factory() as session:
            row = await self._get_row(session, user_id)
            if row is None:
                return False
            row.soft_delete()
            await session.commit()

        logger.info(f"Deleted calendar integration for user {user_id}")
        return True
