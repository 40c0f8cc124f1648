"""
Calendar event operations for interview sync.

Each call performs exactly one remote mutation (create, update or delete)
with a valid access token and reports the outcome as an OperationResult.
Expected provider failures never raise; a missing integration does.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Awaitable, Callable, Optional, TypeVar

from src.config import Settings, get_settings
from src.calendar_sync.errors import (
    Operation,
    is_already_gone,
    is_authorization_failure,
    normalize_error,
)
from src.calendar_sync.exceptions import IntegrationNotFoundError
from src.calendar_sync.protocols import CalendarProvider, IntegrationStore
from src.calendar_sync.tokens import TokenManager
from src.calendar_sync.types import CalendarEvent, OperationError, OperationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

TIMEOUT_CODE = "TIMEOUT"


class _OperationTimedOut(Exception):
    """The whole-operation deadline expired."""


class CalendarSyncService:
    """
    Creates, updates and deletes remote calendar events for a user.

    Provides:
    - Transparent token refresh before each provider call
    - One retry with a forced refresh when the provider rejects the token
    - Idempotent delete (already-deleted events count as deleted)
    - Uniform OperationResult reporting

    Usage:
        service = CalendarSyncService(store, provider)
        result = await service.create_event("user-123", event)
        if result.success:
            interview.calendar_event_id = result.event_id
    """

    def __init__(
        self,
        store: IntegrationStore,
        provider: CalendarProvider,
        token_manager: Optional[TokenManager] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the service.

        Args:
            store: Persistence for integration records
            provider: Remote calendar provider
            token_manager: Token manager (built from store/provider if None)
            timeout: Seconds allowed for a whole operation, token fetch included
        """
        self._provider = provider
        self._tokens = token_manager or TokenManager(store, provider)
        self._timeout = timeout

    @property
    def tokens(self) -> TokenManager:
        return self._tokens

    async def create_event(self, user_id: str, event: CalendarEvent) -> OperationResult:
        """
        Create a remote event.

        Args:
            user_id: Owner of the calendar integration
            event: Event to create

        Returns:
            Result carrying the provider-assigned event ID on success

        Raises:
            IntegrationNotFoundError: If the user has no calendar integration
        """
        try:
            created = await self._execute(
                user_id,
                Operation.CREATE,
                lambda token: self._provider.create_event(event, token),
            )
        except IntegrationNotFoundError:
            raise
        except _OperationTimedOut:
            return self._timed_out(Operation.CREATE)
        except Exception as e:
            return self._failed(Operation.CREATE, user_id, e)

        logger.info(f"Created calendar event {created.id} for user {user_id}")
        return OperationResult.ok(created.id, event_link=created.html_link)

    async def update_event(
        self,
        user_id: str,
        event_id: str,
        event: CalendarEvent,
    ) -> OperationResult:
        """
        Replace an existing remote event.

        Args:
            user_id: Owner of the calendar integration
            event_id: Provider event ID
            event: New event contents

        Returns:
            Result carrying the provider event ID on success

        Raises:
            IntegrationNotFoundError: If the user has no calendar integration
        """
        try:
            updated = await self._execute(
                user_id,
                Operation.UPDATE,
                lambda token: self._provider.update_event(event_id, event, token),
            )
        except IntegrationNotFoundError:
            raise
        except _OperationTimedOut:
            return self._timed_out(Operation.UPDATE)
        except Exception as e:
            return self._failed(Operation.UPDATE, user_id, e)

        logger.info(f"Updated calendar event {updated.id} for user {user_id}")
        return OperationResult.ok(updated.id, event_link=updated.html_link)

    async def delete_event(self, user_id: str, event_id: str) -> OperationResult:
        """
        Delete a remote event.

        An event that is already gone counts as deleted.

        Args:
            user_id: Owner of the calendar integration
            event_id: Provider event ID

        Returns:
            Result carrying ``event_id`` on success

        Raises:
            IntegrationNotFoundError: If the user has no calendar integration
        """
        try:
            await self._execute(
                user_id,
                Operation.DELETE,
                lambda token: self._provider.delete_event(event_id, token),
            )
        except IntegrationNotFoundError:
            raise
        except _OperationTimedOut:
            return self._timed_out(Operation.DELETE)
        except Exception as e:
            if is_already_gone(e):
                logger.warning(f"Calendar event {event_id} already deleted")
                return OperationResult.ok(event_id)
            return self._failed(Operation.DELETE, user_id, e)

        logger.info(f"Deleted calendar event {event_id} for user {user_id}")
        return OperationResult.ok(event_id)

    async def _execute(
        self,
        user_id: str,
        operation: Operation,
        call: Callable[[str], Awaitable[T]],
    ) -> T:
        """
        Run token acquisition plus provider call, bounded by the timeout.

        Only expiry of this deadline raises _OperationTimedOut. A TimeoutError
        raised by a collaborator propagates like any other failure.
        """
        attempt = self._call_with_token(user_id, operation, call)
        if self._timeout is None:
            return await attempt

        task = asyncio.ensure_future(attempt)
        done, _ = await asyncio.wait({task}, timeout=self._timeout)
        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise _OperationTimedOut()

    async def _call_with_token(
        self,
        user_id: str,
        operation: Operation,
        call: Callable[[str], Awaitable[T]],
    ) -> T:
        """
        Call the provider with a valid token.

        Local expiry bookkeeping can disagree with the provider (clock skew,
        revoked token), so an authorization failure triggers exactly one
        forced refresh and retry.
        """
        access_token = await self._tokens.get_valid_token(user_id)
        try:
            return await call(access_token)
        except Exception as e:
            if not is_authorization_failure(e):
                raise
            logger.warning(
                f"Provider rejected access token during {operation.value} "
                f"for user {user_id}; refreshing and retrying once"
            )

        access_token = await self._tokens.get_valid_token(user_id, force_refresh=True)
        return await call(access_token)

    def _failed(self, operation: Operation, user_id: str, error: Exception) -> OperationResult:
        result = OperationResult.failed(normalize_error(error, operation))
        logger.error(
            f"Calendar {operation.value} failed for user {user_id}: "
            f"[{result.error.code}] {result.error.message}"
        )
        return result

    def _timed_out(self, operation: Operation) -> OperationResult:
        logger.error(f"Calendar {operation.value} timed out after {self._timeout}s")
        return OperationResult.failed(
            OperationError(
                code=TIMEOUT_CODE,
                message=f"Calendar {operation.value} timed out after {self._timeout}s",
            )
        )


def build_calendar_sync_service(
    store: IntegrationStore,
    provider: CalendarProvider,
    settings: Optional[Settings] = None,
) -> CalendarSyncService:
    """
    Build a CalendarSyncService configured from application settings.

    Args:
        store: Persistence for integration records
        provider: Remote calendar provider
        settings: Settings to use (defaults to get_settings())

    Returns:
        Configured service
    """
    settings = settings or get_settings()
    token_manager = TokenManager(
        store,
        provider,
        refresh_margin=timedelta(seconds=settings.token_refresh_margin_seconds),
    )
    return CalendarSyncService(
        store,
        provider,
        token_manager=token_manager,
        timeout=settings.calendar_sync_timeout_seconds,
    )
