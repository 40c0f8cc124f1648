"""
Calendar sync API routes.

Mirrors interview scheduling into the user's connected calendar:
1. POST /calendar/events - Interview scheduled (create event)
2. PUT /calendar/events/{event_id} - Interview rescheduled (update event)
3. DELETE /calendar/events/{event_id} - Interview cancelled (delete event)

Provider failures return 502 with the normalized OperationResult body.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.dependencies import get_calendar_sync_service, get_user_id
from src.api.models import (
    CalendarEventRequest,
    ErrorResponse,
    OperationResultResponse,
)
from src.calendar_sync import CalendarSyncService, OperationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["calendar"])

_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Calendar not connected"},
    502: {"model": OperationResultResponse, "description": "Calendar provider call failed"},
}


def _result_response(result: OperationResult) -> JSONResponse:
    """Render an OperationResult with the matching HTTP status."""
    return JSONResponse(
        status_code=200 if result.success else 502,
        content=result.to_dict(),
    )


@router.post(
    "/events",
    response_model=OperationResultResponse,
    responses=_RESPONSES,
    summary="Create calendar event",
)
async def create_calendar_event(
    request: CalendarEventRequest,
    user_id: str = Depends(get_user_id),
    service: CalendarSyncService = Depends(get_calendar_sync_service),
) -> JSONResponse:
    """Create a remote event for a newly scheduled interview."""
    result = await service.create_event(user_id, request.to_event())
    return _result_response(result)


@router.put(
    "/events/{event_id}",
    response_model=OperationResultResponse,
    responses=_RESPONSES,
    summary="Update calendar event",
)
async def update_calendar_event(
    event_id: str,
    request: CalendarEventRequest,
    user_id: str = Depends(get_user_id),
    service: CalendarSyncService = Depends(get_calendar_sync_service),
) -> JSONResponse:
    """Replace the remote event of a rescheduled interview."""
    result = await service.update_event(user_id, event_id, request.to_event(event_id))
    return _result_response(result)


@router.delete(
    "/events/{event_id}",
    response_model=OperationResultResponse,
    responses=_RESPONSES,
    summary="Delete calendar event",
)
async def delete_calendar_event(
    event_id: str,
    user_id: str = Depends(get_user_id),
    service: CalendarSyncService = Depends(get_calendar_sync_service),
) -> JSONResponse:
    """Remove the remote event of a cancelled interview. Already-deleted counts as success."""
    result = await service.delete_event(user_id, event_id)
    return _result_response(result)
