import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from receptionist.core.errors import VoiceAPIError
from receptionist.routes.dependencies import get_assistant_settings, get_call_store, get_vapi_client
from receptionist.schemas.assistant import AssistantSettings
from receptionist.schemas.call_session import (
    CallSession,
    CallSessionListResponse,
    CallSessionResponse,
    CreateCallSessionRequest,
    OutboundCallRequest,
    UpdateCallSessionRequest,
)
from receptionist.services.identifiers import generate_id
from receptionist.services.vapi_client import VapiClient
from receptionist.storage.base import Repository

router = APIRouter(tags=['calls'])

logger = logging.getLogger(__name__)

CALL_ID_PREFIX = 'call'


def storage_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail='Storage unavailable. Verify DATABASE_URL.',
    )


@router.post('', response_model=CallSessionResponse)
def start_call_session(
    data: dict = Body(...),
    store: Repository[CallSession] = Depends(get_call_store),
):
    try:
        request = CreateCallSessionRequest.model_validate(data)
    except ValidationError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'error': 'Invalid call session data'})

    call_session = CallSession(
        id=generate_id(CALL_ID_PREFIX),
        start_time=datetime.now(timezone.utc),
        status='active',
        **request.model_dump(),
    )

    try:
        call_session = store.add(call_session)
    except SQLAlchemyError as exc:
        raise storage_unavailable() from exc

    logger.info('Call session %s started (%s)', call_session.id, call_session.call_type)
    return CallSessionResponse(success=True, call_session=call_session, message='Call session started successfully')


@router.put('', response_model=CallSessionResponse)
def update_call_session(
    data: dict = Body(...),
    store: Repository[CallSession] = Depends(get_call_store),
):
    try:
        request = UpdateCallSessionRequest.model_validate(data)
    except ValidationError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'error': 'Invalid call session data'})

    if not request.call_id:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'error': 'Call ID is required'})

    changes = request.model_dump(exclude_unset=True, exclude={'call_id'})
    changes['updated_at'] = datetime.now(timezone.utc)

    try:
        call_session = store.update(request.call_id, changes)
    except ValidationError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'error': 'Invalid call session data'})
    except SQLAlchemyError as exc:
        raise storage_unavailable() from exc

    if call_session is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={'error': 'Call session not found'})

    return CallSessionResponse(success=True, call_session=call_session, message='Call session updated successfully')


@router.get('', response_model=CallSessionListResponse)
def list_call_sessions(
    call_id: str | None = Query(default=None, alias='callId'),
    call_status: str | None = Query(default=None, alias='status'),
    store: Repository[CallSession] = Depends(get_call_store),
):
    try:
        sessions = store.list(id=call_id, status=call_status)
    except SQLAlchemyError as exc:
        raise storage_unavailable() from exc

    return CallSessionListResponse(success=True, sessions=sessions, total=len(sessions))


@router.post('/outbound')
async def start_outbound_call(
    data: OutboundCallRequest,
    settings: AssistantSettings = Depends(get_assistant_settings),
    client: VapiClient = Depends(get_vapi_client),
):
    try:
        return await client.initiate_call(
            data.phone_number_id,
            assistant_id=data.assistant_id,
            assistant=settings.assistant,
        )
    except VoiceAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to initiate call',
        ) from exc


@router.get('/{call_id}/details')
async def get_call_details(call_id: str, client: VapiClient = Depends(get_vapi_client)):
    try:
        return await client.get_call_details(call_id)
    except VoiceAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to fetch call details',
        ) from exc
