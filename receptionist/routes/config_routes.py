from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from receptionist.core.errors import VoiceAPIError
from receptionist.routes.dependencies import get_assistant_settings, get_vapi_client
from receptionist.schemas.assistant import AssistantSettings, ClinicInfo, VirtualReceptionist
from receptionist.services.vapi_client import VapiClient

router = APIRouter(tags=['config'])


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _field_names(updates: dict) -> dict:
    """Key ``updates`` by field name, accepting either field names or camelCase aliases."""
    aliases = {field.alias or name: name for name, field in VirtualReceptionist.model_fields.items()}
    normalized = {}
    for key, value in updates.items():
        name = key if key in VirtualReceptionist.model_fields else aliases.get(key)
        if name is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f'Unknown voice AI configuration field: {key}',
            )
        normalized[name] = value
    return normalized


@router.get('', response_model=VirtualReceptionist)
def get_assistant_config(settings: AssistantSettings = Depends(get_assistant_settings)):
    return settings.assistant


@router.put('', response_model=VirtualReceptionist)
def update_assistant_config(
    updates: dict = Body(...),
    settings: AssistantSettings = Depends(get_assistant_settings),
):
    """Return the configuration merged with ``updates``.

    The loaded configuration is left unchanged.
    """
    merged = {**settings.assistant.model_dump(), **_field_names(updates), 'updated_at': timestamp()}
    try:
        return VirtualReceptionist.model_validate(merged)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Invalid voice AI configuration.',
        ) from exc


@router.get('/clinic', response_model=ClinicInfo)
def get_clinic_info(settings: AssistantSettings = Depends(get_assistant_settings)):
    return settings.clinic


@router.post('/sync')
async def sync_assistant(
    settings: AssistantSettings = Depends(get_assistant_settings),
    client: VapiClient = Depends(get_vapi_client),
):
    try:
        return await client.create_assistant(settings.assistant)
    except VoiceAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to sync voice AI assistant',
        ) from exc
