"""Client for the hosted voice assistant platform (Vapi)."""

import logging
from typing import Any

import httpx

from receptionist.core.errors import VoiceAPIError
from receptionist.schemas.assistant import VirtualReceptionist

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.vapi.ai'


class VapiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, json: dict | None = None) -> Any:
        if not self.api_key:
            raise VoiceAPIError('VAPI API key not initialized')

        headers = {'Authorization': f'Bearer {self.api_key}'}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.error('VAPI %s %s failed: %s', method, path, exc)
            raise VoiceAPIError(f'VAPI request failed: {exc}') from exc

        if response.is_error:
            logger.error('VAPI %s %s returned %s', method, path, response.status_code)
            raise VoiceAPIError(f'VAPI API error: {response.status_code}', status_code=response.status_code)

        return response.json()

    async def create_assistant(self, config: VirtualReceptionist) -> dict:
        return await self._request('POST', '/assistant', json=config.platform_payload())

    async def initiate_call(
        self,
        phone_number_id: str,
        assistant_id: str | None = None,
        assistant: VirtualReceptionist | None = None,
    ) -> dict:
        """Start an outbound call.

        With ``assistant_id`` the platform uses a stored assistant; otherwise
        the full ``assistant`` configuration is sent inline.
        """
        body: dict[str, Any] = {'phoneNumberId': phone_number_id}
        if assistant_id:
            body['assistantId'] = assistant_id
        elif assistant is not None:
            body['assistantId'] = assistant.id
            body['assistant'] = assistant.platform_payload()
        else:
            raise VoiceAPIError('An assistant id or assistant configuration is required')

        return await self._request('POST', '/call', json=body)

    async def get_call_details(self, call_id: str) -> dict:
        return await self._request('GET', f'/call/{call_id}')
