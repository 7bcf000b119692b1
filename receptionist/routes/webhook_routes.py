import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from receptionist.routes.dependencies import WebhookSettings, get_webhook_dispatcher, get_webhook_settings
from receptionist.services.webhook_dispatcher import WebhookDispatcher, verify_signature

router = APIRouter(tags=['webhook'])

logger = logging.getLogger(__name__)


@router.post('')
async def receive_webhook(
    request: Request,
    dispatcher: WebhookDispatcher = Depends(get_webhook_dispatcher),
    webhook_settings: WebhookSettings = Depends(get_webhook_settings),
):
    body = await request.body()
    signature = request.headers.get(webhook_settings.signature_header)

    if not verify_signature(body, signature, webhook_settings.secret):
        logger.warning('Rejected webhook with invalid signature')
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={'error': 'Invalid signature'})

    try:
        dispatcher.dispatch(json.loads(body))
    except Exception:
        logger.exception('Error handling VAPI webhook')
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': 'Webhook processing failed'},
        )

    return {'success': True}
