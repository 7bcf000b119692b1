import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from receptionist.core import config
from receptionist.core.assistant_config import load_assistant_settings
from receptionist.routes import appointment_routes, call_routes, config_routes, webhook_routes
from receptionist.routes.dependencies import WebhookSettings
from receptionist.schemas.assistant import AssistantSettings
from receptionist.services.booking_service import BookingService
from receptionist.services.notifications import ConfirmationDispatcher
from receptionist.services.vapi_client import VapiClient
from receptionist.services.webhook_dispatcher import WebhookDispatcher
from receptionist.storage.factory import Stores, build_stores

logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

logger = logging.getLogger(__name__)


def create_app(
    assistant_settings: AssistantSettings | None = None,
    stores: Stores | None = None,
    vapi_client: VapiClient | None = None,
    webhook_secret: str | None = None,
) -> FastAPI:
    config.validate_runtime_config()

    app = FastAPI(title='Clinic Virtual Receptionist API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    settings = assistant_settings or load_assistant_settings(config.ASSISTANT_CONFIG_PATH or None)
    uses_database = stores is None and config.STORAGE_BACKEND == 'database'
    stores = stores or build_stores(config.STORAGE_BACKEND)

    booking_service = BookingService(stores.appointments, config.APPOINTMENT_DURATION_MINUTES)
    notifier = ConfirmationDispatcher(config.CONFIRMATION_CHANNEL)

    app.state.assistant_settings = settings
    app.state.clinic_id = config.CLINIC_ID
    app.state.appointment_duration_minutes = config.APPOINTMENT_DURATION_MINUTES
    app.state.booking_service = booking_service
    app.state.notifier = notifier
    app.state.call_sessions = stores.call_sessions
    app.state.webhook_dispatcher = WebhookDispatcher(
        booking_service,
        notifier,
        settings.clinic,
        duration_minutes=config.APPOINTMENT_DURATION_MINUTES,
    )
    app.state.vapi_client = vapi_client or VapiClient(
        config.VAPI_API_KEY,
        base_url=config.VAPI_BASE_URL,
        timeout=config.VAPI_TIMEOUT_SECONDS,
    )
    app.state.webhook_settings = WebhookSettings(
        secret=config.VAPI_WEBHOOK_SECRET if webhook_secret is None else webhook_secret,
        signature_header=config.VAPI_SIGNATURE_HEADER,
    )

    if uses_database:
        @app.on_event('startup')
        def initialize_database() -> None:
            from receptionist.database import init_database

            try:
                init_database()
            except SQLAlchemyError:
                logger.exception('Database initialization failed. Check DATABASE_URL.')

    @app.get('/')
    def root():
        return {'status': 'Virtual Receptionist API Running'}

    app.include_router(appointment_routes.router, prefix='/appointments')
    app.include_router(call_routes.router, prefix='/calls')
    app.include_router(config_routes.router, prefix='/config')
    app.include_router(webhook_routes.router, prefix='/webhook')

    return app


app = create_app()
