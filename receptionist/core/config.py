import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["http://localhost:3000"])

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./receptionist.db")
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").strip().lower()

ASSISTANT_CONFIG_PATH = os.getenv("ASSISTANT_CONFIG_PATH", "")
CLINIC_ID = os.getenv("CLINIC_ID", "sai-clinic")
APPOINTMENT_DURATION_MINUTES = int(os.getenv("APPOINTMENT_DURATION_MINUTES", "30"))
CONFIRMATION_CHANNEL = os.getenv("CONFIRMATION_CHANNEL", "sms")

VAPI_API_KEY = os.getenv("VAPI_API_KEY", "")
VAPI_BASE_URL = os.getenv("VAPI_BASE_URL", "https://api.vapi.ai")
VAPI_TIMEOUT_SECONDS = float(os.getenv("VAPI_TIMEOUT_SECONDS", "30"))
VAPI_WEBHOOK_SECRET = os.getenv("VAPI_WEBHOOK_SECRET", "")
VAPI_SIGNATURE_HEADER = os.getenv("VAPI_SIGNATURE_HEADER", "x-vapi-signature")


def validate_runtime_config() -> None:
    if STORAGE_BACKEND not in {"memory", "database"}:
        raise RuntimeError(f"Unsupported STORAGE_BACKEND {STORAGE_BACKEND!r}; use 'memory' or 'database'.")
    if APP_ENV.lower() == "production" and not VAPI_WEBHOOK_SECRET:
        raise RuntimeError("VAPI_WEBHOOK_SECRET must be set in production.")
