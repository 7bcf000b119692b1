import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(prefix: str, entropy_length: int = 9) -> str:
    """Return ``<prefix>_<epoch millis>_<random base36>``."""
    suffix = ''.join(secrets.choice(_ALPHABET) for _ in range(entropy_length))
    return f'{prefix}_{time.time_ns() // 1_000_000}_{suffix}'
