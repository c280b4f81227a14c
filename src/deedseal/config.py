# Shared application constants

import os

from deedseal.lib.errors import InvalidKey

# --- Environment ---
# The AES-256 key used to seal deed records, base64 of 32 random bytes.
# Generate one with `deedseal gen-key`.
ENCRYPTION_KEY_ENV = "ENCRYPTION_KEY_BASE64"
LOG_LEVEL_ENV = "DEEDSEAL_LOG_LEVEL"


def get_encryption_key() -> str:
    """Returns the configured base64 key, or raises InvalidKey if unset."""
    value = os.getenv(ENCRYPTION_KEY_ENV, "").strip()
    if not value:
        raise InvalidKey(f"Missing environment variable: {ENCRYPTION_KEY_ENV}")
    return value
