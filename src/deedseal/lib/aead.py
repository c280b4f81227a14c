"""
AES-256-GCM sealing of canonical records.

A sealed payload is the base64 encoding of

    nonce (12 bytes) || ciphertext (len(plaintext) bytes) || tag (16 bytes)

which is the layout stored on-chain as a string. No associated data is
bound, so a payload is not tied to the identifier it is stored under.
"""

import base64
import binascii
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from deedseal.lib.errors import DecryptionFailed, InvalidCiphertext, InvalidKey
from deedseal.lib.log import get_logger, log

logger = get_logger("aead")

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16
MIN_PAYLOAD_SIZE = NONCE_SIZE + TAG_SIZE


def _new_nonce() -> bytes:
    """A fresh random nonce; never reused across seal calls."""
    return secrets.token_bytes(NONCE_SIZE)


def generate_key() -> str:
    """A new random 256-bit key, base64 encoded for ENCRYPTION_KEY_BASE64."""
    return base64.b64encode(secrets.token_bytes(KEY_SIZE)).decode("ascii")


def load_key(key_b64: str) -> bytes:
    """
    Decode and validate a base64 encryption key.

    Raises:
        InvalidKey: if the key is not base64 or not exactly 32 bytes.
    """
    if not isinstance(key_b64, str):
        raise InvalidKey("Encryption key must be a base64 string")
    try:
        key = base64.b64decode(key_b64.strip(), validate=True)
    except (binascii.Error, ValueError):
        raise InvalidKey("Encryption key is not valid base64")
    if len(key) != KEY_SIZE:
        raise InvalidKey(
            f"Encryption key must be base64 of {KEY_SIZE} bytes, got {len(key)}"
        )
    return key


def seal(plaintext: str, key_b64: str) -> str:
    """
    Encrypt plaintext under the key and return the base64 payload.

    Raises:
        InvalidKey: if the key does not decode to 32 bytes.
    """
    aesgcm = AESGCM(load_key(key_b64))
    nonce = _new_nonce()
    # AESGCM appends the 16-byte tag to the ciphertext
    ciphertext_and_tag = aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
    return base64.b64encode(nonce + ciphertext_and_tag).decode("ascii")


def open_payload(payload: str, key_b64: str) -> str:
    """
    Decrypt and authenticate a payload produced by `seal`.

    No partial plaintext is ever returned.

    Raises:
        InvalidKey: if the key does not decode to 32 bytes.
        InvalidCiphertext: if the payload is not base64 or shorter than 28 bytes.
        DecryptionFailed: if the tag does not verify.
    """
    key = load_key(key_b64)
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, TypeError, ValueError):
        raise InvalidCiphertext("Payload is not valid base64")
    if len(raw) < MIN_PAYLOAD_SIZE:
        raise InvalidCiphertext(
            f"Payload too short: {len(raw)} bytes, need at least {MIN_PAYLOAD_SIZE}"
        )

    nonce = raw[:NONCE_SIZE]
    tag = raw[-TAG_SIZE:]
    ciphertext = raw[NONCE_SIZE:-TAG_SIZE]

    try:
        data = AESGCM(key).decrypt(nonce, ciphertext + tag, None)
    except InvalidTag:
        log(logger, "warning", "Payload failed authentication", size=len(raw))
        raise DecryptionFailed("Payload failed authentication")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise DecryptionFailed("Decrypted payload is not UTF-8 text")
