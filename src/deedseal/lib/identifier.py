"""
Property identifiers.

An identifier is 6 upper-case hex digits (16^6 values). It is shown to users
as hex and used on-chain as the integer key under which the sealed record is
stored (see `to_decimal`).

Two derivation modes are offered and must not be mixed up:

- `generate` salts the canonical plaintext with fresh randomness and checks
  each candidate against a snapshot of identifiers already in use. It is the
  mode used when listing a property.
- `derive_deterministic` hashes the plaintext alone. The same record always
  maps to the same identifier, which suits content-keyed deduplication but
  gives no uniqueness guarantee.
"""

import hashlib
import re
import secrets
from typing import Iterable

from deedseal.lib.errors import ExhaustedKeyspace, InvalidIdentifier
from deedseal.lib.log import get_logger, log

logger = get_logger("identifier")

IDENTIFIER_LENGTH = 6
MAX_IDENTIFIER_VALUE = 16**IDENTIFIER_LENGTH - 1
SALT_SIZE = 8
SALTED_ATTEMPTS = 50
RANDOM_ATTEMPTS = 100

_IDENTIFIER_RE = re.compile(r"[0-9A-Fa-f]{6}")
_DECIMAL_RE = re.compile(r"[0-9]+")


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _salted_candidate(plaintext: str) -> str:
    """First 6 hex digits of SHA-256(plaintext || ":" || hex(salt))."""
    salt = secrets.token_bytes(SALT_SIZE).hex()
    return _sha256_hex(f"{plaintext}:{salt}")[:IDENTIFIER_LENGTH].upper()


def _random_candidate() -> str:
    """A uniformly random 24-bit value as 6 hex digits."""
    return secrets.token_bytes(IDENTIFIER_LENGTH // 2).hex().upper()


def generate(plaintext: str, existing_ids: Iterable[str]) -> str:
    """
    Generate an identifier for a record that is not in existing_ids.

    Tries up to SALTED_ATTEMPTS salted hashes of the plaintext, then up to
    RANDOM_ATTEMPTS purely random values. existing_ids is a snapshot; the
    caller must serialize allocation if several writers share a store.

    Raises:
        ExhaustedKeyspace: if every candidate was already taken.
    """
    taken = {str(i).strip().upper() for i in existing_ids}

    for _ in range(SALTED_ATTEMPTS):
        candidate = _salted_candidate(plaintext)
        if candidate not in taken:
            return candidate

    log(logger, "warning", "Salted candidates exhausted, falling back to random", taken=len(taken))

    for _ in range(RANDOM_ATTEMPTS):
        candidate = _random_candidate()
        if candidate not in taken:
            return candidate

    log(logger, "error", "Identifier keyspace exhausted", taken=len(taken))
    raise ExhaustedKeyspace(
        f"Could not generate a unique identifier after "
        f"{SALTED_ATTEMPTS + RANDOM_ATTEMPTS} attempts ({len(taken)} in use)"
    )


def derive_deterministic(plaintext: str) -> str:
    """Content-keyed identifier: first 6 hex digits of SHA-256(plaintext)."""
    return _sha256_hex(plaintext)[:IDENTIFIER_LENGTH].upper().zfill(IDENTIFIER_LENGTH)


def is_valid_identifier(value) -> bool:
    """True iff value is exactly 6 hex digits (either case)."""
    return isinstance(value, str) and _IDENTIFIER_RE.fullmatch(value) is not None


def normalize_identifier(value: str) -> str:
    """Trim and upper-case user input, rejecting anything but 6 hex digits."""
    candidate = str(value or "").strip()
    if not is_valid_identifier(candidate):
        raise InvalidIdentifier(
            f"Identifier must be 6 hex digits (e.g. A1B2C3), got {value!r}"
        )
    return candidate.upper()


def to_decimal(identifier: str) -> str:
    """The identifier's integer value in base 10, as used for on-chain keys."""
    if not is_valid_identifier(identifier):
        raise InvalidIdentifier(f"Not a 6-digit hex identifier: {identifier!r}")
    return str(int(identifier, 16))


def from_decimal(numeral) -> str:
    """Inverse of to_decimal: an on-chain key back to its display form."""
    text = str(numeral).strip()
    if not _DECIMAL_RE.fullmatch(text):
        raise InvalidIdentifier(f"Not a decimal identifier key: {numeral!r}")
    value = int(text)
    if value > MAX_IDENTIFIER_VALUE:
        raise InvalidIdentifier(f"Decimal key {value} is outside the identifier space")
    return format(value, "06X")
