"""Core deedseal library: canonical records, identifiers and sealed payloads."""

from .errors import (
    DeedSealError,
    InvalidKey,
    DecryptionFailed,
    InvalidCiphertext,
    ExhaustedKeyspace,
    InvalidIdentifier,
    MalformedRecord,
)
from .record import DeedFields, encode, decode, delimiter_conflicts
from .identifier import (
    generate,
    derive_deterministic,
    is_valid_identifier,
    normalize_identifier,
    to_decimal,
    from_decimal,
)
from .aead import seal, open_payload, load_key, generate_key
from .store import IdentifierStore, InMemoryIdentifierStore
from .listing import Listing, prepare_listing, read_listing

__all__ = [
    # Errors
    "DeedSealError",
    "InvalidKey",
    "DecryptionFailed",
    "InvalidCiphertext",
    "ExhaustedKeyspace",
    "InvalidIdentifier",
    "MalformedRecord",
    # Canonical records
    "DeedFields",
    "encode",
    "decode",
    "delimiter_conflicts",
    # Identifiers
    "generate",
    "derive_deterministic",
    "is_valid_identifier",
    "normalize_identifier",
    "to_decimal",
    "from_decimal",
    # Sealing
    "seal",
    "open_payload",
    "load_key",
    "generate_key",
    # Store and listing
    "IdentifierStore",
    "InMemoryIdentifierStore",
    "Listing",
    "prepare_listing",
    "read_listing",
]
