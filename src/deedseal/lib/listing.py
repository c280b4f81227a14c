"""
Listing a property: the caller-side glue around the core.

`prepare_listing` produces everything needed to put a deed on-chain: the
sealed payload, the display identifier and its decimal on-chain key.
Submitting the transaction is left to the caller. `read_listing` reverses
it for display.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from deedseal.lib import aead, identifier, record
from deedseal.lib.errors import DecryptionFailed, MalformedRecord
from deedseal.lib.log import get_logger, log
from deedseal.lib.record import DeedFields
from deedseal.lib.store import IdentifierStore

logger = get_logger("listing")


class Listing(BaseModel):
    """The result of sealing a deed for listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Decimal on-chain key.")
    id_hex: str = Field(..., alias="idHex", description="6-digit hex identifier.")
    encrypted: str = Field(..., description="Base64 sealed canonical record.")
    fields: DeedFields


def prepare_listing(fields: DeedFields, key_b64: str, store: IdentifierStore) -> Listing:
    """
    Encode, seal and allocate an identifier for a deed.

    The key is validated before an identifier is allocated, so a
    misconfigured key never consumes one.

    Raises:
        InvalidKey: if the key does not decode to 32 bytes.
        ExhaustedKeyspace: if the store has no room for a new identifier.
    """
    conflicts = record.delimiter_conflicts(fields)
    if conflicts:
        log(
            logger,
            "warning",
            "Deed fields contain separator characters; record will not decode cleanly",
            fields=",".join(conflicts),
        )

    plaintext = record.encode(fields)
    encrypted = aead.seal(plaintext, key_b64)
    id_hex = store.allocate(plaintext, {"owner": fields.owner, "encrypted": encrypted})

    return Listing(
        id=identifier.to_decimal(id_hex),
        id_hex=id_hex,
        encrypted=encrypted,
        fields=fields,
    )


def read_listing(encrypted: str, key_b64: str) -> Optional[DeedFields]:
    """
    Open a sealed record for display.

    Returns None when the payload is undecryptable or does not hold a
    canonical record. A bad key still raises InvalidKey.
    """
    if not encrypted:
        return None
    try:
        return record.decode(aead.open_payload(encrypted, key_b64))
    except DecryptionFailed as e:
        log(logger, "warning", "Stored record is undecryptable", reason=type(e).__name__)
    except MalformedRecord:
        log(logger, "warning", "Decrypted payload is not a canonical record")
    return None
