"""
Property listing endpoints.

These handlers are the boundary where untrusted input becomes a strict
DeedFields. Sealing uses the key from ENCRYPTION_KEY_BASE64; allocated
identifiers live in the process-wide store.
"""

from fastapi import APIRouter, Depends, HTTPException

from deedseal.app_state import ServerState, get_app_state
from deedseal.config import get_encryption_key
from deedseal.lib import aead, extraction, identifier, listing, record
from deedseal.lib.errors import (
    DecryptionFailed,
    ExhaustedKeyspace,
    InvalidIdentifier,
    InvalidKey,
    MalformedRecord,
)
from deedseal.lib.log import get_logger, log
from deedseal.lib.record import DeedFields
from deedseal.models import (
    ExtractRequest,
    ExtractResponse,
    IdentifierListResponse,
    IdentifierResponse,
    ListingResponse,
    OpenRequest,
    OpenResponse,
)

router = APIRouter()
logger = get_logger("api")


def _configured_key() -> str:
    try:
        key = get_encryption_key()
        aead.load_key(key)
    except InvalidKey as e:
        log(logger, "error", "Encryption key misconfigured", error=str(e))
        raise HTTPException(status_code=500, detail=f"Server configuration error: {e}")
    return key


@router.post("/properties/extract", response_model=ExtractResponse)
def extract_fields(request: ExtractRequest):
    """Turn a document model reply into deed fields and their canonical record."""
    owner = request.owner.strip()
    if not owner:
        raise HTTPException(status_code=400, detail="Owner wallet address is required")
    try:
        fields = extraction.fields_from_text(request.text, owner)
    except MalformedRecord as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ExtractResponse(
        fields=fields,
        plaintext=record.encode(fields),
        conflicts=record.delimiter_conflicts(fields),
    )


@router.post("/properties", response_model=ListingResponse)
def create_listing(
    fields: DeedFields, state: ServerState = Depends(get_app_state)
):
    """Seal a deed and allocate its identifier."""
    if not fields.owner:
        raise HTTPException(status_code=400, detail="Owner wallet address is required")
    key = _configured_key()
    try:
        result = listing.prepare_listing(fields, key, state.identifiers)
    except ExhaustedKeyspace as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ListingResponse(
        id=result.id,
        id_hex=result.id_hex,
        encrypted=result.encrypted,
        fields=result.fields,
    )


@router.get("/properties", response_model=IdentifierListResponse)
def list_identifiers(state: ServerState = Depends(get_app_state)):
    """All allocated identifiers, sorted, with their on-chain keys."""
    return IdentifierListResponse(
        identifiers=[
            IdentifierResponse(id_hex=id_hex, id=identifier.to_decimal(id_hex))
            for id_hex in sorted(state.identifiers.existing_ids())
        ]
    )


@router.post("/properties/open", response_model=OpenResponse)
def open_listing(request: OpenRequest):
    """Decrypt a payload read back from the chain."""
    key = _configured_key()
    try:
        plaintext = aead.open_payload(request.encrypted, key)
    except DecryptionFailed:
        raise HTTPException(status_code=422, detail="undecryptable")
    try:
        fields = record.decode(plaintext)
    except MalformedRecord:
        fields = None
    return OpenResponse(plaintext=plaintext, fields=fields)


@router.get("/identifiers/{id_hex}", response_model=IdentifierResponse)
def get_identifier(id_hex: str):
    """Decimal on-chain key for a display identifier."""
    try:
        normalized = identifier.normalize_identifier(id_hex)
    except InvalidIdentifier as e:
        raise HTTPException(status_code=400, detail=str(e))
    return IdentifierResponse(id_hex=normalized, id=identifier.to_decimal(normalized))
