from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from deedseal.lib.record import DeedFields


class ExtractRequest(BaseModel):
    """A document model reply to be turned into deed fields."""

    text: str = Field(..., description="Raw reply text from the document model.")
    owner: str = Field(..., description="Owner wallet address.")


class ExtractResponse(BaseModel):
    fields: DeedFields
    plaintext: str = Field(..., description="Canonical record for these fields.")
    conflicts: List[str] = Field(
        [], description="Fields containing separator characters."
    )


class ListingResponse(BaseModel):
    """Result of sealing a deed; field names match the on-chain client."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Decimal on-chain key.")
    id_hex: str = Field(..., alias="idHex", description="6-digit hex identifier.")
    encrypted: str = Field(..., description="Base64 AES-256-GCM payload.")
    fields: DeedFields


class OpenRequest(BaseModel):
    encrypted: str = Field(..., description="Base64 payload read from the chain.")


class OpenResponse(BaseModel):
    plaintext: str
    fields: Optional[DeedFields] = Field(
        None, description="Parsed record, absent if not a canonical record."
    )


class IdentifierResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id_hex: str = Field(..., alias="idHex")
    id: str = Field(..., description="Decimal on-chain key.")


class IdentifierListResponse(BaseModel):
    identifiers: List[IdentifierResponse]
