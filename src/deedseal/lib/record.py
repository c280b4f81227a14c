"""
Canonical deed records.

A deed record is the fixed, ordered set of fields extracted from a strata
title deed plus the owner's wallet address. It is serialized into a single
comma-delimited line, the canonical plaintext, which is the sole input to
both identifier hashing and payload encryption:

    NoHakmilik,NoBangunan,NoTingkat,NoPetak,Negeri.Daerah,Bandar,Owner

Separators are not escaped. Values containing a comma (or a period in
Negeri) cannot be decoded losslessly; `delimiter_conflicts` reports them so
callers can decide what to do before the record is sealed.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from deedseal.lib.errors import MalformedRecord

FIELD_SEPARATOR = ","
REGION_SEPARATOR = "."
SEGMENT_COUNT = 7


class DeedFields(BaseModel):
    """The structured record extracted from a deed, in canonical order."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    no_hakmilik: StrictStr = Field("", alias="NoHakmilik", description="Title number.")
    no_bangunan: StrictStr = Field("", alias="NoBangunan", description="Building number.")
    no_tingkat: StrictStr = Field("", alias="NoTingkat", description="Floor number.")
    no_petak: StrictStr = Field("", alias="NoPetak", description="Parcel number.")
    negeri: StrictStr = Field("", alias="Negeri", description="State.")
    daerah: StrictStr = Field("", alias="Daerah", description="District.")
    bandar: StrictStr = Field("", alias="Bandar", description="Town.")
    owner: StrictStr = Field("", alias="Owner", description="Owner wallet address.")

    def to_wire(self) -> dict:
        """Fields keyed by their wire names (NoHakmilik, ...)."""
        return self.model_dump(by_alias=True)


def encode(fields: DeedFields) -> str:
    """
    Serialize a deed record into its canonical plaintext.

    Always succeeds; an all-empty record encodes to ",,,,.,,".
    """
    region = f"{fields.negeri}{REGION_SEPARATOR}{fields.daerah}"
    return FIELD_SEPARATOR.join(
        [
            fields.no_hakmilik,
            fields.no_bangunan,
            fields.no_tingkat,
            fields.no_petak,
            region,
            fields.bandar,
            fields.owner,
        ]
    )


def decode(plaintext: str) -> DeedFields:
    """
    Parse a canonical plaintext back into a deed record.

    The split is bounded, so commas inside the final Owner segment survive.
    The region segment is split on its first period.

    Raises:
        MalformedRecord: if there are fewer than 7 segments or the region
            segment has no period.
    """
    parts = plaintext.split(FIELD_SEPARATOR, SEGMENT_COUNT - 1)
    if len(parts) != SEGMENT_COUNT:
        raise MalformedRecord(
            f"Expected {SEGMENT_COUNT} segments in canonical record, got {len(parts)}"
        )

    no_hakmilik, no_bangunan, no_tingkat, no_petak, region, bandar, owner = parts
    negeri, sep, daerah = region.partition(REGION_SEPARATOR)
    if not sep:
        raise MalformedRecord("Region segment is missing the Negeri.Daerah separator")

    return DeedFields(
        no_hakmilik=no_hakmilik,
        no_bangunan=no_bangunan,
        no_tingkat=no_tingkat,
        no_petak=no_petak,
        negeri=negeri,
        daerah=daerah,
        bandar=bandar,
        owner=owner,
    )


def delimiter_conflicts(fields: DeedFields) -> List[str]:
    """
    Names (wire form) of fields whose values would not survive decode.

    Any comma is ambiguous except in Owner, the last segment. A period is
    only ambiguous in Negeri, since the region is split on its first period.
    """
    conflicts = []
    for name, value in fields.to_wire().items():
        if FIELD_SEPARATOR in value and name != "Owner":
            conflicts.append(name)
        elif name == "Negeri" and REGION_SEPARATOR in value:
            conflicts.append(name)
    return conflicts
