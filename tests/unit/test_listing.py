"""Tests for the listing flow around the core."""

import base64
import pytest

from deedseal.lib import aead, identifier, listing, record
from deedseal.lib.errors import ExhaustedKeyspace, InvalidKey
from deedseal.lib.record import DeedFields
from deedseal.lib.store import InMemoryIdentifierStore


def test_prepare_listing(sample_fields, encryption_key, store):
    result = listing.prepare_listing(sample_fields, encryption_key, store)

    assert identifier.is_valid_identifier(result.id_hex)
    assert result.id == identifier.to_decimal(result.id_hex)
    assert result.fields == sample_fields
    assert aead.open_payload(result.encrypted, encryption_key) == record.encode(sample_fields)
    assert store.get(result.id_hex) == {
        "owner": sample_fields.owner,
        "encrypted": result.encrypted,
    }


def test_listing_serializes_with_wire_names(sample_fields, encryption_key, store):
    dumped = listing.prepare_listing(sample_fields, encryption_key, store).model_dump(
        by_alias=True
    )
    assert set(dumped) == {"id", "idHex", "encrypted", "fields"}
    assert dumped["fields"]["NoHakmilik"] == "GRN 12345"


def test_prepare_listing_twice_gives_distinct_ids(sample_fields, encryption_key, store):
    first = listing.prepare_listing(sample_fields, encryption_key, store)
    second = listing.prepare_listing(sample_fields, encryption_key, store)
    assert first.id_hex != second.id_hex
    assert first.encrypted != second.encrypted


def test_prepare_listing_bad_key_allocates_nothing(sample_fields, store):
    with pytest.raises(InvalidKey):
        listing.prepare_listing(sample_fields, base64.b64encode(bytes(16)).decode(), store)
    assert len(store) == 0


def test_prepare_listing_propagates_exhaustion(sample_fields, encryption_key, monkeypatch):
    store = InMemoryIdentifierStore({"AAAAAA": {}})
    monkeypatch.setattr(identifier, "_salted_candidate", lambda p: "AAAAAA")
    monkeypatch.setattr(identifier, "_random_candidate", lambda: "AAAAAA")
    with pytest.raises(ExhaustedKeyspace):
        listing.prepare_listing(sample_fields, encryption_key, store)


def test_prepare_listing_warns_on_separator_conflicts(encryption_key, store, caplog):
    fields = DeedFields(no_hakmilik="GRN 1, LOT 2", negeri="JOHOR", owner="0x1")
    with caplog.at_level("WARNING", logger="deedseal.listing"):
        listing.prepare_listing(fields, encryption_key, store)
    assert "NoHakmilik" in caplog.text


def test_read_listing_round_trip(sample_fields, encryption_key, store):
    result = listing.prepare_listing(sample_fields, encryption_key, store)
    assert listing.read_listing(result.encrypted, encryption_key) == sample_fields


def test_read_listing_undecryptable_returns_none(sample_fields, encryption_key, store):
    result = listing.prepare_listing(sample_fields, encryption_key, store)
    assert listing.read_listing(result.encrypted, aead.generate_key()) is None
    assert listing.read_listing(base64.b64encode(bytes(10)).decode(), encryption_key) is None
    assert listing.read_listing("", encryption_key) is None


def test_read_listing_non_canonical_plaintext_returns_none(encryption_key):
    payload = aead.seal("just some text", encryption_key)
    assert listing.read_listing(payload, encryption_key) is None


def test_read_listing_bad_key_raises(sample_fields, encryption_key, store):
    result = listing.prepare_listing(sample_fields, encryption_key, store)
    with pytest.raises(InvalidKey):
        listing.read_listing(result.encrypted, "c2hvcnQ=")
