"""Tests for canonical record encoding and decoding."""

import pytest
from pydantic import ValidationError

from deedseal.lib import record
from deedseal.lib.errors import MalformedRecord
from deedseal.lib.record import DeedFields

SAMPLE_PLAINTEXT = "GRN 12345,12,3,45,SELANGOR.PETALING,SHAH ALAM,0xABCDEF0123456789"


def test_encode_sample_deed(sample_fields):
    assert record.encode(sample_fields) == SAMPLE_PLAINTEXT


def test_encode_has_seven_segments(sample_fields):
    assert len(record.encode(sample_fields).split(",")) == 7


def test_encode_all_empty_fields():
    assert record.encode(DeedFields()) == ",,,,.,,"


def test_fields_are_trimmed():
    fields = DeedFields(no_hakmilik="  GRN 1 ", negeri="\tJOHOR\n", owner=" 0xAA ")
    assert fields.no_hakmilik == "GRN 1"
    assert fields.negeri == "JOHOR"
    assert record.encode(fields) == "GRN 1,,,,JOHOR.,,0xAA"


def test_fields_accept_wire_names():
    fields = DeedFields.model_validate(
        {"NoHakmilik": "GRN 9", "Negeri": "PERAK", "Owner": "0x01"}
    )
    assert fields.no_hakmilik == "GRN 9"
    assert fields.to_wire()["Negeri"] == "PERAK"
    assert set(fields.to_wire()) == {
        "NoHakmilik",
        "NoBangunan",
        "NoTingkat",
        "NoPetak",
        "Negeri",
        "Daerah",
        "Bandar",
        "Owner",
    }


@pytest.mark.parametrize("bad_value", [123, None, ["a"], {"a": 1}])
def test_fields_reject_non_strings(bad_value):
    with pytest.raises(ValidationError):
        DeedFields(no_petak=bad_value)


def test_fields_are_immutable(sample_fields):
    with pytest.raises(ValidationError):
        sample_fields.owner = "0xother"


def test_decode_sample():
    fields = record.decode(SAMPLE_PLAINTEXT)
    assert fields.negeri == "SELANGOR"
    assert fields.daerah == "PETALING"
    assert fields.bandar == "SHAH ALAM"
    assert fields.owner == "0xABCDEF0123456789"


@pytest.mark.parametrize(
    "fields",
    [
        DeedFields(),
        DeedFields(owner="0x1"),
        DeedFields(negeri="KUALA LUMPUR", daerah="", bandar="CHERAS"),
        DeedFields(no_hakmilik="PN 5/1", daerah="KLANG", owner="0xdead"),
        DeedFields(no_hakmilik="HSD 7", negeri="PULAU PINANG", daerah="TIMUR LAUT"),
    ],
)
def test_decode_inverts_encode(fields):
    assert record.decode(record.encode(fields)) == fields


def test_decode_inverts_encode_for_sample(sample_fields):
    assert record.decode(record.encode(sample_fields)) == sample_fields


def test_decode_keeps_commas_in_owner():
    fields = DeedFields(no_hakmilik="GRN 1", owner="Ali, Abu")
    assert record.decode(record.encode(fields)) == fields


def test_decode_keeps_periods_in_daerah():
    fields = DeedFields(negeri="SELANGOR", daerah="HULU.LANGAT")
    assert record.decode(record.encode(fields)) == fields


@pytest.mark.parametrize("plaintext", ["", "a,b,c", "1,2,3,4,5.6,7"])
def test_decode_rejects_too_few_segments(plaintext):
    with pytest.raises(MalformedRecord, match="Expected 7 segments"):
        record.decode(plaintext)


def test_decode_rejects_region_without_period():
    with pytest.raises(MalformedRecord, match="Negeri.Daerah"):
        record.decode("1,2,3,4,SELANGOR,SHAH ALAM,0x1")


def test_malformed_record_is_value_error():
    with pytest.raises(ValueError):
        record.decode("nope")


def test_delimiter_conflicts_clean_record(sample_fields):
    assert record.delimiter_conflicts(sample_fields) == []


def test_delimiter_conflicts_reports_commas_and_negeri_periods():
    fields = DeedFields(
        no_hakmilik="GRN 1, LOT 2",
        negeri="W.P.",
        daerah="A.B",
        bandar="X, Y",
        owner="Ali, Abu",
    )
    assert record.delimiter_conflicts(fields) == ["NoHakmilik", "Negeri", "Bandar"]
