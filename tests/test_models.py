import json
from datetime import datetime, timezone

import pytest

from disgord.models import (
    DefaultMessageNotificationLvl,
    Discriminator,
    ExplicitContentFilterLvl,
    MFALvl,
    Time,
    UnsupportedTypeError,
    VerificationLvl,
    extract_attribute,
    new_discriminator,
)
from disgord.util import Snowflake


def test_unsupported_type_error_is_raised_for_bad_input():
    with pytest.raises(UnsupportedTypeError):
        Time.from_json(12)


def test_time_omitempty():
    encoded = json.dumps({"time": Time().to_json()}, separators=(",", ":"))
    assert encoded == '{"time":""}'


def test_time_round_trip():
    text = "2018-06-10T12:34:56.123456+00:00"
    assert Time.from_json(text).to_json() == text


def test_time_empty_string_is_zero():
    assert Time.from_json("").is_zero()


def test_time_parses_z_zone():
    parsed = Time.from_json("2018-06-10T12:34:56Z")
    assert parsed.value == datetime(2018, 6, 10, 12, 34, 56, tzinfo=timezone.utc)


def test_time_invalid_raises():
    with pytest.raises(ValueError):
        Time.from_json("not a time")


@pytest.mark.parametrize(
    "value,expected",
    [(0, ""), (1, "0001"), (4, "0004"), (12, "0012"), (120, "0120"), (1201, "1201")],
)
def test_discriminator_string(value, expected):
    assert str(Discriminator(value)) == expected


def test_discriminator_unmarshal():
    d = Discriminator.from_json(json.loads('"0001"'))
    assert str(d) == "0001"

    d = Discriminator.from_json(json.loads('"0201"'))
    assert str(d) == "0201"

    d = Discriminator.from_json(json.loads('""'))
    assert str(d) == ""
    assert d.not_set()


def test_discriminator_marshal():
    assert json.dumps(Discriminator(34).to_json()) == '"0034"'
    assert json.dumps(Discriminator(0).to_json()) == '""'


def test_discriminator_not_set():
    assert Discriminator(34).not_set() is False
    assert Discriminator(0).not_set() is True


def test_discriminator_from_json_rejects_garbage():
    with pytest.raises(ValueError):
        Discriminator.from_json("12a4")


def test_new_discriminator():
    assert new_discriminator("0034") == 34
    with pytest.raises(ValueError):
        new_discriminator("70000")
    with pytest.raises(ValueError):
        new_discriminator("abc")


def test_levels():
    assert ExplicitContentFilterLvl(0).disabled()
    assert ExplicitContentFilterLvl(2).all_members()
    assert not ExplicitContentFilterLvl(1).all_members()
    assert MFALvl(1).elevated()
    assert not MFALvl(1).none()
    assert VerificationLvl(4).very_high()
    assert VerificationLvl(2).medium()
    assert DefaultMessageNotificationLvl(1).only_mentions()


def test_extract_attribute_root_id():
    data = b'{"id":"123","x":{"id":"5"}}'
    assert extract_attribute(b'"id":"', 0, data) == Snowflake(123)


def test_extract_attribute_skips_nested():
    data = b'{"a":{"id":"5"},"id":"9"}'
    assert extract_attribute('"id":"', 0, data) == 9


def test_extract_attribute_missing():
    with pytest.raises(ValueError, match="unable to locate ID"):
        extract_attribute(b'"id":"', 0, b'{"name":"x"}')


def test_extract_attribute_empty():
    with pytest.raises(ValueError, match="id was empty"):
        extract_attribute(b'"id":"', 0, b'{"id":""}')