import pytest

from cel_amqp.cel_types import (
    AmaFlag,
    CelEventType,
    amaflags_to_string,
    enum_values,
    parse_amaflag,
    parse_event_type,
)


def test_parse_event_type_accepts_wire_name_and_member_name():
    assert parse_event_type("CHAN_START") is CelEventType.CHANNEL_START
    assert parse_event_type("channel_start") is CelEventType.CHANNEL_START
    assert parse_event_type(" user_defined ") is CelEventType.USER_DEFINED


def test_parse_event_type_rejects_unknown_with_allowed_values():
    with pytest.raises(ValueError) as exc_info:
        parse_event_type("CALL_MADE")

    assert "Invalid CelEventType: 'CALL_MADE'" in str(exc_info.value)
    assert "CHAN_START" in str(exc_info.value)


def test_enum_values_keep_declaration_order():
    values = enum_values(CelEventType)

    assert values[0] == "CHAN_START"
    assert values[-1] == "DTMF"
    assert len(values) == 21


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1, "OMIT"), (2, "BILLING"), (3, "DOCUMENTATION"), (0, "Unknown"), (42, "Unknown")],
)
def test_amaflags_to_string(value, expected):
    assert amaflags_to_string(value) == expected


def test_parse_amaflag_accepts_names_digits_and_ints():
    assert parse_amaflag("billing") == AmaFlag.BILLING
    assert parse_amaflag("3") == 3
    assert parse_amaflag(1) == 1
    assert parse_amaflag("") == 0

    with pytest.raises(ValueError):
        parse_amaflag("free")
