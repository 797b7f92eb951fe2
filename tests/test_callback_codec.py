"""
🧪 test_callback_codec.py - unit tests for dispatch.callback_codec

Checks:
- encode/decode round-trip for every callback variant
- the 64-byte limit with realistic field lengths
- error taxonomy for unknown, malformed and unsupported payloads
"""

import pytest

from dispatch import callback_codec
from dispatch.errors import (
    CallbackCodecError,
    InvalidCallbackFieldError,
    MalformedCallbackError,
    UnrecognizedPrefixError,
    UnsupportedCallbackError,
)
from models.callbacks import (
    NavigationCallback,
    PaginationCallback,
    RaceDetailsCallback,
    RaceFavoriteCallback,
    RaceLocationCallback,
    RaceReminderCallback,
    RacesFilterCallback,
    RacesListCallback,
    RacesListFavoriteCallback,
    RacesSearchCallback,
    RaceUnfavoriteCallback,
    UserConfigCallback,
)

# Race IDs are database keys; 24 chars also covers ObjectId-style IDs.
LONG_ID = "65f1c2a9b7e4d3c2a1f09e8d"

EXAMPLES = [
    RaceDetailsCallback(LONG_ID),
    RaceReminderCallback(LONG_ID, "cancel"),
    RaceLocationCallback(LONG_ID),
    RacesListCallback(),
    RacesListCallback(distance=42),
    RacesFilterCallback(21),
    RacesSearchCallback(10, 20),
    RaceFavoriteCallback(LONG_ID),
    RaceUnfavoriteCallback(LONG_ID),
    RacesListFavoriteCallback(),
    UserConfigCallback("notifications", "off"),
    UserConfigCallback("distances"),
    NavigationCallback("back", "races_list"),
    PaginationCallback("next", 999, "races"),
]


@pytest.mark.parametrize("data", EXAMPLES, ids=lambda d: d.type)
def test_round_trip(data):
    assert callback_codec.deserialize(callback_codec.serialize(data)) == data


@pytest.mark.parametrize("data", EXAMPLES, ids=lambda d: d.type)
def test_fits_telegram_limit(data):
    assert callback_codec.get_size(data) <= callback_codec.MAX_CALLBACK_BYTES
    assert callback_codec.validate_size(data) is True


def test_race_details_wire_format():
    payload = callback_codec.serialize(RaceDetailsCallback(race_id="123"))
    assert payload == "rd:123"
    assert callback_codec.get_size(RaceDetailsCallback(race_id="123")) == 6
    assert callback_codec.deserialize("rd:123") == RaceDetailsCallback(race_id="123")


def test_races_search_wire_format():
    assert callback_codec.serialize(RacesSearchCallback(21, 42)) == "rs:21:42"
    decoded = callback_codec.deserialize("rs:21:42")
    assert decoded.start_distance == 21
    assert decoded.end_distance == 42


def test_optional_fields_are_omitted():
    assert callback_codec.serialize(RacesListCallback()) == "ls"
    assert callback_codec.serialize(UserConfigCallback("distances")) == "uc:distances"
    assert callback_codec.serialize(RacesListFavoriteCallback()) == "lf"


def test_free_text_target_keeps_separator():
    data = NavigationCallback("next", "races:page")
    assert callback_codec.deserialize(callback_codec.serialize(data)) == data


def test_oversized_payload_fails_validation():
    data = NavigationCallback("back", "x" * 80)
    assert callback_codec.get_size(data) > callback_codec.MAX_CALLBACK_BYTES
    assert callback_codec.validate_size(data) is False


def test_unknown_prefix():
    with pytest.raises(UnrecognizedPrefixError) as exc:
        callback_codec.deserialize("zz:1")
    assert exc.value.prefix == "zz"
    assert isinstance(exc.value, CallbackCodecError)


@pytest.mark.parametrize("payload", ["rd", "rd:", "rf:abc", "rs:21", "pag:next:x:races", "nav:back"])
def test_malformed_payloads(payload):
    with pytest.raises(MalformedCallbackError):
        callback_codec.deserialize(payload)


@pytest.mark.parametrize("data", [
    UserConfigCallback("distances", ""),
    NavigationCallback("back", ""),
    PaginationCallback("next", 2, ""),
    RaceDetailsCallback(""),
    RaceDetailsCallback("12:34"),
    RaceReminderCallback("12:34", "set"),
    UserConfigCallback("dist:ances", "5"),
], ids=repr)
def test_serialize_rejects_fields_that_would_not_decode(data):
    with pytest.raises(InvalidCallbackFieldError) as exc:
        callback_codec.serialize(data)
    assert isinstance(exc.value, CallbackCodecError)


def test_trailing_value_may_contain_separator():
    data = UserConfigCallback("distances", "5:10")
    assert callback_codec.serialize(data) == "uc:distances:5:10"
    assert callback_codec.deserialize("uc:distances:5:10") == data


def test_serialize_rejects_unknown_objects():
    with pytest.raises(UnsupportedCallbackError):
        callback_codec.serialize(object())
