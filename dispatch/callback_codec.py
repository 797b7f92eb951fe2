"""
dispatch/callback_codec.py
--------------------------
Encodes callback payloads into short ASCII strings for inline buttons
and decodes them back.

Wire format:
    <prefix>[:<field>]*

Telegram rejects `callback_data` longer than 64 bytes, so every variant
uses a 2-3 character prefix followed by its fields in a fixed order.
Absent optional trailing fields are not emitted.

    rd:123          RaceDetailsCallback(race_id='123')
    rs:21:42        RacesSearchCallback(start_distance=21, end_distance=42)
    ls              RacesListCallback()
"""

from models.callbacks import (
    CallbackData,
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
from dispatch.errors import (
    InvalidCallbackFieldError,
    MalformedCallbackError,
    UnrecognizedPrefixError,
    UnsupportedCallbackError,
)

MAX_CALLBACK_BYTES = 64
SEPARATOR = ":"

PREFIXES: dict[str, str] = {
    RaceDetailsCallback.type: "rd",
    RaceReminderCallback.type: "rr",
    RaceLocationCallback.type: "rl",
    RacesListCallback.type: "ls",
    RacesFilterCallback.type: "rf",
    RacesSearchCallback.type: "rs",
    RaceFavoriteCallback.type: "fv",
    RaceUnfavoriteCallback.type: "uf",
    RacesListFavoriteCallback.type: "lf",
    UserConfigCallback.type: "uc",
    NavigationCallback.type: "nav",
    PaginationCallback.type: "pag",
}


def _join(data: CallbackData, prefix: str, *fields, trailing=None) -> str:
    """
    Join positional fields after the prefix.

    Only `trailing` may contain the separator, since decoding re-joins
    everything after the fixed fields into it. No field may be empty.
    """
    parts = [prefix]
    for value in fields:
        text = str(value)
        if not text or SEPARATOR in text:
            raise InvalidCallbackFieldError(data.type, text)
        parts.append(text)
    if trailing is not None:
        if trailing == "":
            raise InvalidCallbackFieldError(data.type, trailing)
        parts.append(trailing)
    return SEPARATOR.join(parts)


def serialize(data: CallbackData) -> str:
    """
    Encode a callback variant into its wire string.

    Raises:
        UnsupportedCallbackError: If `data` is not a known variant.
        InvalidCallbackFieldError: If a field would not survive decoding.
    """
    prefix = PREFIXES.get(getattr(data, "type", None))
    if prefix is None:
        raise UnsupportedCallbackError(f"Unsupported callback type: {type(data).__name__}")

    if isinstance(data, (RaceDetailsCallback, RaceLocationCallback,
                         RaceFavoriteCallback, RaceUnfavoriteCallback)):
        return _join(data, prefix, data.race_id)
    if isinstance(data, RaceReminderCallback):
        return _join(data, prefix, data.race_id, data.action)
    if isinstance(data, RacesListCallback):
        return prefix if data.distance is None else _join(data, prefix, data.distance)
    if isinstance(data, RacesFilterCallback):
        return _join(data, prefix, data.distance)
    if isinstance(data, RacesSearchCallback):
        return _join(data, prefix, data.start_distance, data.end_distance)
    if isinstance(data, RacesListFavoriteCallback):
        return prefix
    if isinstance(data, UserConfigCallback):
        return _join(data, prefix, data.action, trailing=data.value)
    if isinstance(data, NavigationCallback):
        return _join(data, prefix, data.action, trailing=data.target or "")
    if isinstance(data, PaginationCallback):
        return _join(data, prefix, data.action, data.page, trailing=data.target or "")

    raise UnsupportedCallbackError(f"Unsupported callback type: {type(data).__name__}")


def _field(payload: str, parts: list[str], index: int) -> str:
    """Positional field, rejecting missing or empty segments."""
    if index >= len(parts) or parts[index] == "":
        raise MalformedCallbackError(payload, f"missing field #{index}")
    return parts[index]


def _int_field(payload: str, parts: list[str], index: int) -> int:
    value = _field(payload, parts, index)
    try:
        return int(value)
    except ValueError:
        raise MalformedCallbackError(payload, f"field #{index} is not an integer: {value!r}") from None


def _rest(parts: list[str], index: int) -> str:
    """Trailing free-text field; keeps any ':' it contained."""
    return SEPARATOR.join(parts[index:])


def deserialize(payload: str) -> CallbackData:
    """
    Decode a wire string back into its callback variant.

    Raises:
        UnrecognizedPrefixError: If the prefix matches no variant.
        MalformedCallbackError: If a required field is missing or not a number.
    """
    parts = payload.split(SEPARATOR)
    prefix = parts[0]

    if prefix == "rd":
        return RaceDetailsCallback(race_id=_field(payload, parts, 1))
    if prefix == "rr":
        return RaceReminderCallback(
            race_id=_field(payload, parts, 1),
            action=_field(payload, parts, 2),
        )
    if prefix == "rl":
        return RaceLocationCallback(race_id=_field(payload, parts, 1))
    if prefix == "ls":
        if len(parts) > 1 and parts[1]:
            return RacesListCallback(distance=_int_field(payload, parts, 1))
        return RacesListCallback()
    if prefix == "rf":
        return RacesFilterCallback(distance=_int_field(payload, parts, 1))
    if prefix == "rs":
        return RacesSearchCallback(
            start_distance=_int_field(payload, parts, 1),
            end_distance=_int_field(payload, parts, 2),
        )
    if prefix == "fv":
        return RaceFavoriteCallback(race_id=_field(payload, parts, 1))
    if prefix == "uf":
        return RaceUnfavoriteCallback(race_id=_field(payload, parts, 1))
    if prefix == "lf":
        return RacesListFavoriteCallback()
    if prefix == "uc":
        value = _rest(parts, 2)
        return UserConfigCallback(action=_field(payload, parts, 1), value=value or None)
    if prefix == "nav":
        _field(payload, parts, 2)
        return NavigationCallback(action=_field(payload, parts, 1), target=_rest(parts, 2))
    if prefix == "pag":
        _field(payload, parts, 3)
        return PaginationCallback(
            action=_field(payload, parts, 1),
            page=_int_field(payload, parts, 2),
            target=_rest(parts, 3),
        )

    raise UnrecognizedPrefixError(prefix)


def get_size(data: CallbackData) -> int:
    """UTF-8 byte length of the encoded payload."""
    return len(serialize(data).encode("utf-8"))


def validate_size(data: CallbackData) -> bool:
    """True if the encoded payload fits Telegram's 64-byte limit."""
    return get_size(data) <= MAX_CALLBACK_BYTES
