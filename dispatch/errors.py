"""
dispatch/errors.py
------------------
Errors raised by the callback codec.
"""


class CallbackCodecError(ValueError):
    """Base class for callback payload encoding/decoding errors."""


class UnrecognizedPrefixError(CallbackCodecError):
    """The payload's prefix matches no known callback variant."""

    def __init__(self, prefix: str):
        super().__init__(f"Unrecognized callback prefix: {prefix!r}")
        self.prefix = prefix


class MalformedCallbackError(CallbackCodecError):
    """The prefix is known but a positional field is missing or invalid."""

    def __init__(self, payload: str, reason: str):
        super().__init__(f"Malformed callback payload {payload!r}: {reason}")
        self.payload = payload


class UnsupportedCallbackError(CallbackCodecError):
    """serialize() was given an object that is not a callback variant."""


class InvalidCallbackFieldError(CallbackCodecError):
    """A field is empty, or contains the separator where it cannot be recovered."""

    def __init__(self, callback_type: str, value: str):
        super().__init__(f"Invalid field {value!r} for callback {callback_type!r}")
        self.callback_type = callback_type
        self.value = value
