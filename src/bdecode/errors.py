"""
Exceptions raised while decoding bencoded data.
"""
__all__ = [
    "BencodeDecodeError",
    "UnexpectedToken",
    "ExpectedStringKey",
    "MalformedInteger",
    "MalformedString",
    "UnterminatedAggregate",
    "OutOfBounds",
    "NestingTooDeep",
    "TrailingData",
]


class BencodeDecodeError(ValueError):
    """Base class for Bencode decoding errors."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at index {position})")
        self.message = message
        self.position = position


class UnexpectedToken(BencodeDecodeError):
    """The lookahead byte does not start any value."""


class ExpectedStringKey(BencodeDecodeError):
    """A dictionary key position does not hold a byte string."""


class MalformedInteger(BencodeDecodeError):
    """Integer digits missing, badly terminated or out of range."""


class MalformedString(BencodeDecodeError):
    """String length prefix malformed or payload truncated."""


class UnterminatedAggregate(BencodeDecodeError):
    """Input ended inside a list or dictionary."""


class OutOfBounds(BencodeDecodeError):
    """Read past the end of input."""


class NestingTooDeep(BencodeDecodeError):
    """Aggregates nested deeper than the decoder allows."""


class TrailingData(BencodeDecodeError):
    """Bytes left over after a single expected value."""
