"""
Bencode decoder: turns a buffer of concatenated bencoded values into a list
of typed value trees.
"""
import logging
from typing import List, Optional

from .config import DEFAULT_CONFIG, DecodeEvent, DecoderConfig
from .errors import (
    BencodeDecodeError,
    ExpectedStringKey,
    MalformedInteger,
    MalformedString,
    NestingTooDeep,
    OutOfBounds,
    TrailingData,
    UnexpectedToken,
    UnterminatedAggregate,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)


def _as_bytes(data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Cannot decode object of type {type(data)}")


class BencodeDecoder:
    """
    Decodes Bencoded bytes into BencodeType trees.

    A decoder owns a single forward-only cursor and is meant to be used for
    one call to ``decode()`` or ``decode_one()``.
    """
    def __init__(self, data, config: Optional[DecoderConfig] = None):
        self.data = _as_bytes(data)
        self.config = config if config is not None else DEFAULT_CONFIG
        self.i = 0  # cursor index
        self.depth = 0
        self.last_opened = 0  # index of the most recently opened aggregate

    @property
    def position(self) -> int:
        return self.i

    def decode(self) -> List[BencodeType]:
        """Decodes every top-level value until the input is exhausted."""
        values = []
        try:
            while self.i < len(self.data):
                values.append(self.decode_value())
        except BencodeDecodeError as exc:
            logger.debug("Decode failed: %s", exc)
            raise

        logger.debug("Decoded %d top-level value(s) from %d bytes", len(values), self.i)
        return values

    def decode_one(self) -> BencodeType:
        """Decodes exactly one value; anything after it is an error."""
        try:
            value = self.decode_value()
            if self.i != len(self.data):
                raise TrailingData(
                    f"{len(self.data) - self.i} byte(s) after the first value", self.i
                )
        except BencodeDecodeError as exc:
            logger.debug("Decode failed: %s", exc)
            raise

        return value

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> bytes:
        if self.i >= len(self.data):
            raise OutOfBounds("Unexpected end of input", self.i)
        return self.data[self.i:self.i+1]

    def _consume(self, n=1) -> bytes:
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        if self.i + n > len(self.data):
            raise OutOfBounds(f"Cannot read {n} byte(s)", self.i)
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _read_digits(self) -> bytes:
        start = self.i
        while self._peek().isdigit():
            self.i += 1
        return self.data[start:self.i]

    def _at_close(self, kind: str, opened_at: int) -> bool:
        """Consumes the closing 'e' of an aggregate if it is next."""
        if self.i >= len(self.data):
            raise UnterminatedAggregate(
                f"{kind} opened at index {opened_at} is never closed", self.i
            )
        if self.data[self.i:self.i+1] == b'e':
            self.i += 1
            return True
        return False

    def _check_depth(self, opened_at: int):
        self.last_opened = opened_at
        if self.depth > self.config.max_depth:
            raise NestingTooDeep(
                f"Nesting deeper than {self.config.max_depth} levels", opened_at
            )

    def _emit(self, kind: str, start: int, depth: int):
        if self.config.on_value is not None:
            self.config.on_value(DecodeEvent(kind, start, self.i, depth))

    # --------------------------
    # Parsing functions
    # --------------------------

    def decode_value(self) -> BencodeType:
        """Decodes the single value starting at the cursor."""
        ch = self._peek()
        start = self.i
        depth = self.depth

        if ch == b'i':
            value, kind = self._parse_int(), "int"
        elif ch.isdigit():  # strings start with their length
            value, kind = self._parse_string(), "string"
        elif ch == b'l' or ch == b'd':
            kind = "list" if ch == b'l' else "dict"
            try:
                value = self._parse_list() if ch == b'l' else self._parse_dict()
            except RecursionError:
                # converted once the stack has unwound to the outermost aggregate
                if depth:
                    raise
                raise NestingTooDeep(
                    "Nesting exceeds the interpreter stack", self.last_opened
                ) from None
        else:
            raise UnexpectedToken(f"Invalid token {ch!r}", self.i)

        self._emit(kind, start, depth)
        return value

    def _parse_int(self) -> BencodeInt:
        """Parses an integer: 'i', digits, 'e'."""
        start = self.i
        self._consume(1)  # skip 'i'

        negative = False
        if self.config.allow_negative and self._peek() == b'-':
            self._consume(1)
            negative = True

        digits = self._read_digits()
        if not digits:
            raise MalformedInteger("Integer has no digits", self.i)

        ch = self._peek()
        if ch != b'e':
            raise MalformedInteger(f"Integer terminated by {ch!r} instead of 'e'", self.i)

        limit = -self.config.int_min if negative else self.config.int_max
        if len(digits.lstrip(b'0')) > len(str(limit)) or int(digits) > limit:
            raise MalformedInteger(
                f"Integer does not fit in {self.config.int_bits} bits", start
            )

        num = int(digits)
        if negative:
            if num == 0:
                raise MalformedInteger("Negative zero is not an integer", start)
            num = -num

        self._consume(1)  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self) -> BencodeString:
        """Parses a byte string: decimal length, ':', payload."""
        start = self.i
        digits = self._read_digits()
        if not digits:
            raise MalformedString("String length has no digits", self.i)

        ch = self._peek()
        if ch != b':':
            raise MalformedString(f"Expected ':' after string length, found {ch!r}", self.i)
        self._consume(1)  # skip ':'

        remaining = len(self.data) - self.i
        if len(digits.lstrip(b'0')) > len(str(remaining)) or int(digits) > remaining:
            raise MalformedString(
                f"String declares {digits.decode()} bytes but only {remaining} remain", start
            )

        return BencodeString(self._consume(int(digits)))

    def _parse_list(self) -> BencodeList:
        """Parses a list: 'l', values, 'e'."""
        start = self.i
        self._consume(1)  # skip 'l'
        items = []

        self.depth += 1
        try:
            self._check_depth(start)
            while not self._at_close("list", start):
                items.append(self.decode_value())
        finally:
            self.depth -= 1

        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary: 'd', key/value pairs, 'e'."""
        start = self.i
        self._consume(1)  # skip 'd'
        obj = {}

        self.depth += 1
        try:
            self._check_depth(start)
            while not self._at_close("dictionary", start):
                # keys MUST be strings
                if not self._peek().isdigit():
                    raise ExpectedStringKey(
                        f"Dictionary key must be a string, found {self._peek()!r}", self.i
                    )
                key = self._parse_string().value

                if self.i >= len(self.data):
                    raise UnterminatedAggregate(
                        f"dictionary opened at index {start} ends after key {key!r}", self.i
                    )
                # last write wins on duplicate keys
                obj[key] = self.decode_value()
        finally:
            self.depth -= 1

        return BencodeDict(obj)


def decode(data, config: Optional[DecoderConfig] = None) -> List[BencodeType]:
    """
    Decodes every concatenated top-level value in ``data``.

    ``data`` may be bytes, bytearray, memoryview or str (encoded as UTF-8).
    Raises a BencodeDecodeError subclass on the first malformed construct.
    """
    return BencodeDecoder(data, config).decode()


def decode_one(data, config: Optional[DecoderConfig] = None) -> BencodeType:
    """Decodes ``data`` holding exactly one value."""
    return BencodeDecoder(data, config).decode_one()
