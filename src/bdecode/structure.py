"""
Typed value tree produced by the decoder.
"""
__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
]


class BencodeType:
    """Base class for all decoded values."""
    __slots__ = ("value",)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"

    def to_python(self):
        """Returns the tree as plain int/bytes/list/dict objects."""
        return self.value


class BencodeInt(BencodeType):
    """A decoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        # bool is an int subclass but never a decoded value
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        self.value = value

    def __hash__(self):
        return hash((BencodeInt, self.value))


class BencodeString(BencodeType):
    """A decoded byte string. The payload is raw bytes, never text."""
    __slots__ = ()

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def __hash__(self):
        return hash((BencodeString, self.value))


class BencodeList(BencodeType):
    """A decoded list, in input order."""
    __slots__ = ()
    __hash__ = None

    def __init__(self, value: list):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        self.value = value

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def to_python(self):
        return [item.to_python() for item in self.value]


class BencodeDict(BencodeType):
    """
    A decoded dictionary keyed by raw bytes.

    Keys keep the order they were first seen in. Assigning an existing key
    replaces its value in place.
    """
    __slots__ = ()
    __hash__ = None

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        for k in value.keys():
            if not isinstance(k, bytes):
                raise TypeError("BencodeDict keys must be bytes.")
        self.value = value

    def __len__(self):
        return len(self.value)

    def __contains__(self, key):
        return key in self.value

    def __getitem__(self, key: bytes):
        return self.value[key]

    def get(self, key: bytes, default=None):
        return self.value.get(key, default)

    def to_python(self):
        return {k: v.to_python() for k, v in self.value.items()}
