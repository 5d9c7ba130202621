"""
Data structures for representing Bencoded types.
"""
import sys
from types import MappingProxyType

from .errors import BencodeTypeMismatch

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "from_native",
]

_HASH_MASK = (1 << sys.hash_info.width) - 1


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("_value",)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, val):
        if name == "_value" and not hasattr(self, "_value"):
            object.__setattr__(self, name, val)
            return
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._value == other._value

    def __str__(self):
        return self.render_text()

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"

    def render_text(self) -> str:
        """Debug rendering, not guaranteed to be parseable."""
        raise NotImplementedError

    def to_canonical_bytes(self, sort_keys: bool = False) -> bytes:
        """Encodes this value to bencoded bytes."""
        from .encoder import encode
        return encode(self, sort_keys=sort_keys)

    def to_native(self):
        raise NotImplementedError

    def to_str_map(self, strict: bool = False) -> dict:
        raise BencodeTypeMismatch(f"expected a dictionary, got {type(self).__name__}")


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        if not isinstance(value, int):
            raise TypeError("BencodeInt requires an integer.")
        self._value = int(value)

    def __hash__(self):
        return hash((BencodeInt, self._value))

    def render_text(self) -> str:
        return str(self._value)

    def to_native(self) -> int:
        return self._value


class BencodeString(BencodeType):
    """
    Represents a Bencoded byte string.

    The payload is kept as raw bytes; a str argument is stored as UTF-8.
    """
    __slots__ = ()

    def __init__(self, value):
        if isinstance(value, str):
            value = value.encode()
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes or str.")
        self._value = bytes(value)

    def __hash__(self):
        return hash((BencodeString, self._value))

    def __len__(self):
        return len(self._value)

    def render_text(self) -> str:
        return self._value.decode("utf-8", errors="replace")

    def text(self) -> str:
        """Strict UTF-8 view of the payload."""
        try:
            return self._value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BencodeTypeMismatch("byte string is not valid UTF-8") from exc

    def to_native(self) -> bytes:
        return self._value


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()

    def __init__(self, value=()):
        if isinstance(value, (str, bytes, bytearray, dict, BencodeType)):
            raise TypeError("BencodeList requires a sequence of values.")
        items = tuple(value)
        for item in items:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode values, got {type(item).__name__}")
        self._value = items

    def __hash__(self):
        return hash((BencodeList, self._value))

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __getitem__(self, index):
        return self._value[index]

    def render_text(self) -> str:
        return "[" + ", ".join(item.render_text() for item in self._value) + "]"

    def to_native(self) -> list:
        return [item.to_native() for item in self._value]


def _as_key(key):
    if isinstance(key, BencodeType):
        return key
    if isinstance(key, (str, bytes, bytearray)):
        return BencodeString(key)
    if isinstance(key, int):
        return BencodeInt(key)
    raise TypeError(f"unsupported dictionary key type {type(key).__name__}")


def _native_key(value):
    native = value.to_native()
    if isinstance(native, list):
        return tuple(_native_key(item) for item in value)
    if isinstance(native, dict):
        raise BencodeTypeMismatch("dictionary keys cannot be converted to native Python")
    return native


def _field_text(value, strict: bool) -> str:
    if isinstance(value, BencodeString):
        return value.text()
    if strict and not isinstance(value, BencodeInt):
        raise BencodeTypeMismatch(f"cannot render {type(value).__name__} as a string field")
    return value.render_text()


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys may be any Bencode value and are unique. Entries keep the order in
    which they were inserted; equality and hashing ignore that order.
    """
    __slots__ = ()

    def __init__(self, value=None):
        entries = {}
        items = value.items() if hasattr(value, "items") else (value or ())
        for k, v in items:
            if not isinstance(k, BencodeType) or not isinstance(v, BencodeType):
                raise TypeError("BencodeDict keys and values must be Bencode values.")
            entries[k] = v
        self._value = MappingProxyType(entries)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return dict(self._value) == dict(other._value)

    def __hash__(self):
        seed = 1
        for entry in self._value.items():
            seed = (seed + hash(entry)) & _HASH_MASK
        return hash((BencodeDict, seed))

    def __repr__(self):
        return f"BencodeDict({dict(self._value)!r})"

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __contains__(self, key):
        return _as_key(key) in self._value

    def __getitem__(self, key):
        return self._value[_as_key(key)]

    def get(self, key, default=None):
        return self._value.get(_as_key(key), default)

    def keys(self):
        return self._value.keys()

    def values(self):
        return self._value.values()

    def items(self):
        return self._value.items()

    def render_text(self) -> str:
        parts = []
        for k, v in self._value.items():
            parts.append(k.render_text())
            parts.append(v.render_text())
        return "{" + " ".join(parts) + "}"

    def to_native(self) -> dict:
        return {_native_key(k): v.to_native() for k, v in self._value.items()}

    def to_str_map(self, strict: bool = False) -> dict:
        """
        Flattens the dictionary into str -> str.

        Byte strings must be valid UTF-8 and rendered keys must stay distinct.
        Nested lists and dictionaries are rendered with render_text(), or
        rejected when `strict` is set.
        """
        result = {}
        for k, v in self._value.items():
            key = _field_text(k, strict)
            if key in result:
                raise BencodeTypeMismatch(f"key {key!r} is not unique once rendered as text")
            result[key] = _field_text(v, strict)
        return result


def from_native(obj) -> BencodeType:
    """Builds a Bencode value tree from plain Python data."""
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, int):
        return BencodeInt(int(obj))

    if isinstance(obj, (str, bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, (list, tuple)):
        return BencodeList(from_native(x) for x in obj)

    if isinstance(obj, dict):
        return BencodeDict((from_native(k), from_native(v)) for k, v in obj.items())

    raise BencodeTypeMismatch(f"Cannot bencode object of type {type(obj)}")
