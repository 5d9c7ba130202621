"""
Bencode encoder producing canonical bytes from value trees.
"""
from .structure import BencodeInt, BencodeList, BencodeString, from_native


def encode(obj, sort_keys: bool = False) -> bytes:
    """
    Encodes a BencodeType, or plain Python data, into bencoded bytes.

    Dictionary entries are written in storage order unless sort_keys is set,
    in which case they follow the lexicographic order of their encoded keys.
    """
    value = from_native(obj)

    if isinstance(value, BencodeInt):
        return encode_int(value.value)

    if isinstance(value, BencodeString):
        return encode_bytes(value.value)

    if isinstance(value, BencodeList):
        return encode_list(value.value, sort_keys)

    # from_native only yields the four value kinds; a dictionary is left
    return encode_dict(value.value, sort_keys)


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_list(lst, sort_keys: bool = False) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b"".join(encode(x, sort_keys) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_dict(d, sort_keys: bool = False) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    pairs = [(encode(k, sort_keys), encode(v, sort_keys)) for k, v in d.items()]
    if sort_keys:
        pairs.sort(key=lambda pair: _sort_key(pair[0]))
    return b"d" + b"".join(k + v for k, v in pairs) + b"e"


def _sort_key(encoded_key: bytes) -> bytes:
    # byte-string keys sort by payload, not by their length prefix
    if encoded_key[:1].isdigit():
        return encoded_key[encoded_key.index(b":") + 1:]
    return encoded_key
