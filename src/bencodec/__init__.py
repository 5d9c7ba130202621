"""
Bencode package for encoding and decoding bencoded data.
"""
from .config import DecoderConfig
from .decoder import END, BencodeDecoder, EndOfContainer, decode, decode_one, iter_decode
from .encoder import encode
from .errors import (
    BencodeDecodeError,
    BencodeEofError,
    BencodeError,
    BencodeIoError,
    BencodeLimitExceeded,
    BencodeParseError,
    BencodeTypeMismatch,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, from_native

__all__ = [
    'decode', 'decode_one', 'iter_decode', 'encode', 'from_native',
    'BencodeDecoder', 'DecoderConfig', 'END', 'EndOfContainer',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'BencodeIoError', 'BencodeEofError', 'BencodeParseError',
    'BencodeDecodeError', 'BencodeTypeMismatch', 'BencodeLimitExceeded',
]
