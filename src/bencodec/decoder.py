"""
Bencode decoder reading one value at a time from a byte stream.
"""
import io
import logging
import re
import sys

from .config import DEFAULT_CONFIG, DecoderConfig
from .errors import (
    BencodeDecodeError,
    BencodeEofError,
    BencodeIoError,
    BencodeLimitExceeded,
    BencodeParseError,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString

logger = logging.getLogger(__name__)

_INT_LITERAL = re.compile(rb"-?[0-9]+")
_DIGITS = b"0123456789"
_READ_CHUNK = 64 * 1024
_INT_DIGITS_FALLBACK = 4300  # CPython default for int() string conversion


def _max_int_digits() -> int:
    getter = getattr(sys, "get_int_max_str_digits", None)
    return (getter() if getter else 0) or _INT_DIGITS_FALLBACK


class EndOfContainer:
    """Result of reading the 'e' terminator that closes a list or dictionary."""
    __slots__ = ()

    def __repr__(self):
        return "END"

    def __bool__(self):
        return False


END = EndOfContainer()


class BencodeDecoder:
    """
    Decodes Bencoded values from a readable byte stream.

    `stream` is anything with a ``read(n)`` method returning bytes; raw
    bytes are wrapped in a BytesIO.
    """
    def __init__(self, stream, config: DecoderConfig = None):
        if isinstance(stream, (bytes, bytearray, memoryview)):
            stream = io.BytesIO(bytes(stream))
        if not hasattr(stream, "read"):
            raise TypeError("stream must be bytes or expose read(n)")
        self.stream = stream
        self.config = config or DEFAULT_CONFIG
        self.offset = 0  # bytes consumed so far
        self._depth = 0

    def decode(self):
        """Decodes one top-level value; a stray terminator is an error."""
        result = self.decode_one()
        if result is END:
            self._fail(BencodeDecodeError, f"unexpected end-of-container marker at offset {self.offset - 1}")
        return result

    def __iter__(self):
        """Yields top-level values until the stream ends between two values."""
        while True:
            try:
                result = self.decode()
            except BencodeEofError as exc:
                if exc.at_boundary:
                    return
                raise
            yield result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _fail(self, error_cls, message, **kwargs):
        logger.debug("%s at offset %d: %s", error_cls.__name__, self.offset, message)
        raise error_cls(message, **kwargs)

    def _read(self, n: int) -> bytes:
        try:
            chunk = self.stream.read(n)
        except OSError as exc:
            logger.debug("read failed at offset %d: %s", self.offset, exc)
            raise BencodeIoError(str(exc)) from exc
        if chunk is None:
            # non-blocking stream with no data ready
            self._fail(BencodeIoError, "stream returned no data; a blocking stream is required")
        self.offset += len(chunk)
        return chunk

    def _read_exact(self, n: int) -> bytes:
        """Reads exactly n bytes, in chunks so a bogus length cannot preallocate."""
        parts = []
        remaining = n
        while remaining:
            chunk = self._read(min(remaining, _READ_CHUNK))
            if not chunk:
                self._fail(BencodeEofError, f"expected {n} bytes, stream ended after {n - remaining}")
            parts.append(chunk)
            remaining -= len(chunk)
        return b"".join(parts)

    def _read_until(self, delimiter: bytes, limit: int) -> bytes:
        """Reads up to and including `delimiter`; returns the bytes before it."""
        data = bytearray()
        while True:
            ch = self._read(1)
            if not ch:
                self._fail(BencodeEofError, f"stream ended before {delimiter!r}")
            if ch == delimiter:
                return bytes(data)
            data += ch
            if len(data) > limit:
                self._fail(BencodeParseError, f"no {delimiter!r} within {limit} bytes")

    # --------------------------
    # Parsing functions
    # --------------------------

    def decode_one(self):
        """
        Consumes exactly one encoded value.

        Returns a BencodeType, or END when the lead byte is the 'e' that
        closes the enclosing list or dictionary.
        """
        ch = self._read(1)
        if not ch:
            self._fail(
                BencodeEofError,
                "stream ended where a value was expected",
                at_boundary=self._depth == 0,
            )

        if ch == b"i":
            return self._parse_int()

        if ch == b"d":
            return self._parse_dict()

        if ch == b"l":
            return self._parse_list()

        if ch == b"e":
            return END

        if ch == b"0":
            return self._parse_empty_string()

        if ch in _DIGITS:
            return self._parse_string(ch)

        self._fail(BencodeDecodeError, f"invalid character: {ch!r}")

    def _parse_int(self):
        """Parses the digits of i<digits>e; the 'i' is already consumed."""
        bounds = self.config.int_range()
        # widest literal allowed: sign plus the decimal digits of the bound
        if bounds:
            limit = len(str(bounds[0])) + 1
        else:
            limit = min(self.config.max_string_length, _max_int_digits() + 1)
        literal = self._read_until(b"e", limit)
        if not _INT_LITERAL.fullmatch(literal):
            self._fail(BencodeParseError, f"invalid integer literal {literal!r}")

        try:
            num = int(literal)
        except ValueError as exc:
            logger.debug("integer literal rejected at offset %d: %s", self.offset, exc)
            raise BencodeParseError(f"invalid integer literal of {len(literal)} bytes") from exc
        if bounds and not bounds[0] <= num <= bounds[1]:
            self._fail(BencodeParseError, f"integer {num} out of range for {self.config.int_bits}-bit value")
        return BencodeInt(num)

    def _parse_empty_string(self):
        ch = self._read(1)
        if not ch:
            self._fail(BencodeEofError, "stream ended before ':'")
        if ch != b":":
            self._fail(BencodeParseError, f"invalid string length: leading zero followed by {ch!r}")
        return BencodeString(b"")

    def _parse_string(self, first: bytes):
        """Parses <length>:<bytes>; `first` is the leading length digit."""
        limit = len(str(self.config.max_string_length)) + 1
        digits = first + self._read_until(b":", limit)
        if not digits.isdigit():
            self._fail(BencodeParseError, f"invalid string length {digits!r}")

        length = int(digits)
        if length > self.config.max_string_length:
            self._fail(
                BencodeLimitExceeded,
                f"string length {length} exceeds maximum {self.config.max_string_length}",
            )
        return BencodeString(self._read_exact(length))

    def _enter(self):
        if self._depth >= self.config.max_depth:
            self._fail(BencodeLimitExceeded, f"nesting deeper than {self.config.max_depth}")
        self._depth += 1

    def _parse_list(self):
        """Parses list items until the terminator."""
        self._enter()
        items = []
        try:
            while True:
                item = self.decode_one()
                if item is END:
                    return BencodeList(items)
                items.append(item)
        finally:
            self._depth -= 1

    def _parse_dict(self):
        """Parses key/value pairs until the terminator in key position."""
        self._enter()
        entries = {}
        try:
            while True:
                key = self.decode_one()
                if key is END:
                    return BencodeDict(entries)
                value = self.decode_one()
                if value is END:
                    self._fail(BencodeDecodeError, f"map is missing value for key {key.render_text()!r}")
                entries[key] = value
        finally:
            self._depth -= 1


def decode_one(stream, config: DecoderConfig = None):
    """
    Decodes one value from `stream`, returning END for a bare terminator.
    """
    return BencodeDecoder(stream, config).decode_one()


def decode(data, config: DecoderConfig = None):
    """
    Convenience function to decode Bencoded data.
    """
    return BencodeDecoder(data, config).decode()


def iter_decode(stream, config: DecoderConfig = None):
    """Yields consecutive top-level values from `stream`."""
    return iter(BencodeDecoder(stream, config))
