"""
Exception taxonomy raised by the bencode codec.
"""
__all__ = [
    "BencodeError",
    "BencodeIoError",
    "BencodeEofError",
    "BencodeParseError",
    "BencodeDecodeError",
    "BencodeTypeMismatch",
    "BencodeLimitExceeded",
]


class BencodeError(Exception):
    """Base class for every codec failure."""
    kind = "Error"

    def __str__(self):
        detail = super().__str__()
        if detail:
            return f"Bencode {self.kind}: {detail}"
        return f"Bencode {self.kind}"


class BencodeIoError(BencodeError, OSError):
    """The underlying byte source failed."""
    kind = "Io"


class BencodeEofError(BencodeError, ValueError):
    """The stream ended while a value or delimiter was still expected."""
    kind = "Eof"

    def __init__(self, message: str = "", at_boundary: bool = False):
        super().__init__(message)
        # True when nothing of the current top-level value had been read yet
        self.at_boundary = at_boundary


class BencodeParseError(BencodeError, ValueError):
    """A numeric field (integer literal or string length) was not valid decimal."""
    kind = "Parse"


class BencodeDecodeError(BencodeError, ValueError):
    """Structural violation: bad lead byte, map missing a value, stray terminator."""
    kind = "Error"


class BencodeTypeMismatch(BencodeDecodeError, TypeError):
    """A typed conversion was attempted on the wrong kind of value."""
    kind = "TypeMismatch"


class BencodeLimitExceeded(BencodeError, ValueError):
    """Input exceeded the configured nesting depth or string length."""
    kind = "LimitExceeded"
