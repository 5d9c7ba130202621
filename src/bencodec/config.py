"""
Decoder limits for untrusted input.
"""
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_DEPTH = 256                    # nested lists/dicts
DEFAULT_MAX_STRING_LENGTH = 32 * 2 ** 20   # 32 MiB per byte string
DEFAULT_INT_BITS = 32                      # signed width of decoded integers


@dataclass(frozen=True)
class DecoderConfig:
    max_depth: int = DEFAULT_MAX_DEPTH
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH
    int_bits: Optional[int] = DEFAULT_INT_BITS  # None accepts arbitrary precision

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError("max_depth must be positive")
        if self.max_string_length < 0:
            raise ValueError("max_string_length must not be negative")
        if self.int_bits is not None and self.int_bits < 2:
            raise ValueError("int_bits must be at least 2")

    @classmethod
    def unbounded(cls) -> "DecoderConfig":
        """Default depth and length limits, arbitrary-precision integers."""
        return cls(int_bits=None)

    def int_range(self):
        """Inclusive (min, max) bounds for decoded integers, or None."""
        if self.int_bits is None:
            return None
        half = 1 << (self.int_bits - 1)
        return -half, half - 1


DEFAULT_CONFIG = DecoderConfig()
