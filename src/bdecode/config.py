"""
Decoder options.
"""
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

__all__ = ["DecodeEvent", "DecoderConfig", "DEFAULT_CONFIG"]


class DecodeEvent(NamedTuple):
    """One decoded value: its type name, byte span and nesting depth."""
    kind: str
    start: int
    end: int
    depth: int


@dataclass(frozen=True)
class DecoderConfig:
    # signed width of decoded integers
    int_bits: int = 64
    # accept a leading '-' (full bencode grammar)
    allow_negative: bool = False
    max_depth: int = 256
    on_value: Optional[Callable[[DecodeEvent], None]] = None

    def __post_init__(self):
        if not isinstance(self.int_bits, int) or self.int_bits < 32:
            raise ValueError("int_bits must be an integer >= 32")
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        if self.on_value is not None and not callable(self.on_value):
            raise ValueError("on_value must be callable")

    @property
    def int_min(self) -> int:
        return -(1 << (self.int_bits - 1))

    @property
    def int_max(self) -> int:
        return (1 << (self.int_bits - 1)) - 1


DEFAULT_CONFIG = DecoderConfig()
