"""
Sloth Block Codec

Fixed-width byte blocks <-> integers, least significant byte first.
"""

from __future__ import annotations
import secrets
from typing import Optional

from sloth.constants import BLOCK_BYTE_ORDER, BLOCK_BYTE_SIZE
from sloth.prime import SlothParams, default_params


def from_block(block: bytes, byte_size: int = BLOCK_BYTE_SIZE) -> int:
    """Convert a byte block to an integer."""
    if len(block) != byte_size:
        raise ValueError(f"block must be {byte_size} bytes, got {len(block)}")
    return int.from_bytes(block, BLOCK_BYTE_ORDER)


def to_block(value: int, byte_size: int = BLOCK_BYTE_SIZE) -> bytes:
    """Convert an integer to a zero-padded byte block."""
    if value < 0:
        raise ValueError(f"block value must be non-negative: {value}")
    try:
        return int(value).to_bytes(byte_size, BLOCK_BYTE_ORDER)
    except OverflowError:
        raise ValueError(f"value does not fit in {byte_size} bytes") from None


def random_block(byte_size: int = BLOCK_BYTE_SIZE) -> bytes:
    """Fresh random block."""
    return secrets.token_bytes(byte_size)


def roundtrip(block: bytes, params: Optional[SlothParams] = None) -> bytes:
    """
    Run a block through the full pipeline: bytes -> encode -> decode -> bytes.

    The result equals `block` whenever its integer value is below the prime.

    Raises:
        OutOfRange: If the block value is not below the prime
    """
    from sloth.permutation import decode, encode

    params = params or default_params()
    x = from_block(block, params.byte_size)
    y = encode(x, params.prime, params.exponent)
    return to_block(decode(y, params.prime), params.byte_size)
