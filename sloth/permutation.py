"""
Sloth Square-Root Permutation

Bijection over Z_p for prime p = 3 (mod 4):

    encode: square-root extraction, x^((p+1)/4) mod p   (slow, one exponent)
    decode: squaring, y^2 mod p                          (fast, one multiply)

Exactly one of {x, p - x} is a residue because -1 is a non-residue when
p = 3 (mod 4). The parity of the output records which one was rooted:

    x residue      -> even root of x
    x non-residue  -> odd root of p - x

so decode needs no side information. Zero maps to zero.
"""

from __future__ import annotations
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Sequence

from gmpy2 import mpz, powmod, is_even, is_odd

from sloth.block import from_block, to_block
from sloth.config import SlothConfig
from sloth.constants import DEFAULT_MAX_WORKERS, PRIME_CHECK_ITERS
from sloth.errors import ConfigError, InvalidCiphertext, OutOfRange
from sloth.prime import SlothParams, default_params, derive_params
from sloth.residue import is_residue

logger = logging.getLogger(__name__)


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def encode(x: int, p: int, e: int) -> int:
    """
    Forward permutation: canonical square root of x or of -x.

    Args:
        x: Block in [0, p)
        p: Prime modulus, p = 3 (mod 4)
        e: Exponent (p + 1) / 4

    Returns:
        Root in [0, p); even iff x is a residue

    Raises:
        OutOfRange: If x is not in [0, p)
    """
    if not 0 <= x < p:
        raise OutOfRange(f"block {x} not in [0, {p})")
    if e != (p + 1) // 4:
        raise ValueError("exponent must equal (p + 1) / 4")
    if x == 0:
        return 0

    p = mpz(p)
    if is_residue(x, p):
        r = powmod(x, e, p)
        return int(r) if is_even(r) else int(p - r)

    r = powmod(p - x, e, p)
    return int(r) if is_odd(r) else int(p - r)


def decode(y: int, p: int) -> int:
    """
    Inverse permutation: square y and undo the branch recorded by its parity.

    Args:
        y: Output of encode, in [0, p)
        p: Prime modulus

    Returns:
        Original block x

    Raises:
        InvalidCiphertext: If y is not in [0, p)
    """
    if not 0 <= y < p:
        raise InvalidCiphertext(f"ciphertext {y} not in [0, {p})")

    p = mpz(p)
    s = powmod(y, 2, p)
    if is_even(y):
        return int(s)
    return int(p - s)


# ============================================================================
# ENGINE
# ============================================================================

class SqrtPermutation:
    """
    Square-root permutation bound to one modulus.

    Holds immutable SlothParams only, so a single instance can be shared
    by any number of threads.
    """

    def __init__(
        self,
        params: Optional[SlothParams] = None,
        max_workers: int = DEFAULT_MAX_WORKERS
    ):
        """
        Initialize permutation.

        Args:
            params: Modulus parameters (default: cached 256-bit params)
            max_workers: Thread pool cap for batch calls
        """
        self.params = params or default_params()
        self.max_workers = max_workers

        logger.debug(f"Sqrt permutation over {self.params.bits}-bit prime")

    @classmethod
    def from_bits(cls, bits: int, rounds: int = PRIME_CHECK_ITERS) -> "SqrtPermutation":
        """Derive a fresh modulus of `bits` bits."""
        return cls(derive_params(bits, rounds))

    @classmethod
    def from_config(cls, config: SlothConfig) -> "SqrtPermutation":
        """
        Build a permutation from configuration.

        Raises:
            ConfigError: If the configuration is invalid
        """
        errors = config.validate()
        if errors:
            raise ConfigError("; ".join(errors))

        params = derive_params(config.prime.bits, config.prime.rounds)
        return cls(params, max_workers=config.batch.max_workers)

    @property
    def prime(self) -> int:
        return self.params.prime

    @property
    def exponent(self) -> int:
        return self.params.exponent

    @property
    def byte_size(self) -> int:
        return self.params.byte_size

    def is_residue(self, x: int) -> bool:
        return is_residue(x, self.prime)

    def encode(self, x: int) -> int:
        return encode(x, self.prime, self.exponent)

    def decode(self, y: int) -> int:
        return decode(y, self.prime)

    def encode_block(self, block: bytes) -> bytes:
        """Encode a little-endian byte block."""
        return to_block(self.encode(from_block(block, self.byte_size)), self.byte_size)

    def decode_block(self, block: bytes) -> bytes:
        """Decode a little-endian byte block."""
        return to_block(self.decode(from_block(block, self.byte_size)), self.byte_size)

    def encode_many(self, blocks: Sequence[int]) -> List[int]:
        """Encode independent blocks in parallel, preserving order."""
        return self._map(self.encode, blocks)

    def decode_many(self, blocks: Sequence[int]) -> List[int]:
        """Decode independent blocks in parallel, preserving order."""
        return self._map(self.decode, blocks)

    def _map(self, fn: Callable[[int], int], items: Sequence[int]) -> List[int]:
        """
        Apply fn to every item on a thread pool.

        The first error raised by any call propagates to the caller.
        """
        if not items:
            return []

        if len(items) == 1:
            return [fn(items[0])]

        workers = min(self.max_workers, os.cpu_count() or 2, len(items))
        results: List[int] = [0] * len(items)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(fn, item): idx
                for idx, item in enumerate(items)
            }

            for future in as_completed(futures):
                results[futures[future]] = future.result()

        return results

    def __repr__(self) -> str:
        return f"SqrtPermutation(bits={self.params.bits})"
