"""
Sloth Prime Deriver

Finds the largest B-bit prime p with p = 3 (mod 4).

For such a prime every quadratic residue x has the square root
x^((p+1)/4) mod p, so no Tonelli-Shanks iteration is needed. The
exponent e = (p+1)/4 is derived once alongside p.

GMP (via gmpy2) provides the primality test and the big integer type.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from gmpy2 import mpz, is_prime

from sloth.constants import (
    PRIME_BITS,
    PRIME_CHECK_ITERS,
    PRIME_RESIDUE,
    PRIME_STEP,
)
from sloth.errors import NoPrimeFound

logger = logging.getLogger(__name__)


# ============================================================================
# PARAMETERS
# ============================================================================

@dataclass(frozen=True)
class SlothParams:
    """
    Immutable modulus/exponent pair for one bit width.

    Shared read-only by every encode/decode call. Several instances with
    different widths can coexist.
    """
    bits: int
    prime: int
    exponent: int

    @property
    def byte_size(self) -> int:
        """Block size in bytes."""
        return (self.bits + 7) // 8

    def __post_init__(self):
        if not is_prime(self.prime):
            raise ValueError(f"modulus must be prime: {self.prime}")
        if self.prime % 4 != PRIME_RESIDUE:
            raise ValueError(f"prime must be 3 mod 4: {self.prime}")
        if self.prime.bit_length() != self.bits:
            raise ValueError(
                f"prime has {self.prime.bit_length()} bits, expected {self.bits}"
            )
        if self.exponent != (self.prime + 1) // 4:
            raise ValueError("exponent must equal (prime + 1) / 4")

    @classmethod
    def from_prime(cls, prime: int) -> "SlothParams":
        """Build parameters around a known prime (e.g. a small test prime)."""
        prime = int(prime)
        return cls(bits=prime.bit_length(), prime=prime, exponent=(prime + 1) // 4)


# ============================================================================
# PRIME SEARCH
# ============================================================================

def next_prime(n: int, rounds: int = PRIME_CHECK_ITERS) -> int:
    """Smallest probable prime strictly greater than n."""
    if n < 2:
        return 2
    p = mpz(n)
    p = p + 1 if p % 2 == 0 else p + 2
    while not is_prime(p, rounds):
        p += 2
    return int(p)


def prev_prime(n: int, rounds: int = PRIME_CHECK_ITERS) -> int:
    """
    Largest probable prime strictly smaller than n.

    Raises:
        NoPrimeFound: If n <= 2
    """
    if n <= 2:
        raise NoPrimeFound(f"no prime below {n}")
    if n == 3:
        return 2
    p = mpz(n)
    p = p - 1 if p % 2 == 0 else p - 2
    while not is_prime(p, rounds):
        p -= 2
    return int(p)


def derive_prime(bits: int = PRIME_BITS, rounds: int = PRIME_CHECK_ITERS) -> Tuple[int, int]:
    """
    Derive the largest prime of exactly `bits` bits with p = 3 (mod 4).

    Candidates start at 2^bits - 1 (low bits 11) and step down by 4 so the
    congruence is preserved, stopping at the lowest bits-bit value.

    Args:
        bits: Target bit length of the prime
        rounds: Miller-Rabin rounds per candidate

    Returns:
        Tuple of (prime, exponent) with exponent = (prime + 1) / 4

    Raises:
        NoPrimeFound: If no candidate in range is prime
    """
    if bits < 2:
        raise NoPrimeFound(f"no {bits}-bit prime is congruent to 3 mod 4")

    floor = mpz(1) << (bits - 1)
    candidate = (mpz(1) << bits) - 1
    tested = 0

    while candidate >= floor:
        tested += 1
        if is_prime(candidate, rounds):
            prime = int(candidate)
            exponent = (prime + 1) // 4
            logger.debug(f"Derived {bits}-bit prime after {tested} candidates")
            return prime, exponent
        candidate -= PRIME_STEP

    raise NoPrimeFound(f"exhausted {tested} candidates for {bits}-bit prime")


def derive_params(bits: int = PRIME_BITS, rounds: int = PRIME_CHECK_ITERS) -> SlothParams:
    """Derive prime and exponent for `bits` and wrap them in SlothParams."""
    prime, exponent = derive_prime(bits, rounds)
    logger.info(f"Sloth modulus ready: {bits} bits, 2^{bits} - {(1 << bits) - prime}")
    return SlothParams(bits=bits, prime=prime, exponent=exponent)


@lru_cache(maxsize=None)
def default_params() -> SlothParams:
    """256-bit parameters, derived once per process."""
    return derive_params(PRIME_BITS, PRIME_CHECK_ITERS)
