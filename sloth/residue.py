"""
Sloth Quadratic Residue Oracle

Euler's criterion: for odd prime p and x != 0,
x^((p-1)/2) mod p is 1 for a residue and p - 1 for a non-residue.

Zero is treated as a residue (its only root is 0) and is handled before
the criterion is evaluated.
"""

from __future__ import annotations

from gmpy2 import mpz, powmod

from sloth.errors import OutOfRange


def _check_range(x: int, p: int) -> None:
    if not 0 <= x < p:
        raise OutOfRange(f"block {x} not in [0, {p})")


def legendre(x: int, p: int) -> int:
    """
    Legendre symbol (x | p) via Euler's criterion.

    Returns:
        0 for x == 0, 1 for a residue, -1 for a non-residue
    """
    _check_range(x, p)
    if x == 0:
        return 0
    p = mpz(p)
    ls = powmod(x, (p - 1) // 2, p)
    return -1 if ls == p - 1 else int(ls)


def is_residue(x: int, p: int) -> bool:
    """
    Decide whether x is a quadratic residue modulo prime p.

    Args:
        x: Block in [0, p)
        p: Prime modulus

    Returns:
        True if some r satisfies r^2 = x (mod p); True for x == 0

    Raises:
        OutOfRange: If x is not in [0, p)
    """
    return legendre(x, p) != -1
