"""
Sloth Square-Root Permutation

Modular square-root bijection over a prime p = 3 (mod 4): slow to
compute forward (exponentiation), fast to invert (one squaring).
Building block for time-lock and proof-of-delay block ciphers.

Usage:
    from sloth import SqrtPermutation
    perm = SqrtPermutation()
    y = perm.encode(x)
    assert perm.decode(y) == x
"""

__version__ = "0.1.0"

from sloth.errors import (
    SlothError,
    NoPrimeFound,
    OutOfRange,
    InvalidCiphertext,
    ConfigError,
)
from sloth.prime import SlothParams, derive_prime, derive_params, default_params
from sloth.residue import is_residue, legendre
from sloth.permutation import SqrtPermutation, encode, decode
from sloth.block import from_block, to_block, random_block, roundtrip
from sloth.config import SlothConfig, setup_logging

__all__ = [
    # Errors
    "SlothError",
    "NoPrimeFound",
    "OutOfRange",
    "InvalidCiphertext",
    "ConfigError",
    # Prime derivation
    "SlothParams",
    "derive_prime",
    "derive_params",
    "default_params",
    # Residue oracle
    "is_residue",
    "legendre",
    # Permutation
    "SqrtPermutation",
    "encode",
    "decode",
    # Blocks
    "from_block",
    "to_block",
    "random_block",
    "roundtrip",
    # Configuration
    "SlothConfig",
    "setup_logging",
    "__version__",
]
