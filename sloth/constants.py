"""
Sloth Permutation Constants

All sizes and tuning values defined here for single source of truth.
"""

from typing import Final

# ==============================================================================
# MODULUS
# ==============================================================================

PRIME_BITS: Final[int] = 256                    # Modulus bit length
PRIME_BYTE_SIZE: Final[int] = PRIME_BITS // 8   # 32 bytes
PRIME_CHECK_ITERS: Final[int] = 40              # Miller-Rabin rounds
PRIME_RESIDUE: Final[int] = 3                   # p = 3 (mod 4)
PRIME_STEP: Final[int] = 4                      # Keeps the congruence while searching

# 2^256 - 189, largest 256-bit prime congruent to 3 mod 4
PRIME_256: Final[int] = (1 << 256) - 189

# ==============================================================================
# BLOCKS
# ==============================================================================

BLOCK_BYTE_SIZE: Final[int] = PRIME_BYTE_SIZE   # 256-bit blocks
BLOCK_BYTE_ORDER: Final = "little"              # Least significant byte first

# ==============================================================================
# BATCH / BENCHMARK
# ==============================================================================

DEFAULT_MAX_WORKERS: Final[int] = 4
BENCHMARK_SAMPLES: Final[int] = 2_000
