"""
Sloth Permutation Test Fixtures
"""

import random

import pytest
from gmpy2 import is_prime

from sloth.prime import SlothParams, default_params
from sloth.permutation import SqrtPermutation


@pytest.fixture(scope="session")
def small_primes() -> list:
    """3 mod 4 primes small enough to enumerate every block."""
    return [p for p in range(3, 300, 4) if is_prime(p)]


@pytest.fixture
def small_params() -> SlothParams:
    """p = 23, e = 6."""
    return SlothParams.from_prime(23)


@pytest.fixture(scope="session")
def params_256() -> SlothParams:
    """Cached 256-bit parameters."""
    return default_params()


@pytest.fixture(scope="session")
def engine(params_256) -> SqrtPermutation:
    """Permutation over the 256-bit prime."""
    return SqrtPermutation(params_256)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic RNG for sampled blocks."""
    return random.Random(0x5107)
