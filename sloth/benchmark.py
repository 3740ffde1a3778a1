"""
Sloth Permutation Benchmark

Measures the encode/decode asymmetry: encode costs two modular
exponentiations (residue test and root), decode a single squaring.
The ratio grows with the bit length of the prime.
"""

import logging
import random
import time
from typing import List, Optional

import gmpy2

from sloth.constants import BENCHMARK_SAMPLES
from sloth.prime import SlothParams, default_params
from sloth.permutation import SqrtPermutation, decode, encode

logger = logging.getLogger(__name__)


def _sample_blocks(params: SlothParams, count: int, seed: int) -> List[int]:
    rng = random.Random(seed)
    return [rng.randrange(params.prime) for _ in range(count)]


def benchmark(
    params: Optional[SlothParams] = None,
    samples: int = BENCHMARK_SAMPLES,
    seed: int = 0
) -> dict:
    """
    Time encode and decode over random in-range blocks.

    Args:
        params: Modulus parameters (default: 256-bit)
        samples: Number of blocks to time
        seed: RNG seed for block selection

    Returns:
        Benchmark results
    """
    params = params or default_params()
    p, e = params.prime, params.exponent
    blocks = _sample_blocks(params, samples, seed)

    logger.info(f"Running sloth benchmark: {samples:,} blocks, {params.bits}-bit prime")

    start = time.perf_counter()
    encoded = [encode(x, p, e) for x in blocks]
    encode_time = time.perf_counter() - start

    start = time.perf_counter()
    decoded = [decode(y, p) for y in encoded]
    decode_time = time.perf_counter() - start

    if decoded != blocks:
        raise RuntimeError("benchmark round trip mismatch")

    results = {
        'gmp_version': gmpy2.mp_version(),
        'gmpy2_version': gmpy2.version(),
        'prime_bits': params.bits,
        'samples': samples,
        'encode_seconds': encode_time / samples,
        'decode_seconds': decode_time / samples,
        'encode_per_second': samples / encode_time,
        'decode_per_second': samples / decode_time,
        'asymmetry': encode_time / decode_time,
    }

    logger.info("Benchmark complete:")
    logger.info(f"  Encode: {results['encode_per_second']:,.0f} blocks/sec")
    logger.info(f"  Decode: {results['decode_per_second']:,.0f} blocks/sec")
    logger.info(f"  Asymmetry: {results['asymmetry']:.1f}x")

    return results


# ============================================================================
# SELF-TEST
# ============================================================================

def _self_test():
    """Run permutation self-tests."""
    logger.info("Running sloth self-tests...")

    # Test 1: Known 256-bit prime
    params = default_params()
    assert params.prime == (1 << 256) - 189, "Unexpected 256-bit prime"
    logger.info("✓ 256-bit prime is 2^256 - 189")

    # Test 2: Small prime is a bijection
    small = SlothParams.from_prime(23)
    image = {encode(x, small.prime, small.exponent) for x in range(23)}
    assert image == set(range(23)), "p=23 permutation is not a bijection"
    assert decode(encode(5, 23, 6), 23) == 5
    logger.info("✓ p=23 bijection")

    # Test 3: Edge blocks
    engine = SqrtPermutation(params)
    for x in (0, 1, 2, params.prime - 2, params.prime - 1):
        assert engine.decode(engine.encode(x)) == x, f"Round trip failed for {x}"
    logger.info("✓ Edge blocks round trip")

    # Test 4: Random blocks
    blocks = _sample_blocks(params, 100, seed=1)
    assert engine.decode_many(engine.encode_many(blocks)) == blocks
    logger.info("✓ Random blocks round trip")

    logger.info("All sloth self-tests passed!")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(message)s"
    )

    _self_test()
    print()
    benchmark()
