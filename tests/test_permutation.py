"""
Sloth Square-Root Permutation Tests
"""

import pytest

from sloth.config import SlothConfig
from sloth.errors import ConfigError, InvalidCiphertext, OutOfRange
from sloth.permutation import SqrtPermutation, decode, encode
from sloth.prime import SlothParams, default_params
from sloth.residue import is_residue


class TestEncodeDecode:
    """Tests for encode / decode over small primes."""

    def test_known_value(self):
        """Test encode(5) mod 23."""
        y = encode(5, 23, 6)
        assert y == 15
        assert decode(y, 23) == 5

    def test_bijection_23(self, small_params):
        """Test encode maps [0, 23) onto itself."""
        p, e = small_params.prime, small_params.exponent
        image = [encode(x, p, e) for x in range(p)]
        assert sorted(image) == list(range(p))

    def test_exhaustive_round_trip(self, small_primes):
        """Test every block of every small prime round trips."""
        for p in small_primes:
            e = (p + 1) // 4
            image = set()
            for x in range(p):
                y = encode(x, p, e)
                assert 0 <= y < p
                assert decode(y, p) == x
                image.add(y)
            assert len(image) == p

    def test_zero(self, small_params):
        """Test zero maps to zero both ways."""
        assert encode(0, small_params.prime, small_params.exponent) == 0
        assert decode(0, small_params.prime) == 0

    def test_largest_block(self, small_primes):
        """Test p - 1 encodes to 1 and back."""
        for p in small_primes:
            e = (p + 1) // 4
            assert encode(p - 1, p, e) == 1
            assert decode(1, p) == p - 1

    def test_parity_records_branch(self, small_primes):
        """Test output is even exactly for residues."""
        for p in small_primes:
            e = (p + 1) // 4
            for x in range(p):
                assert (encode(x, p, e) % 2 == 0) == is_residue(x, p)

    def test_output_is_square_root(self, small_primes):
        """Test y^2 is x for residues and -x otherwise."""
        for p in small_primes:
            e = (p + 1) // 4
            for x in range(1, p):
                y = encode(x, p, e)
                expected = x if is_residue(x, p) else p - x
                assert (y * y) % p == expected

    def test_odd_ciphertext_is_valid(self, small_params):
        """Test odd outputs decode to non-residues."""
        assert decode(1, small_params.prime) == 22
        assert not is_residue(decode(15, small_params.prime), small_params.prime)

    def test_results_are_ints(self):
        """Test results are Python ints."""
        assert type(encode(5, 23, 6)) is int
        assert type(decode(15, 23)) is int


class TestEncodeDecode256:
    """Tests for encode / decode over the 256-bit prime."""

    def test_random_round_trip(self, params_256, rng):
        """Test sampled blocks round trip."""
        p, e = params_256.prime, params_256.exponent
        for _ in range(500):
            x = rng.randrange(p)
            assert decode(encode(x, p, e), p) == x

    def test_edge_blocks(self, params_256):
        """Test boundary blocks round trip."""
        p, e = params_256.prime, params_256.exponent
        for x in (0, 1, 2, 3, p // 2, p - 2, p - 1):
            assert decode(encode(x, p, e), p) == x
        assert encode(p - 1, p, e) == 1

    def test_encode_out_of_range(self, params_256):
        """Test unreduced blocks are rejected."""
        p, e = params_256.prime, params_256.exponent
        for x in (p, p + 1, (1 << 256) - 1, -1):
            with pytest.raises(OutOfRange):
                encode(x, p, e)

    def test_decode_out_of_range(self, params_256):
        """Test ciphertexts outside [0, p) are rejected."""
        p = params_256.prime
        for y in (p, p + 1, -1, -2):
            with pytest.raises(InvalidCiphertext):
                decode(y, p)

    def test_wrong_exponent(self, params_256):
        """Test mismatched exponent is rejected."""
        with pytest.raises(ValueError):
            encode(5, params_256.prime, params_256.exponent + 1)


class TestSqrtPermutation:
    """Tests for SqrtPermutation engine."""

    def test_default_params(self):
        """Test engine defaults to the 256-bit modulus."""
        perm = SqrtPermutation()
        assert perm.params is default_params()
        assert perm.byte_size == 32
        assert repr(perm) == "SqrtPermutation(bits=256)"

    def test_round_trip(self, engine, rng):
        """Test engine encode/decode."""
        x = rng.randrange(engine.prime)
        y = engine.encode(x)
        assert y == encode(x, engine.prime, engine.exponent)
        assert engine.decode(y) == x
        assert engine.is_residue(x) == (y % 2 == 0)

    def test_block_round_trip(self, engine):
        """Test byte block encode/decode."""
        block = bytes(range(31)) + b"\x00"
        encoded = engine.encode_block(block)
        assert len(encoded) == 32
        assert encoded != block
        assert engine.decode_block(encoded) == block

    def test_encode_many_preserves_order(self, engine, rng):
        """Test batch encode matches sequential encode."""
        blocks = [rng.randrange(engine.prime) for _ in range(64)]
        encoded = engine.encode_many(blocks)
        assert encoded == [engine.encode(x) for x in blocks]
        assert engine.decode_many(encoded) == blocks

    def test_many_small_batches(self, engine):
        """Test empty and single-item batches."""
        assert engine.encode_many([]) == []
        assert engine.decode_many([]) == []
        assert engine.encode_many([0]) == [0]

    def test_many_propagates_errors(self, engine):
        """Test batch errors reach the caller."""
        with pytest.raises(OutOfRange):
            engine.encode_many([1, 2, engine.prime])
        with pytest.raises(InvalidCiphertext):
            engine.decode_many([1, -1])

    def test_from_bits(self):
        """Test engine over a fresh 64-bit modulus."""
        perm = SqrtPermutation.from_bits(64)
        assert perm.params.bits == 64
        assert perm.prime % 4 == 3
        assert perm.decode(perm.encode(12345)) == 12345

    def test_small_engine(self, small_params):
        """Test engine over p = 23."""
        perm = SqrtPermutation(small_params, max_workers=2)
        assert perm.encode_many(list(range(23))) == [encode(x, 23, 6) for x in range(23)]

    def test_from_config(self):
        """Test engine built from configuration."""
        config = SlothConfig()
        config.prime.bits = 96
        config.batch.max_workers = 2
        perm = SqrtPermutation.from_config(config)
        assert perm.params.bits == 96
        assert perm.max_workers == 2

    def test_from_invalid_config(self):
        """Test invalid configuration is rejected."""
        config = SlothConfig()
        config.prime.bits = 1
        with pytest.raises(ConfigError):
            SqrtPermutation.from_config(config)

    def test_independent_moduli(self, small_params, params_256):
        """Test engines over different moduli coexist."""
        small = SqrtPermutation(small_params)
        large = SqrtPermutation(params_256)
        assert small.encode(5) == 15
        assert large.decode(large.encode(5)) == 5
        assert SlothParams.from_prime(23) == small_params
