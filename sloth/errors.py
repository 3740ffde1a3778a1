"""
Sloth Permutation Errors

Every error is a deterministic function of its input. Nothing here is retried.
"""


class SlothError(Exception):
    """Base exception for sloth permutation errors."""
    pass


class NoPrimeFound(SlothError):
    """Prime search exhausted its candidate range (fatal configuration error)."""
    pass


class OutOfRange(SlothError):
    """Input block is not reduced modulo the prime."""
    pass


class InvalidCiphertext(SlothError):
    """Decode input is not a valid permutation output."""
    pass


class ConfigError(SlothError):
    """Configuration failed validation."""
    pass
