"""
Sloth Permutation Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from sloth.constants import (
    DEFAULT_MAX_WORKERS,
    PRIME_BITS,
    PRIME_CHECK_ITERS,
)

logger = logging.getLogger(__name__)


@dataclass
class PrimeConfig:
    """Modulus derivation configuration."""
    bits: int = PRIME_BITS
    rounds: int = PRIME_CHECK_ITERS


@dataclass
class BatchConfig:
    """Parallel encode/decode configuration."""
    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class SlothConfig:
    """
    Complete permutation configuration.

    One config maps to one modulus; build several configs to run
    different bit widths side by side.
    """
    name: str = "sloth"

    # Sub-configurations
    prime: PrimeConfig = field(default_factory=PrimeConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.prime.bits < 2:
            errors.append(f"prime bits must be at least 2: {self.prime.bits}")

        if self.prime.rounds < 1:
            errors.append(f"primality rounds must be at least 1: {self.prime.rounds}")

        if self.batch.max_workers < 1:
            errors.append("max_workers must be at least 1")

        if not isinstance(getattr(logging, self.log.level.upper(), None), int):
            errors.append(f"Unknown log level: {self.log.level}")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "SlothConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls(name=data.get("name", "sloth"))

        if "prime" in data:
            config.prime = PrimeConfig(**data["prime"])

        if "batch" in data:
            config.batch = BatchConfig(**data["batch"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    @classmethod
    def default(cls) -> "SlothConfig":
        """Default 256-bit configuration."""
        return cls()

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "name": self.name,
            "prime": asdict(self.prime),
            "batch": asdict(self.batch),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
