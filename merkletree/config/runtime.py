"""
Runtime Configuration

Central configuration for hash algorithm selection, hasher pooling, tree
sizing and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from merkletree.crypto.hashing import DEFAULT_ALGORITHM, HashFactory, hash_factory
from merkletree.merkle.tree import DEFAULT_POOL_SIZE, MerkleTree

load_dotenv()


ENV_PREFIX = "MERKLETREE_"


@dataclass
class HashingConfig:
    """Configuration for hashing."""
    algorithm: str = DEFAULT_ALGORITHM
    pool_size: int = DEFAULT_POOL_SIZE


@dataclass
class TreeConfig:
    """Configuration for new trees."""
    leaf_capacity_hint: int = 0


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file in the working directory is read)
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLETREE_HASH_ALGORITHM: hashlib algorithm name
        - MERKLETREE_POOL_SIZE: idle hashers kept per tree
        - MERKLETREE_CAPACITY_HINT: expected leaf count for new trees
        - MERKLETREE_LOG_LEVEL: log level name
        - MERKLETREE_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}POOL_SIZE"):
            overrides.setdefault("hashing", {})["pool_size"] = int(os.getenv(f"{ENV_PREFIX}POOL_SIZE", "0"))

        if os.getenv(f"{ENV_PREFIX}CAPACITY_HINT"):
            overrides.setdefault("tree", {})["leaf_capacity_hint"] = int(os.getenv(f"{ENV_PREFIX}CAPACITY_HINT", "0"))

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {}) or {}
        tree_data = data.get("tree", {}) or {}
        logging_data = data.get("logging", {}) or {}

        return cls(
            hashing=HashingConfig(**hashing_data),
            tree=TreeConfig(**tree_data),
            logging=LoggingConfig(**logging_data),
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section in ("hashing", "tree", "logging"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
                "pool_size": self.hashing.pool_size,
            },
            "tree": {
                "leaf_capacity_hint": self.tree.leaf_capacity_hint,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }

    def hash_factory(self) -> HashFactory:
        """Resolve the configured algorithm to a hash factory."""
        return hash_factory(self.hashing.algorithm)

    def new_tree(self) -> MerkleTree:
        """Create an empty tree using this configuration."""
        return MerkleTree(
            self.tree.leaf_capacity_hint,
            hash_factory=self.hash_factory(),
            pool_size=self.hashing.pool_size,
        )


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env on next get)."""
    global _default_config
    _default_config = config
