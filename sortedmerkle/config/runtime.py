"""
Runtime Configuration

Central configuration for tree construction policy: leaf sorting, pair
ordering and hash algorithm. Producers and verifiers must share the same
tree settings for proofs to interoperate.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from sortedmerkle.crypto.ordering import (
    ORDERING_SORTED,
    PairHasher,
    get_pair_hasher,
)

load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> Optional[bool]:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning(f"Ignoring {name}={raw!r}: expected a boolean")
    return None


@dataclass
class TreeConfig:
    """Configuration for building and verifying Merkle trees."""
    sort_leaves: bool = False
    ordering: str = ORDERING_SORTED
    hash_algorithm: str = "sha256"
    strict_leaf_size: bool = False

    def pair_hasher(self) -> PairHasher:
        """Resolve the pair-hashing policy named by this config."""
        return get_pair_hasher(self.ordering, self.hash_algorithm)


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for sortedmerkle.

    Can be loaded from:
    - Environment variables (a .env file is read on import)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    debug: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SORTEDMERKLE_SORT_LEAVES: Sort leaves before building (true/false)
        - SORTEDMERKLE_ORDERING: Pair ordering policy ("sorted" or "positional")
        - SORTEDMERKLE_HASH_ALGORITHM: Hash algorithm name (e.g. "sha256")
        - SORTEDMERKLE_STRICT_LEAF_SIZE: Require digest-sized leaves (true/false)
        - SORTEDMERKLE_DEBUG: Enable debug logging (true/false)
        """
        overrides: dict[str, Any] = {}

        for env_var, key in (
            ("SORTEDMERKLE_SORT_LEAVES", "sort_leaves"),
            ("SORTEDMERKLE_STRICT_LEAF_SIZE", "strict_leaf_size"),
        ):
            raw = os.getenv(env_var)
            if raw:
                parsed = _parse_bool(env_var, raw)
                if parsed is not None:
                    overrides.setdefault("tree", {})[key] = parsed

        if os.getenv("SORTEDMERKLE_ORDERING"):
            overrides.setdefault("tree", {})["ordering"] = os.getenv("SORTEDMERKLE_ORDERING")
        if os.getenv("SORTEDMERKLE_HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv(
                "SORTEDMERKLE_HASH_ALGORITHM"
            )

        raw_debug = os.getenv("SORTEDMERKLE_DEBUG")
        if raw_debug:
            parsed = _parse_bool("SORTEDMERKLE_DEBUG", raw_debug)
            if parsed is not None:
                overrides["debug"] = parsed

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

        logger.info(f"Loaded config from {path}")
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        # Fail on unknown policy names at load time, not at first build
        tree.pair_hasher()

        return cls(
            tree=tree,
            debug=bool(data.get("debug", False)),
            extra=data.get("extra", {}),
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
        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)
        if "debug" in overrides:
            new_config.debug = overrides["debug"]
        new_config.tree.pair_hasher()

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "sort_leaves": self.tree.sort_leaves,
                "ordering": self.tree.ordering,
                "hash_algorithm": self.tree.hash_algorithm,
                "strict_leaf_size": self.tree.strict_leaf_size,
            },
            "debug": self.debug,
            "extra": self.extra,
        }


def configure_logging(config: RuntimeConfig) -> None:
    """Set the package logger level from the config's debug flag."""
    package_logger = logging.getLogger("sortedmerkle")
    package_logger.setLevel(logging.DEBUG if config.debug else logging.NOTSET)


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
        configure_logging(_default_config)
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
    configure_logging(config or RuntimeConfig())
