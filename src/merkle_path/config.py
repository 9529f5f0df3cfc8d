"""Configuration management for Merkle Path."""

import json
import os
from pathlib import Path
from typing import Literal, get_args

from pydantic import BaseModel

from . import CONFIG_FILE, MERKLE_DIR

HashAlgorithm = Literal[
    "md5",
    "sha1",
    "sha256",
    "sha512",
    "blake2b",
    "blake2s",
    "sha3_256",
]


class MerkleConfig(BaseModel):
    """Configuration for Merkle Path."""

    version: int = 1
    hash_algorithm: HashAlgorithm = "md5"  # Internal-node composition
    content_algorithm: HashAlgorithm = "md5"  # Leaf digest for text content


def get_merkle_dir(project_root: Path) -> Path:
    """Get the .merkle-path directory path."""
    return project_root / MERKLE_DIR


def get_config_path(project_root: Path) -> Path:
    """Get the config file path."""
    return get_merkle_dir(project_root) / CONFIG_FILE


def load_config(project_root: Path) -> MerkleConfig:
    """Load configuration from the project's config file.

    Falls back to defaults if file doesn't exist.
    Environment variables can override config values.
    """
    config_path = get_config_path(project_root)

    if config_path.exists():
        with open(config_path) as f:
            data = json.load(f)
        config = MerkleConfig.model_validate(data)
    else:
        config = MerkleConfig()

    # Apply environment variable overrides
    config = _apply_env_overrides(config)

    return config


def save_config(config: MerkleConfig, project_root: Path) -> None:
    """Save configuration to the project's config file."""
    config_path = get_config_path(project_root)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config.model_dump(), f, indent=2)


def create_default_config(hash_algorithm: HashAlgorithm = "md5") -> MerkleConfig:
    """Create a default configuration using one algorithm for leaves and nodes."""
    return MerkleConfig(hash_algorithm=hash_algorithm, content_algorithm=hash_algorithm)


def _apply_env_overrides(config: MerkleConfig) -> MerkleConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()
    allowed = get_args(HashAlgorithm)

    # MERKLE_HASH_ALGORITHM
    if algorithm := os.environ.get("MERKLE_HASH_ALGORITHM"):
        if algorithm in allowed:
            data["hash_algorithm"] = algorithm

    # MERKLE_CONTENT_ALGORITHM
    if algorithm := os.environ.get("MERKLE_CONTENT_ALGORITHM"):
        if algorithm in allowed:
            data["content_algorithm"] = algorithm

    return MerkleConfig.model_validate(data)
