"""Shared test fixtures for merkle-path."""

import hashlib

import pytest
from click.testing import CliRunner

from merkle_path.content import StringContent
from merkle_path.hashing import HashStrategy
from merkle_path.tree import Direction


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    return CliRunner()


def make_contents(*values: str) -> list[StringContent]:
    """Wrap strings as StringContent with the default digest."""
    return [StringContent(value) for value in values]


def fold_path(
    leaf_hash: bytes,
    hashes: list[bytes],
    directions: list[Direction],
    strategy: HashStrategy,
) -> bytes:
    """Recompute a root digest from a leaf digest and its inclusion path."""
    current = leaf_hash
    for sibling, direction in zip(hashes, directions):
        if direction is Direction.RIGHT:
            current = strategy.digest(current + sibling)
        else:
            current = strategy.digest(sibling + current)
    return current


def md5(data: bytes) -> bytes:
    return hashlib.md5(data).digest()


@pytest.fixture
def greetings() -> list[StringContent]:
    """The four-item example set."""
    return make_contents("Hello", "World", "Hey", "Gao")
