"""Hash strategies used to compose internal Merkle nodes."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import get_args

from .config import HashAlgorithm, MerkleConfig
from .errors import DigestError

# Algorithms selectable by name from config and the CLI
SUPPORTED_ALGORITHMS: tuple[str, ...] = get_args(HashAlgorithm)

# 128-bit digest used when no strategy is given
DEFAULT_ALGORITHM = "md5"


class HashStrategy(ABC):
    """Abstract base class for digest functions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a human-readable name for the strategy."""
        ...

    @property
    @abstractmethod
    def digest_size(self) -> int | None:
        """Return the digest width in bytes, or None if unknown."""
        ...

    @abstractmethod
    def digest(self, data: bytes) -> bytes:
        """
        Hash a byte string.

        Args:
            data: Bytes to hash

        Returns:
            The digest bytes

        Raises:
            DigestError: If the digest cannot be computed
        """
        ...

    def combine(self, left: bytes, right: bytes) -> bytes:
        """
        Digest of left then right, never swapped.

        Raises:
            DigestError: If digest() fails or returns something other than bytes
        """
        try:
            result = self.digest(left + right)
        except DigestError:
            raise
        except Exception as exc:
            raise DigestError(f"{self.name} digest failed: {exc}") from exc

        if not isinstance(result, bytes):
            raise DigestError(
                f"{self.name} returned {type(result).__name__}, expected bytes"
            )
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class HashlibStrategy(HashStrategy):
    """Strategy backed by a hashlib algorithm."""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        try:
            probe = hashlib.new(algorithm)
        except ValueError:
            raise ValueError(
                f"Hash algorithm '{algorithm}' not supported. "
                f"Choose one of: {', '.join(SUPPORTED_ALGORITHMS)}"
            ) from None
        self._algorithm = algorithm
        self._digest_size = probe.digest_size

    @property
    def name(self) -> str:
        return self._algorithm

    @property
    def digest_size(self) -> int:
        return self._digest_size

    def digest(self, data: bytes) -> bytes:
        try:
            return hashlib.new(self._algorithm, data).digest()
        except TypeError as exc:
            raise DigestError(f"{self._algorithm} digest failed: {exc}") from exc


class CallableStrategy(HashStrategy):
    """Strategy wrapping a plain ``bytes -> bytes`` function."""

    def __init__(self, func: Callable[[bytes], bytes], name: str | None = None):
        self._func = func
        self._name = name or getattr(func, "__name__", "callable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def digest_size(self) -> None:
        return None

    def digest(self, data: bytes) -> bytes:
        return self._func(data)


def resolve_strategy(
    strategy: HashStrategy | Callable[[bytes], bytes] | str | None,
) -> HashStrategy:
    """
    Coerce the accepted strategy forms to a HashStrategy.

    Args:
        strategy: A HashStrategy, a ``bytes -> bytes`` callable, a hashlib
            algorithm name, or None for the default 128-bit digest

    Returns:
        A HashStrategy instance

    Raises:
        ValueError: If an algorithm name is not available
        TypeError: If the value is none of the accepted forms
    """
    if strategy is None:
        return HashlibStrategy(DEFAULT_ALGORITHM)
    if isinstance(strategy, HashStrategy):
        return strategy
    if isinstance(strategy, str):
        return HashlibStrategy(strategy)
    if callable(strategy):
        return CallableStrategy(strategy)
    raise TypeError(f"Cannot use {type(strategy).__name__} as a hash strategy")


def get_hash_strategy(config: MerkleConfig) -> HashStrategy:
    """Factory function returning the configured internal-node strategy."""
    return HashlibStrategy(config.hash_algorithm)
