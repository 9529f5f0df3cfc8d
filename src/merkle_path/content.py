"""Content items stored in a Merkle tree."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Protocol

from .errors import DigestError, EqualityError
from .hashing import DEFAULT_ALGORITHM


class Content(Protocol):
    """Anything that can be hashed into a leaf and compared for lookup."""

    def calculate_hash(self) -> bytes:
        """Return the leaf digest. Must be deterministic for equal content."""
        ...

    def equals(self, other: Content) -> bool:
        """Return True if this content matches other."""
        ...


@dataclass(frozen=True)
class StringContent:
    """Text content hashed as UTF-8."""

    value: str
    algorithm: str = field(default=DEFAULT_ALGORITHM, compare=False)

    def calculate_hash(self) -> bytes:
        try:
            data = self.value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise DigestError(f"cannot encode {self.value!r}: {exc.reason}") from exc
        return hashlib.new(self.algorithm, data).digest()

    def equals(self, other: Content) -> bool:
        if not isinstance(other, StringContent):
            raise EqualityError(
                f"cannot compare StringContent with {type(other).__name__}"
            )
        return self.value == other.value

    def __str__(self) -> str:
        return self.value
