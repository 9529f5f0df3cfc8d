"""Exceptions raised while building Merkle trees and extracting paths."""


class MerkleError(Exception):
    """Base class for Merkle Path errors."""


class EmptyInputError(MerkleError, ValueError):
    """Tree construction was called with no content."""

    def __init__(self, message: str = "cannot construct tree with no content"):
        super().__init__(message)


class DigestError(MerkleError):
    """A digest could not be computed for content or for a node pair."""


class EqualityError(MerkleError):
    """Two content values could not be compared."""
