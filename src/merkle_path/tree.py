"""Binary Merkle tree over ordered content, with inclusion paths."""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto

from .content import Content
from .errors import DigestError, EmptyInputError
from .hashing import HashStrategy, resolve_strategy


class Direction(StrEnum):
    """Side on which a sibling digest is concatenated when folding a path."""

    LEFT = auto()
    RIGHT = auto()

    @property
    def bit(self) -> int:
        """Integer encoding: 0 for a left sibling, 1 for a right sibling."""
        return 0 if self is Direction.LEFT else 1


@dataclass
class TreeBuildStats:
    """Statistics from building a Merkle tree."""

    contents: int = 0  # Items passed to build
    duplicates: int = 0  # Pad leaves appended to an odd leaf level
    internal_nodes: int = 0  # Nodes created by pairing, root included
    levels: int = 0  # Pairing rounds above the leaf level

    @property
    def leaves(self) -> int:
        return self.contents + self.duplicates


@dataclass(eq=False)
class Node:
    """A leaf, internal node, or root of a Merkle tree."""

    hash: bytes
    left: Node | None = field(default=None, repr=False)
    right: Node | None = field(default=None, repr=False)
    is_leaf: bool = False
    is_duplicate: bool = False
    content: Content | None = None
    _parent: weakref.ref[Node] | None = field(default=None, repr=False)

    @property
    def parent(self) -> Node | None:
        """The node this one was paired into, or None at the root."""
        if self._parent is None:
            return None
        return self._parent()

    def _attach(self, parent: Node) -> None:
        self._parent = weakref.ref(parent)

    def __str__(self) -> str:
        return f"{self.is_leaf} {self.is_duplicate} {self.hash.hex()} {self.content}"


class MerkleTree:
    """Immutable Merkle tree built from an ordered list of content."""

    def __init__(self, root: Node, leaves: list[Node], hash_strategy: HashStrategy):
        self.root = root
        self.leaves = leaves
        self.hash_strategy = hash_strategy
        self._root_digest = root.hash
        self.build_stats: TreeBuildStats | None = None

    @property
    def root_digest(self) -> bytes:
        """Digest committing to every leaf, in order."""
        return self._root_digest

    @classmethod
    def build(
        cls,
        contents: Iterable[Content],
        strategy: HashStrategy | Callable[[bytes], bytes] | str | None = None,
    ) -> MerkleTree:
        """
        Build a Merkle tree from content.

        Leaf digests come from each item's own calculate_hash(). Internal
        nodes hash the concatenation of their children's digests with the
        given strategy.

        Args:
            contents: Ordered, non-empty content items
            strategy: HashStrategy, ``bytes -> bytes`` callable, hashlib
                algorithm name, or None for the default 128-bit digest

        Returns:
            A fully linked MerkleTree

        Raises:
            EmptyInputError: If contents is empty
            DigestError: If an internal digest cannot be computed
        """
        items = list(contents)
        if not items:
            raise EmptyInputError()

        hash_strategy = resolve_strategy(strategy)
        stats = TreeBuildStats(contents=len(items))

        leaves = _build_leaves(items, stats)
        root = _build_levels(leaves, hash_strategy, stats)

        tree = cls(root=root, leaves=leaves, hash_strategy=hash_strategy)
        tree.build_stats = stats
        return tree

    def find_leaf(self, target: Content) -> Node | None:
        """Return the first leaf whose content equals target."""
        for leaf in self.leaves:
            if leaf.content.equals(target):
                return leaf
        return None

    def get_merkle_path(self, target: Content) -> tuple[list[bytes], list[Direction]]:
        """
        Get the inclusion path for a content item.

        Args:
            target: Content to locate, matched with the leaf content's equals()

        Returns:
            (sibling digests, directions), both ordered from the leaf up to the
            root. Both lists are empty if no leaf matches.
        """
        leaf = self.find_leaf(target)
        if leaf is None:
            return [], []

        hashes: list[bytes] = []
        directions: list[Direction] = []
        current = leaf
        parent = current.parent
        while parent is not None:
            if parent.left.hash == current.hash:
                hashes.append(parent.right.hash)
                directions.append(Direction.RIGHT)
            else:
                hashes.append(parent.left.hash)
                directions.append(Direction.LEFT)
            current = parent
            parent = parent.parent

        return hashes, directions

    def __str__(self) -> str:
        """Leaf nodes only, one per line."""
        return "".join(f"{leaf}\n" for leaf in self.leaves)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(root={self._root_digest.hex()}, "
            f"leaves={len(self.leaves)}, strategy={self.hash_strategy.name!r})"
        )


def _build_leaves(contents: list[Content], stats: TreeBuildStats) -> list[Node]:
    """Hash each content item into a leaf, padding an odd count."""
    leaves: list[Node] = []
    for content in contents:
        digest = content.calculate_hash()
        if not isinstance(digest, bytes):
            raise DigestError(
                f"{type(content).__name__}.calculate_hash() returned "
                f"{type(digest).__name__}, expected bytes"
            )
        leaves.append(Node(hash=digest, is_leaf=True, content=content))

    if len(leaves) % 2 == 1:
        last = leaves[-1]
        # Fresh node so each leaf has exactly one parent link
        leaves.append(
            Node(hash=last.hash, is_leaf=True, is_duplicate=True, content=last.content)
        )
        stats.duplicates += 1

    return leaves


def _build_levels(leaves: list[Node], strategy: HashStrategy, stats: TreeBuildStats) -> Node:
    """Pair nodes level by level until a single root remains."""
    level = leaves
    while len(level) > 1:
        next_level: list[Node] = []
        for i in range(0, len(level), 2):
            left = level[i]
            # Odd internal level: the last node is paired with itself
            right = level[i + 1] if i + 1 < len(level) else left

            parent = Node(
                hash=strategy.combine(left.hash, right.hash),
                left=left,
                right=right,
            )
            left._attach(parent)
            right._attach(parent)
            next_level.append(parent)

        stats.internal_nodes += len(next_level)
        stats.levels += 1
        level = next_level

    return level[0]
