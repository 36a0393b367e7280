"""Disjoint-set forest over size keys with union by item count."""

from __future__ import annotations

from typing import Dict, List, Mapping

from .keys import DimensionKey


class SizeUnionFind:
    """Tracks which size keys have been merged into one group.

    Every key starts as its own root. ``union`` attaches the root with fewer
    items to the root with more items, so the larger group keeps its key.
    """

    def __init__(self, sizes: Mapping[DimensionKey, int]):
        self.sizes: Dict[DimensionKey, int] = dict(sizes)
        self.parent: Dict[DimensionKey, DimensionKey] = {key: key for key in self.sizes}
        self._members: Dict[DimensionKey, List[DimensionKey]] = {key: [key] for key in self.sizes}

    def __contains__(self, key: DimensionKey) -> bool:
        return key in self.parent

    def __len__(self) -> int:
        return len(self.parent)

    def find_root(self, key: DimensionKey) -> DimensionKey:
        """Return the representative of ``key``, compressing the path."""
        root = key
        while self.parent[root] != root:
            root = self.parent[root]
        while key != root:
            next_key = self.parent[key]
            self.parent[key] = root
            key = next_key
        return root

    def is_root(self, key: DimensionKey) -> bool:
        return self.parent[key] == key

    def connected(self, first: DimensionKey, second: DimensionKey) -> bool:
        return self.find_root(first) == self.find_root(second)

    def roots(self) -> List[DimensionKey]:
        """Current roots in key insertion order."""
        return [key for key in self.parent if self.parent[key] == key]

    def members(self, key: DimensionKey) -> List[DimensionKey]:
        """All original keys in the class of ``key``."""
        return list(self._members[self.find_root(key)])

    def effective_size(self, key: DimensionKey) -> int:
        """Total item count across the class of ``key``."""
        return sum(self.sizes[member] for member in self._members[self.find_root(key)])

    def union(self, first: DimensionKey, second: DimensionKey) -> DimensionKey:
        """Merge the classes of two keys and return the surviving root.

        Equal sizes keep the smaller key as root.
        """
        root1 = self.find_root(first)
        root2 = self.find_root(second)
        if root1 == root2:
            return root1

        size1 = self.effective_size(root1)
        size2 = self.effective_size(root2)
        if size1 < size2 or (size1 == size2 and root2 < root1):
            root1, root2 = root2, root1

        self.parent[root2] = root1
        self._members[root1].extend(self._members.pop(root2))
        return root1

    def classes(self) -> Dict[DimensionKey, List[DimensionKey]]:
        """Map every root to the original keys it represents."""
        return {root: list(self._members[root]) for root in self.roots()}

