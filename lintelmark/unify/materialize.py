"""Rebuild final groups from the merged disjoint-set forest."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from .keys import DimensionKey
from .models import MeasuredItem
from .union_find import SizeUnionFind


def materialize_groups(
    groups: Mapping[DimensionKey, Sequence[MeasuredItem]],
    forest: SizeUnionFind,
) -> Dict[DimensionKey, List[MeasuredItem]]:
    """Concatenate every initial group into the group of its root key.

    Each item's ``group_key`` is overwritten with its root key. Every input
    item lands in exactly one output group.
    """
    key_to_root = {key: forest.find_root(key) for key in groups}

    merged: Dict[DimensionKey, List[MeasuredItem]] = {}
    for original_key, members in groups.items():
        root = key_to_root[original_key]
        group = merged.setdefault(root, [])
        for item in members:
            item.group_key = root
            group.append(item)

    return merged
