"""Group measured lintels by exact rounded dimensions."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from loguru import logger

from .keys import DimensionKey, RoundingBases
from .models import MeasuredItem


def classify(
    items: Sequence[MeasuredItem],
    rounding: Optional[RoundingBases] = None,
) -> Dict[DimensionKey, List[MeasuredItem]]:
    """Classify items into groups keyed by their rounded dimensions.

    Groups keep first-seen insertion order. Every key is computed before
    any group is built, so a malformed item aborts the whole call and no
    item is touched.

    Raises:
        InvalidDimensions: If any item rounds to a non-positive dimension.
    """
    keys = [
        DimensionKey.from_measurements(item.thick, item.width, item.height, rounding, ref=item.ref)
        for item in items
    ]

    groups: Dict[DimensionKey, List[MeasuredItem]] = {}
    for item, key in zip(items, keys):
        groups.setdefault(key, []).append(item)

    logger.debug("Classified {} items into {} size groups", len(items), len(groups))
    return groups
