"""Dimensional compatibility between size keys."""

from __future__ import annotations

from typing import Iterable, Tuple

from .config import ToleranceConfig
from .keys import DimensionKey


def axis_deviations(source: DimensionKey, target: DimensionKey) -> Tuple[int, int, int]:
    """Absolute (thick, width, height) differences."""
    return (
        abs(source.thick - target.thick),
        abs(source.width - target.width),
        abs(source.height - target.height),
    )


def aggregate_deviation(source: DimensionKey, target: DimensionKey) -> int:
    return sum(axis_deviations(source, target))


def is_compatible(source: DimensionKey, target: DimensionKey, config: ToleranceConfig) -> bool:
    """Check whether two keys may share a group.

    Every axis difference must be within its tolerance and the summed
    difference must stay strictly below ``max_total_deviation``.
    """
    deviations = axis_deviations(source, target)
    within_limits = all(diff <= limit for diff, limit in zip(deviations, config.tolerances))
    return within_limits and sum(deviations) < config.max_total_deviation


def classes_compatible(
    source_keys: Iterable[DimensionKey],
    target_keys: Iterable[DimensionKey],
    config: ToleranceConfig,
) -> bool:
    """Check every pair of original keys across two equivalence classes."""
    targets = list(target_keys)
    return all(is_compatible(source, target, config) for source in source_keys for target in targets)
