"""Similarity score for candidate merges (lower is better)."""

from __future__ import annotations

from .config import ToleranceConfig
from .keys import DimensionKey
from .tolerance import axis_deviations


def similarity_score(
    source: DimensionKey,
    target: DimensionKey,
    source_size: int,
    total_items: int,
    config: ToleranceConfig,
) -> float:
    """Score merging ``source`` into ``target``.

    Axis differences are normalised by their tolerances and combined with the
    normalised axis weights. The result is scaled by ``1 - size_factor`` where
    ``size_factor = (1 - source_size / total_items) * group_size_weight``, so
    smaller source groups score lower.

    Args:
        source: Key of the undersized group being rescued.
        target: Candidate key to merge into.
        source_size: Effective item count of the source class.
        total_items: Item count over all groups.
        config: Tolerances and weights.

    Returns:
        Non-negative score.
    """
    weights = config.normalized_weights
    dimension_score = sum(
        diff / tolerance * weight
        for diff, tolerance, weight in zip(axis_deviations(source, target), config.tolerances, weights)
    )

    size_ratio = source_size / total_items if total_items else 1.0
    size_factor = (1.0 - size_ratio) * config.group_size_weight

    return dimension_score * (1.0 - size_factor)
