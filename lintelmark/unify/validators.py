"""Quality checks and summary report for unified lintel groups."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from .config import ToleranceConfig
from .engine import UnificationResult
from .keys import DimensionKey
from .models import MeasuredItem
from .tolerance import aggregate_deviation, axis_deviations, is_compatible


@dataclass
class PartitionReport:
    """Partition validation report."""
    completeness_issues: List[str]
    tolerance_issues: List[str]
    metrics: Dict[str, Any]

    @property
    def is_valid(self) -> bool:
        return not self.completeness_issues and not self.tolerance_issues


def validate_partition(
    items: Sequence[MeasuredItem],
    groups: Mapping[DimensionKey, Sequence[MeasuredItem]],
    config: ToleranceConfig,
) -> PartitionReport:
    """Check that ``groups`` partitions ``items`` within tolerance.

    Every item must appear in exactly one group, and every pair of distinct
    original keys sharing a group must satisfy the tolerance predicate.
    """
    completeness_issues: List[str] = []
    tolerance_issues: List[str] = []

    seen: Counter = Counter()
    for root, members in groups.items():
        if not members:
            completeness_issues.append(f"Group {root} is empty")
        for item in members:
            seen[id(item)] += 1
            if item.group_key is not None and item.group_key != root:
                completeness_issues.append(f"Item {item.ref!r} carries key {item.group_key} but sits in group {root}")

    expected = {id(item): item for item in items}
    for item_id, item in expected.items():
        count = seen.get(item_id, 0)
        if count == 0:
            completeness_issues.append(f"Item {item.ref!r} is missing from all groups")
        elif count > 1:
            completeness_issues.append(f"Item {item.ref!r} appears in {count} groups")
    unknown = len(set(seen) - set(expected))
    if unknown:
        completeness_issues.append(f"{unknown} grouped items are not part of the input")

    max_spread = 0
    for root, members in groups.items():
        originals = sorted({
            DimensionKey.from_measurements(item.thick, item.width, item.height, config.rounding, ref=item.ref)
            for item in members
        })
        for i, first in enumerate(originals):
            for second in originals[i + 1:]:
                max_spread = max(max_spread, aggregate_deviation(first, second))
                if not is_compatible(first, second, config):
                    tolerance_issues.append(
                        f"Group {root}: keys {first} and {second} exceed tolerance "
                        f"(deviations {axis_deviations(first, second)})"
                    )

    return PartitionReport(
        completeness_issues=completeness_issues,
        tolerance_issues=tolerance_issues,
        metrics={
            "item_count": len(expected),
            "grouped_items": sum(seen.values()),
            "group_count": len(groups),
            "max_aggregate_deviation": max_spread,
        },
    )


def generate_group_report(result: UnificationResult, config: ToleranceConfig) -> Dict[str, Any]:
    """Generate a JSON-ready summary of a unification run."""
    sizes = {key: len(members) for key, members in result.groups.items()}
    undersized = [key for key, size in sizes.items() if size < config.min_viable_size]

    return {
        "summary": {
            "total_items": result.item_count,
            "initial_groups": len(result.initial_groups),
            "final_groups": len(result.groups),
            "merges": len(result.merges),
            "iterations": result.iterations,
            "standalone_undersized": len(undersized),
        },
        "size_distribution": dict(sorted(Counter(sizes.values()).items())),
        "groups": [
            {
                "label": result.labels[key],
                "key": str(key),
                "size": sizes[key],
                "merged_keys": [str(member) for member in sorted(result.classes.get(key, [key]))],
            }
            for key in result.groups
        ],
        "merges": [
            {
                "source": str(match.source),
                "target": str(match.target),
                "score": round(match.score, 6),
                "iteration": match.iteration,
            }
            for match in result.merges
        ],
        "undersized": [str(key) for key in undersized],
    }
