"""Sequential marks for final lintel groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Mapping, Sequence

from .keys import DimensionKey

if TYPE_CHECKING:
    from .models import MeasuredItem


def format_label(prefix: str, index: int) -> str:
    return f"{prefix}{index}"


def format_type_name(label: str, key: DimensionKey) -> str:
    """Type name written next to the mark, e.g. ``"PR-3 250x1200x2100"``."""
    return f"{label} {key}"


def assign_labels(
    groups: Mapping[DimensionKey, Sequence["MeasuredItem"]],
    prefix: str,
) -> Dict[DimensionKey, str]:
    """Label groups ``{prefix}1..n`` in ascending key order.

    Writes the label to every item and returns the key -> label mapping.
    """
    labels: Dict[DimensionKey, str] = {}
    for index, key in enumerate(sorted(groups), start=1):
        label = format_label(prefix, index)
        labels[key] = label
        for item in groups[key]:
            item.label = label
    return labels


def sorted_groups(
    groups: Mapping[DimensionKey, Sequence["MeasuredItem"]],
) -> Dict[DimensionKey, List["MeasuredItem"]]:
    """Copy of ``groups`` ordered by key."""
    return {key: list(groups[key]) for key in sorted(groups)}
