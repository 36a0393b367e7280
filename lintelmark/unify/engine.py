"""Classify, unify and label lintels in one pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from loguru import logger

from lintelmark.logging_config import run_context

from .classifier import classify
from .config import ToleranceConfig
from .driver import DriverState, GroupMatch, UnificationDriver
from .keys import DimensionKey
from .labels import assign_labels, sorted_groups
from .materialize import materialize_groups
from .models import MeasuredItem


@dataclass
class UnificationResult:
    """Outcome of one unification run."""
    groups: Dict[DimensionKey, List[MeasuredItem]]
    initial_groups: Dict[DimensionKey, List[MeasuredItem]]
    labels: Dict[DimensionKey, str]
    classes: Dict[DimensionKey, List[DimensionKey]] = field(default_factory=dict)
    merges: List[GroupMatch] = field(default_factory=list)
    iterations: int = 0
    state: DriverState = DriverState.DONE

    @property
    def item_count(self) -> int:
        return sum(len(members) for members in self.groups.values())


class LintelUnifier:
    """Runs classification, unification and labelling for one batch.

    A new driver and forest are built on every call, so one instance can be
    reused for sequential batches but must not be shared across threads
    while a run is in progress.
    """

    def __init__(self, config: Optional[ToleranceConfig] = None):
        self.config = config or ToleranceConfig()

    def run(self, items: Sequence[MeasuredItem]) -> UnificationResult:
        """Unify ``items`` and write each item's group key and label.

        Raises:
            InvalidConfiguration: If the configuration is out of range.
            InvalidDimensions: If any item rounds to a non-positive dimension.
        """
        self.config.check()

        with run_context(len(items), self.config.tolerance_mode):
            initial = classify(items, self.config.rounding)

            driver = UnificationDriver(self.config)
            forest = driver.run(initial)

            groups = sorted_groups(materialize_groups(initial, forest))
            labels = assign_labels(groups, self.config.label_prefix)

            logger.info(
                "Unified {} lintels: {} size groups -> {} marks ({} merges)",
                len(items),
                len(initial),
                len(groups),
                len(driver.merges),
            )
        return UnificationResult(
            groups=groups,
            initial_groups=initial,
            labels=labels,
            classes=forest.classes(),
            merges=list(driver.merges),
            iterations=driver.iterations,
            state=driver.state,
        )


def unify(
    items: Sequence[MeasuredItem],
    config: Optional[ToleranceConfig] = None,
) -> Dict[DimensionKey, List[MeasuredItem]]:
    """Group ``items`` into labelled size groups keyed by their root key."""
    return LintelUnifier(config).run(items).groups
