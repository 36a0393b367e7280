"""Iterative merging of undersized lintel groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from .config import ToleranceConfig
from .keys import DimensionKey
from .models import MeasuredItem
from .scoring import similarity_score
from .tolerance import classes_compatible, is_compatible
from .union_find import SizeUnionFind


class DriverState(str, Enum):
    """Lifecycle of one unification run."""
    IDLE = "idle"
    ANALYZING = "analyzing"
    MERGING = "merging"
    DONE = "done"


@dataclass(frozen=True)
class GroupMatch:
    """A merge applied by the driver."""
    source: DimensionKey
    target: DimensionKey
    score: float
    iteration: int


@dataclass
class GroupAnalysis:
    """Item counts per initial group."""
    keys: List[DimensionKey]
    sizes: Dict[DimensionKey, int]
    total_items: int

    @classmethod
    def from_groups(cls, groups: Mapping[DimensionKey, Sequence[MeasuredItem]]) -> "GroupAnalysis":
        sizes = {key: len(members) for key, members in groups.items()}
        return cls(keys=list(sizes), sizes=sizes, total_items=sum(sizes.values()))


@dataclass
class UnificationDriver:
    """Merges undersized groups into compatible groups until a fixed point.

    Each iteration collects the roots below ``min_viable_size``, visits them
    smallest first and unions each with its best-scoring compatible key. The
    run ends when nothing is undersized or an iteration applies no merge.
    """
    config: ToleranceConfig
    state: DriverState = DriverState.IDLE
    iterations: int = 0
    merges: List[GroupMatch] = field(default_factory=list)
    analysis: Optional[GroupAnalysis] = None
    forest: Optional[SizeUnionFind] = None

    def run(self, groups: Mapping[DimensionKey, Sequence[MeasuredItem]]) -> SizeUnionFind:
        """Merge ``groups`` and return the final disjoint-set forest."""
        self.state = DriverState.ANALYZING
        self.iterations = 0
        self.merges = []
        self.analysis = GroupAnalysis.from_groups(groups)
        self.forest = SizeUnionFind(self.analysis.sizes)

        if len(self.analysis.keys) <= self.config.min_group_count:
            logger.debug(
                "Skipping unification: {} groups do not exceed min_group_count={}",
                len(self.analysis.keys),
                self.config.min_group_count,
            )
            self.state = DriverState.DONE
            return self.forest

        self.state = DriverState.MERGING
        while self.state is DriverState.MERGING:
            self._step()

        logger.debug(
            "Unification finished after {} iterations: {} merges, {} -> {} groups",
            self.iterations,
            len(self.merges),
            len(self.analysis.keys),
            len(self.forest.roots()),
        )
        return self.forest

    def pending_keys(self) -> List[DimensionKey]:
        """Roots below the minimum viable size, smallest first."""
        forest = self.forest
        undersized = [
            (forest.effective_size(root), root)
            for root in forest.roots()
            if forest.effective_size(root) < self.config.min_viable_size
        ]
        return [root for _, root in sorted(undersized)]

    def _step(self) -> None:
        pending = self.pending_keys()
        if not pending or self._target_reached():
            self.state = DriverState.DONE
            return

        self.iterations += 1
        merged = False
        for source in pending:
            if not self.forest.is_root(source):
                continue
            if self.forest.effective_size(source) >= self.config.min_viable_size:
                continue
            match = self.find_best_match(source)
            if match is None:
                continue
            root = self.forest.union(match.source, match.target)
            self.merges.append(match)
            merged = True
            logger.bind(iteration=self.iterations).debug(
                "Merged {} into {} (score {:.4f}), root {}",
                match.source,
                match.target,
                match.score,
                root,
            )

        if not merged:
            self.state = DriverState.DONE

    def find_best_match(self, source: DimensionKey) -> Optional[GroupMatch]:
        """Best compatible key outside the class of ``source``.

        Ties on score prefer the larger target class, then the smaller key.
        """
        forest = self.forest
        source_size = forest.effective_size(source)
        source_members = forest.members(source)
        strict = self.config.tolerance_mode == "strict"

        best: Optional[tuple] = None
        for candidate in self.analysis.keys:
            if forest.connected(source, candidate):
                continue
            if not is_compatible(source, candidate, self.config):
                continue
            if strict and not classes_compatible(source_members, forest.members(candidate), self.config):
                continue
            score = similarity_score(source, candidate, source_size, self.analysis.total_items, self.config)
            rank = (score, -forest.effective_size(candidate), candidate)
            if best is None or rank < best:
                best = rank

        if best is None:
            return None
        score, _, target = best
        return GroupMatch(source=source, target=target, score=score, iteration=self.iterations)

    def _target_reached(self) -> bool:
        target = self.config.target_group_size
        if target is None:
            return False
        roots = self.forest.roots()
        return self.analysis.total_items / len(roots) >= target
