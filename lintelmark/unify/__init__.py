"""Lintel size-group unification engine."""

from .config import ToleranceConfig
from .engine import LintelUnifier, UnificationResult, unify
from .keys import DimensionKey, RoundingBases
from .models import MeasuredItem
from .validators import PartitionReport, generate_group_report, validate_partition

__all__ = [
    "DimensionKey",
    "LintelUnifier",
    "MeasuredItem",
    "PartitionReport",
    "RoundingBases",
    "ToleranceConfig",
    "UnificationResult",
    "generate_group_report",
    "unify",
    "validate_partition",
]
