"""
Lintel Unification Configuration

Tolerances, scoring weights and thresholds for one unification run,
validated with Pydantic.
"""

from __future__ import annotations

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from config.lintel_standards import STANDARDS
from lintelmark.exceptions import InvalidConfiguration

from .keys import RoundingBases


class ToleranceConfig(BaseModel):
    """
    Configuration for lintel group unification.

    Range checks raise ``InvalidConfiguration`` directly, both on
    construction and through ``check()`` at the start of every run.
    """
    model_config = ConfigDict(frozen=True)

    # Tolerances (mm)
    thick_tolerance: int = Field(
        default=STANDARDS["THICK_TOLERANCE_MM"],
        description="Maximum wall thickness difference between merged keys in mm"
    )
    width_tolerance: int = Field(
        default=STANDARDS["WIDTH_TOLERANCE_MM"],
        description="Maximum opening width difference between merged keys in mm"
    )
    height_tolerance: int = Field(
        default=STANDARDS["HEIGHT_TOLERANCE_MM"],
        description="Maximum opening height difference between merged keys in mm"
    )
    max_total_deviation: int = Field(
        default=STANDARDS["MAX_TOTAL_DEVIATION_MM"],
        description="Exclusive upper bound on the sum of the three axis differences in mm"
    )

    # Scoring weights
    thick_weight: float = Field(default=STANDARDS["THICK_WEIGHT"])
    width_weight: float = Field(default=STANDARDS["WIDTH_WEIGHT"])
    height_weight: float = Field(default=STANDARDS["HEIGHT_WEIGHT"])
    group_size_weight: float = Field(
        default=STANDARDS["GROUP_SIZE_WEIGHT"],
        description="Preference for merging small groups first (0..1)"
    )

    # Group thresholds
    min_viable_size: int = Field(
        default=STANDARDS["MIN_VIABLE_GROUP_SIZE"],
        description="Groups with fewer items are merge candidates"
    )
    target_group_size: Optional[int] = Field(
        default=None,
        description="Stop merging once the mean group size reaches this value (disabled if None)"
    )
    min_group_count: int = Field(
        default=STANDARDS["MIN_GROUP_COUNT"],
        description="Merging only runs when there are more initial groups than this"
    )
    tolerance_mode: Literal["strict", "adjacent"] = Field(
        default="strict",
        description="strict = every pair of original keys in a merged group must be compatible, "
                    "adjacent = only the two keys joined by each merge are checked"
    )

    # Key construction and labelling
    rounding: RoundingBases = Field(default_factory=RoundingBases)
    label_prefix: str = Field(default=STANDARDS["LABEL_PREFIX"])

    @model_validator(mode="after")
    def validate_ranges(self) -> "ToleranceConfig":
        """Reject non-positive tolerances, weights and thresholds."""
        self.check()
        return self

    def check(self) -> None:
        """Raise ``InvalidConfiguration`` if any value is out of range."""
        errors: dict[str, str] = {}

        for name in ("thick_tolerance", "width_tolerance", "height_tolerance", "max_total_deviation"):
            if getattr(self, name) <= 0:
                errors[name] = "must be > 0"

        weights = {
            "thick_weight": self.thick_weight,
            "width_weight": self.width_weight,
            "height_weight": self.height_weight,
        }
        for name, weight in weights.items():
            if not math.isfinite(weight) or weight <= 0:
                errors[name] = "must be a finite number > 0"

        if not math.isfinite(self.group_size_weight) or not 0.0 <= self.group_size_weight <= 1.0:
            errors["group_size_weight"] = "must be within [0, 1]"

        if self.min_viable_size < 1:
            errors["min_viable_size"] = "must be >= 1"
        if self.min_group_count < 1:
            errors["min_group_count"] = "must be >= 1"
        if self.target_group_size is not None and self.target_group_size < self.min_viable_size:
            errors["target_group_size"] = f"must be >= min_viable_size ({self.min_viable_size})"

        for axis, base in zip(("thick", "width", "height"), self.rounding.as_tuple()):
            if base <= 0:
                errors[f"rounding.{axis}"] = "must be > 0"

        if errors:
            summary = ", ".join(f"{name} {reason}" for name, reason in errors.items())
            raise InvalidConfiguration(f"Invalid unification configuration: {summary}", errors)

    @property
    def tolerances(self) -> tuple[int, int, int]:
        return (self.thick_tolerance, self.width_tolerance, self.height_tolerance)

    @property
    def normalized_weights(self) -> tuple[float, float, float]:
        """Axis weights scaled to sum to 1.0."""
        total = self.thick_weight + self.width_weight + self.height_weight
        return (self.thick_weight / total, self.width_weight / total, self.height_weight / total)
