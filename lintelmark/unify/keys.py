"""Rounded dimension keys identifying lintel size groups."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from config.lintel_standards import STANDARDS
from lintelmark.exceptions import InvalidConfiguration, InvalidDimensions

AXES = ("thick", "width", "height")


def round_to_base(value: float, base: int) -> int:
    """Round half-up to the nearest multiple of ``base``."""
    return int(math.floor(value / base + 0.5)) * base


class RoundingBases(BaseModel):
    """Per-axis rounding bases in mm."""
    model_config = ConfigDict(frozen=True)

    thick: int = Field(default=STANDARDS["ROUND_BASE_MM"], description="Rounding base for wall thickness")
    width: int = Field(default=STANDARDS["ROUND_BASE_MM"], description="Rounding base for opening width")
    height: int = Field(default=STANDARDS["ROUND_BASE_MM"], description="Rounding base for opening height")

    @model_validator(mode="after")
    def validate_bases(self) -> "RoundingBases":
        invalid = {axis: base for axis, base in zip(AXES, self.as_tuple()) if base <= 0}
        if invalid:
            raise InvalidConfiguration(f"Rounding bases must be > 0: {invalid}", invalid)
        return self

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.thick, self.width, self.height)


@dataclass(frozen=True, order=True)
class DimensionKey:
    """Rounded (thick, width, height) triple.

    Ordering is lexicographic on thick, then width, then height, which is
    also the labelling order.
    """
    thick: int
    width: int
    height: int

    def __post_init__(self) -> None:
        for axis in AXES:
            value = getattr(self, axis)
            if value <= 0:
                raise InvalidDimensions(
                    f"Dimension '{axis}' must be positive, got {value}",
                    {"axis": axis, "value": value},
                )

    @classmethod
    def from_measurements(
        cls,
        thick: float,
        width: float,
        height: float,
        rounding: RoundingBases | None = None,
        ref: Any = None,
    ) -> "DimensionKey":
        """Build a key from raw measurements.

        Raises:
            InvalidDimensions: If a value is not finite or rounds to <= 0.
        """
        bases = (rounding or RoundingBases()).as_tuple()
        rounded: list[int] = []
        for axis, raw, base in zip(AXES, (thick, width, height), bases):
            details = {"axis": axis, "raw": raw, "base": base, "ref": ref}
            try:
                number = float(raw)
            except (TypeError, ValueError) as exc:
                raise InvalidDimensions(f"Dimension '{axis}' is not numeric: {raw!r}", details) from exc
            if not math.isfinite(number):
                raise InvalidDimensions(f"Dimension '{axis}' is not finite: {raw!r}", details)
            value = round_to_base(number, base)
            if value <= 0:
                details["rounded"] = value
                raise InvalidDimensions(
                    f"Dimension '{axis}' rounds to {value} (raw {raw}, base {base})",
                    details,
                )
            rounded.append(value)
        return cls(*rounded)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.thick, self.width, self.height)

    def __str__(self) -> str:
        return f"{self.thick}x{self.width}x{self.height}"
