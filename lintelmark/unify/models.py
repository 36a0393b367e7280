"""Measured lintel records passed through the unification engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from lintelmark.units import feet_to_mm

from .keys import DimensionKey
from .labels import format_type_name


@dataclass(eq=False)
class MeasuredItem:
    """A lintel instance with its raw opening dimensions.

    The caller owns the record. The engine only reads the raw dimensions and
    writes ``group_key`` and ``label`` once a run has completed. Items compare
    by identity, so two lintels with equal dimensions stay distinct.
    """
    ref: Any
    thick: float
    width: float
    height: float
    group_key: Optional[DimensionKey] = None
    label: Optional[str] = None

    @classmethod
    def from_feet(cls, ref: Any, thick_ft: float, width_ft: float, height_ft: float) -> "MeasuredItem":
        """Create an item from host values stored in decimal feet."""
        return cls(
            ref=ref,
            thick=feet_to_mm(thick_ft),
            width=feet_to_mm(width_ft),
            height=feet_to_mm(height_ft),
        )

    @property
    def type_name(self) -> Optional[str]:
        """Type name such as ``"PR-1 250x1200x2100"``, once labelled."""
        if self.label is None or self.group_key is None:
            return None
        return format_type_name(self.label, self.group_key)
