"""Length unit conversion for values read from host models."""

from __future__ import annotations

from config.lintel_standards import STANDARDS

FEET_TO_MM: float = STANDARDS["FEET_TO_MM"]


def feet_to_mm(length: float) -> float:
    """Convert internal host units (decimal feet) to millimetres."""
    return length * FEET_TO_MM

