"""Lintel marking: classify measured lintels and unify near-identical sizes."""

__version__ = "1.0.0"
