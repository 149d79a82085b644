"""Application services."""

from .feasibility import FeasibilityCheckError, filter_feasible

__all__ = ["FeasibilityCheckError", "filter_feasible"]
