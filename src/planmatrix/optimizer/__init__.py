"""
planmatrix Plan Optimizer Module.

Rule-based rewrites over a plan matrix:
- DeadColumnElimination: drop columns that are named but never read
- FilterHoisting: move Filter steps up to the nearest Group boundary
"""

from planmatrix.optimizer.base import Rule, Optimizer
from planmatrix.optimizer.rules import (
    DeadColumnElimination,
    FilterHoisting,
)

__all__ = [
    "Rule",
    "Optimizer",
    "DeadColumnElimination",
    "FilterHoisting",
]
