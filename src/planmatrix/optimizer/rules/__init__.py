"""
Rule-based optimization rules for planmatrix.
"""

from planmatrix.optimizer.rules.dead_column_elimination import DeadColumnElimination
from planmatrix.optimizer.rules.filter_hoisting import FilterHoisting

__all__ = [
    "DeadColumnElimination",
    "FilterHoisting",
]
