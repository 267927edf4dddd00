"""
Configuration for planmatrix.

Values not passed explicitly are read from the environment:
- PLANMATRIX_COLUMN_WIDTH: width of one rendered cell
- PLANMATRIX_DEAD_COLUMN_ELIMINATION: enable/disable the dead column pass
- PLANMATRIX_FILTER_HOISTING: enable/disable the filter hoisting pass
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_COLUMN_WIDTH = 11

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


@dataclass
class PlanSettings:
    """
    Settings for rendering and optimizing plans.

    - column_width: padding applied to every rendered cell
    - dead_column_elimination: run the dead column pass in the default optimizer
    - filter_hoisting: run the filter hoisting pass in the default optimizer
    """
    column_width: Optional[int] = None
    dead_column_elimination: Optional[bool] = None
    filter_hoisting: Optional[bool] = None

    def __post_init__(self):
        if self.column_width is None:
            self.column_width = int(os.environ.get("PLANMATRIX_COLUMN_WIDTH", DEFAULT_COLUMN_WIDTH))
        if self.dead_column_elimination is None:
            self.dead_column_elimination = _env_flag("PLANMATRIX_DEAD_COLUMN_ELIMINATION", True)
        if self.filter_hoisting is None:
            self.filter_hoisting = _env_flag("PLANMATRIX_FILTER_HOISTING", True)

        if self.column_width < 1:
            raise ValueError(f"column_width must be positive, got {self.column_width}")

    def enabled_rule_names(self) -> List[str]:
        """Names of the optimizer rules switched on by these settings."""
        names = []
        if self.dead_column_elimination:
            names.append("DeadColumnElimination")
        if self.filter_hoisting:
            names.append("FilterHoisting")
        return names
