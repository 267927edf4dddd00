"""
DeadColumnElimination optimization rule.

Remove columns that are named and then dropped without ever being read.
"""

import logging
from typing import List

from planmatrix.optimizer.base import Rule
from planmatrix.plan import Plan

logger = logging.getLogger(__name__)


class DeadColumnElimination(Rule):
    """
    Strip dead columns from the plan.

    Before:
        Name("a")
        Join("d")  Name("b")  Name("c")
        Select     Select     Empty
    After:
        Name("a")
        Join("d")  Name("b")
        Select     Select

    Only columns up to the plan width (the last step's length) are
    considered. Surviving columns keep their relative order.
    """

    @property
    def name(self) -> str:
        return "DeadColumnElimination"

    def dead_columns(self, plan: Plan) -> List[int]:
        """Indices of the dead columns, as numbered in ``plan``."""
        return [i for i, column in enumerate(plan.columns()) if column.is_dead()]

    def matches(self, plan: Plan) -> bool:
        return any(column.is_dead() for column in plan.columns())

    def describe(self, plan: Plan) -> str:
        return f"Remove dead columns {self.dead_columns(plan)}"

    def apply(self, plan: Plan) -> Plan:
        plan = plan.copy()

        # Removing a column shifts the later ones left, so only advance
        # past columns that stay.
        index = 0
        removed = 0
        while index < plan.width:
            if plan.column(index).is_dead():
                logger.debug("Removing dead column %d", index + removed)
                plan.remove_column(index)
                removed += 1
            else:
                index += 1

        return plan
