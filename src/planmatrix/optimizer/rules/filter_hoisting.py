"""
FilterHoisting optimization rule.

Move Filter steps as early as possible without crossing a Group step.
"""

import logging
from typing import List, Tuple

from planmatrix.optimizer.base import Rule
from planmatrix.plan import Plan

logger = logging.getLogger(__name__)


class FilterHoisting(Rule):
    """
    Hoist each Filter step up to just after its anchor.

    Before:                After:
        Name("a")              Name("a")
        Map                    Filter
        Filter                 Map

    The anchor starts at step 0 and moves to every Group step met while
    scanning down the plan, so a Filter never rises above the latest
    Group. It is narrowed further when a step between the anchor and the
    Filter is shorter than the Filter's right-most position minus one.
    The anchor never moves back up.

    The hoisted step jumps over the steps it passes; those keep their
    order and each move down by one.
    """

    @property
    def name(self) -> str:
        return "FilterHoisting"

    def moves(self, plan: Plan) -> List[Tuple[int, int]]:
        """(from, to) step positions of each hoist, in the order they happen."""
        _, moves = self._hoist(plan.copy())
        return moves

    def matches(self, plan: Plan) -> bool:
        return any(step.contains_filter() for step in plan.steps)

    def describe(self, plan: Plan) -> str:
        moves = self.moves(plan)
        if not moves:
            return "Filter steps already at their anchors"
        return "Hoist filter steps " + ", ".join(f"{src} -> {dst}" for src, dst in moves)

    def apply(self, plan: Plan) -> Plan:
        plan, _ = self._hoist(plan.copy())
        return plan

    def _hoist(self, plan: Plan) -> Tuple[Plan, List[Tuple[int, int]]]:
        steps = plan.steps
        moves: List[Tuple[int, int]] = []
        anchor = 0

        for i in range(len(steps)):
            step = steps[i]
            if step.contains_group():
                anchor = i

            if not step.contains_filter():
                continue

            filter_index = step.rightmost_filter_index()
            if filter_index is not None:
                for j in range(i - 1, anchor - 1, -1):
                    if len(steps[j]) < filter_index - 1:
                        anchor = j
                        break

            for k in range(i, anchor + 1, -1):
                plan.swap_steps(k, k - 1)

            if i > anchor + 1:
                logger.debug("Hoisting filter step %d to %d", i, anchor + 1)
                moves.append((i, anchor + 1))

        return plan, moves
