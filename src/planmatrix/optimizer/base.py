"""
Base classes for plan optimization.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from planmatrix.plan import Plan

logger = logging.getLogger(__name__)


class Rule(ABC):
    """
    Base class for optimization rules.

    Each rule is one whole-plan rewrite pass. ``apply`` returns a new plan
    and leaves its argument untouched.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the rule for logging/debugging."""
        pass

    @abstractmethod
    def matches(self, plan: Plan) -> bool:
        """Check if this rule would change the given plan."""
        pass

    @abstractmethod
    def apply(self, plan: Plan) -> Plan:
        """Apply the rewrite and return the new plan."""
        pass

    def describe(self, plan: Plan) -> str:
        """Short description of what the rule would do to ``plan``."""
        return f"Can apply {self.name}"

    def __repr__(self) -> str:
        return f"Rule({self.name})"


class Optimizer:
    """
    Plan optimizer that applies rewrite rules.

    Rules run once each, in list order. Later rules see the output of
    earlier ones, so the order is part of the optimizer's behavior.
    """

    def __init__(self, rules: Optional[List[Rule]] = None):
        """
        Initialize optimizer with rules.

        Args:
            rules: List of optimization rules. If None, uses the default
                rules enabled in the settings.
        """
        if rules is None:
            self.rules = self._default_rules()
        else:
            self.rules = rules

    def _default_rules(self) -> List[Rule]:
        """Get the default rules: dead columns first, then filter hoisting."""
        from planmatrix import settings
        from planmatrix.optimizer.rules import DeadColumnElimination, FilterHoisting

        enabled = settings.get_config().enabled_rule_names()
        rules: List[Rule] = [DeadColumnElimination(), FilterHoisting()]
        return [rule for rule in rules if rule.name in enabled]

    def optimize(self, plan: Plan) -> Plan:
        """
        Optimize the plan by applying every rule once, in order.

        Args:
            plan: The plan to optimize. It is not modified.

        Returns:
            Optimized plan
        """
        current = plan.copy()

        for rule in self.rules:
            if not rule.matches(current):
                logger.debug("Skipping %s: no match", rule.name)
                continue
            logger.info("Applying %s", rule.name)
            current = rule.apply(current)

        return current

    def optimize_with_rules(
        self,
        plan: Plan,
        rule_names: List[str],
    ) -> Plan:
        """
        Optimize using only specific rules.

        Args:
            plan: The plan to optimize
            rule_names: Names of rules to apply
        """
        selected_rules = [r for r in self.rules if r.name in rule_names]
        temp_optimizer = Optimizer(rules=selected_rules)
        return temp_optimizer.optimize(plan)

    def get_optimization_suggestions(self, plan: Plan) -> List[Dict[str, Any]]:
        """
        Get suggestions for optimizations without applying them.

        Each rule is checked against the output of the rules before it,
        the same way ``optimize`` would see the plan.

        Returns:
            List of dicts with rule name and description
        """
        suggestions = []
        current = plan.copy()

        for rule in self.rules:
            if rule.matches(current):
                suggestions.append({
                    "rule": rule.name,
                    "description": rule.describe(current),
                })
                current = rule.apply(current)

        return suggestions
