"""
planmatrix: a query plan matrix with rule-based rewrites.

A plan is a jagged matrix of per-column actions, one row per stage.
The optimizer supports:
- Dead column elimination (named columns never read by Filter/Join)
- Filter hoisting up to the nearest Group boundary

Usage:
    import planmatrix as pm
    from planmatrix.plan import Name, Map, Filter

    plan = pm.Plan([[Name("a")], [Map()], [Filter()]])
    print(plan.optimize())
"""

from planmatrix.plan import Plan, Step, Column, Action, ActionType
from planmatrix.optimizer import Optimizer
from planmatrix import settings

__version__ = "0.1.0"

__all__ = [
    "Plan",
    "Step",
    "Column",
    "Action",
    "ActionType",
    "Optimizer",
    "settings",
]
