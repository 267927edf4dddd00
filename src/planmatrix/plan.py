"""
Plan matrix for the planmatrix optimizer.

A plan is a jagged matrix: each row is a Step (the operations executed at
one stage) and each position within a Step is a column. Columns are not
stored; they are read out of the Steps on demand.

Design Principles:
1. Actions are immutable values - rewrites replace cells, never edit them
2. Steps may have different lengths - missing cells read as Empty
3. Optimization works on a copy - the caller's Plan is never mutated
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Union

if TYPE_CHECKING:
    from planmatrix.optimizer.base import Optimizer


class ActionType(Enum):
    """Tags for the operations that can occupy a plan cell."""
    # Placeholders
    EMPTY = "Empty"
    NONE = "None"

    # Column operations
    NAME = "Name"
    SELECT = "Select"
    MAP = "Map"
    FILTER = "Filter"
    GROUP = "Group"
    JOIN = "Join"


@dataclass(frozen=True)
class Action(ABC):
    """
    Base class for a single plan cell.

    Subclasses carry at most one payload (an identifier or a group index).
    The optimizer compares and moves payloads but never interprets them.
    """

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        """Return the tag of this action."""
        pass

    def _action_str(self) -> str:
        """Variant name, with the payload when there is one."""
        return self.action_type.value

    def __str__(self) -> str:
        return self._action_str()


@dataclass(frozen=True)
class Empty(Action):
    """A hole: no operation for this column at this stage."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.EMPTY


@dataclass(frozen=True)
class NoneAction(Action):
    """A reserved slot that is not yet a hole."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.NONE


@dataclass(frozen=True)
class Name(Action):
    """Introduces a named column."""
    identifier: str = ""

    @property
    def action_type(self) -> ActionType:
        return ActionType.NAME

    def _action_str(self) -> str:
        return f'Name("{self.identifier}")'


@dataclass(frozen=True)
class Select(Action):

    @property
    def action_type(self) -> ActionType:
        return ActionType.SELECT


@dataclass(frozen=True)
class Map(Action):

    @property
    def action_type(self) -> ActionType:
        return ActionType.MAP


@dataclass(frozen=True)
class Filter(Action):
    """Reads the column to drop rows; counts as a use of the column."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.FILTER


@dataclass(frozen=True)
class Group(Action):
    """Grouping boundary. Filters are never hoisted above it."""
    index: int = 0

    @property
    def action_type(self) -> ActionType:
        return ActionType.GROUP

    def _action_str(self) -> str:
        return f"Group({self.index})"


@dataclass(frozen=True)
class Join(Action):
    """Joins on the column; counts as a use of the column."""
    identifier: str = ""

    @property
    def action_type(self) -> ActionType:
        return ActionType.JOIN

    def _action_str(self) -> str:
        return f'Join("{self.identifier}")'


@dataclass
class Step:
    """
    One row of the plan.

    Its length is the number of columns active at this stage.
    """
    actions: List[Action] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)

    def __getitem__(self, index: int) -> Action:
        return self.actions[index]

    def __iter__(self) -> Iterator[Action]:
        return iter(self.actions)

    def get(self, index: int) -> Action:
        """Return the cell at ``index``, or Empty when the row is too short."""
        if 0 <= index < len(self.actions):
            return self.actions[index]
        return Empty()

    def remove(self, index: int) -> None:
        """Drop the cell at ``index``. Rows without that column are left alone."""
        if 0 <= index < len(self.actions):
            del self.actions[index]

    def copy(self) -> Step:
        return Step(list(self.actions))

    def contains_filter(self) -> bool:
        return any(action.action_type == ActionType.FILTER for action in self.actions)

    def contains_group(self) -> bool:
        return any(action.action_type == ActionType.GROUP for action in self.actions)

    def rightmost_filter_index(self) -> Optional[int]:
        """Position of the right-most Filter cell, or None if there is none."""
        for index in range(len(self.actions) - 1, -1, -1):
            if self.actions[index].action_type == ActionType.FILTER:
                return index
        return None

    def _step_str(self, column_width: int) -> str:
        return "".join(str(action).ljust(column_width) for action in self.actions)


@dataclass
class Column:
    """
    A vertical slice of a plan at one position.

    Columns are snapshots: they go stale as soon as the plan changes.
    """
    actions: List[Action] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self.actions)

    def is_dead(self) -> bool:
        """
        Check whether the column is named and then dropped without being used.

        A column is dead when it was introduced by a Name and then shows an
        Empty hole before any Filter or Join has read it. Once marked dead
        it stays dead: a use after the hole does not bring it back.
        """
        seen_name = False
        is_used = False
        is_dead = False

        for action in self.actions:
            action_type = action.action_type
            if action_type == ActionType.NAME:
                seen_name = True
            elif action_type in (ActionType.FILTER, ActionType.JOIN):
                is_used = True
            elif action_type == ActionType.EMPTY:
                if seen_name and not is_used:
                    is_dead = True

        return is_dead


StepLike = Union[Step, Sequence[Action]]


def _as_step(row: StepLike) -> Step:
    if isinstance(row, Step):
        return row.copy()
    actions = list(row)
    for action in actions:
        if not isinstance(action, Action):
            raise TypeError(f"Unsupported plan cell: {action!r}")
    return Step(actions)


class Plan:
    """
    An ordered sequence of Steps.

    The width of a plan is the length of its last Step: the most recent
    stage defines how many columns are current.
    """

    def __init__(self, steps: Optional[Iterable[StepLike]] = None):
        self.steps: List[Step] = [_as_step(row) for row in (steps or [])]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Action]]) -> Plan:
        """Build a plan from a literal (possibly jagged) matrix of actions."""
        return cls(rows)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plan):
            return NotImplemented
        return self.steps == other.steps

    def __repr__(self) -> str:
        return f"Plan(steps={len(self.steps)}, width={self.width})"

    def __str__(self) -> str:
        return self.pretty_print()

    @property
    def width(self) -> int:
        if not self.steps:
            return 0
        return len(self.steps[-1])

    def to_rows(self) -> List[List[Action]]:
        return [list(step.actions) for step in self.steps]

    def copy(self) -> Plan:
        """Value copy: no Step is shared with the result."""
        return Plan(self.steps)

    def column(self, index: int) -> Column:
        return Column([step.get(index) for step in self.steps])

    def columns(self) -> List[Column]:
        return [self.column(i) for i in range(self.width)]

    def remove_column(self, index: int) -> None:
        """Remove position ``index`` from every Step long enough to have it."""
        for step in self.steps:
            step.remove(index)

    def swap_steps(self, first: int, second: int) -> None:
        self.steps[first], self.steps[second] = self.steps[second], self.steps[first]

    def optimize(self, optimizer: Optional[Optimizer] = None) -> Plan:
        """
        Return an optimized copy of this plan.

        Args:
            optimizer: Optimizer to use. If None, dead columns are removed
                and Filter steps are hoisted, as enabled in the settings.
        """
        if optimizer is None:
            from planmatrix.optimizer.base import Optimizer
            optimizer = Optimizer()
        return optimizer.optimize(self)

    def pretty_print(self, column_width: Optional[int] = None) -> str:
        """
        Render one line per Step, each cell padded to ``column_width``.

        Defaults to the configured column width.
        """
        if column_width is None:
            from planmatrix import settings
            column_width = settings.get_config().column_width
        return "".join(step._step_str(column_width) + "\n" for step in self.steps)
