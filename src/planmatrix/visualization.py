"""
Visualization tools for planmatrix plans.

Provides graphviz DOT output and a pandas table view of the plan matrix.
"""

from __future__ import annotations

import html
from typing import Dict, List, Optional

import pandas as pd

from planmatrix.plan import Action, ActionType, Plan

CELL_COLORS: Dict[ActionType, str] = {
    ActionType.EMPTY: "#FFFFFF",
    ActionType.NONE: "#F5F5F5",
    ActionType.NAME: "#90EE90",  # Light green for column sources
    ActionType.SELECT: "#F0E68C",
    ActionType.MAP: "#F0E68C",
    ActionType.FILTER: "#ADD8E6",  # Light blue for filters
    ActionType.GROUP: "#FFB6C1",  # Light pink for grouping boundaries
    ActionType.JOIN: "#DDA0DD",  # Plum for joins
}


def _cell_label(action: Action) -> str:
    return html.escape(str(action))


def _table_rows(plan: Plan) -> List[str]:
    rows = []
    for position, step in enumerate(plan.steps):
        cells = [f'<TD BGCOLOR="#DDDDDD">{position}</TD>']
        for action in step:
            color = CELL_COLORS[action.action_type]
            cells.append(f'<TD BGCOLOR="{color}">{_cell_label(action)}</TD>')
        rows.append("<TR>" + "".join(cells) + "</TR>")
    return rows


def _plan_node(node_id: str, plan: Plan, indent: str = "  ") -> List[str]:
    lines = [f'{indent}"{node_id}" [label=<<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0">']
    for row in _table_rows(plan):
        lines.append(f"{indent}  {row}")
    lines.append(f"{indent}</TABLE>>];")
    return lines


def plan_to_dot(plan: Plan) -> str:
    """
    Convert a plan to DOT format for graphviz.

    The plan is drawn as one table: a row per step, a cell per action,
    each row prefixed with its step position.

    Args:
        plan: The plan to visualize

    Returns:
        DOT format string
    """
    lines = ["digraph Plan {"]
    lines.append("  node [shape=plaintext];")
    lines.extend(_plan_node("plan", plan))
    lines.append("}")

    return "\n".join(lines)


def visualize_plan(
    plan: Plan,
    filename: Optional[str] = None,
    format: str = "png",
) -> str:
    """
    Visualize a plan using graphviz.

    Args:
        plan: The plan to visualize
        filename: Output filename (without extension). If None, returns DOT string.
        format: Output format (png, pdf, svg, etc.)

    Returns:
        DOT string if filename is None, else the output filepath
    """
    dot_str = plan_to_dot(plan)

    if filename is None:
        return dot_str

    import graphviz

    graph = graphviz.Source(dot_str)
    return graph.render(filename, format=format, cleanup=True)


def compare_plans(
    before: Plan,
    after: Plan,
    filename: Optional[str] = None,
) -> str:
    """
    Create a side-by-side comparison of two plans.

    Args:
        before: Original plan
        after: Optimized plan
        filename: Output filename (optional, rendered as png)

    Returns:
        DOT string for the comparison
    """
    lines = ["digraph PlanComparison {"]
    lines.append("  node [shape=plaintext];")

    for key, title, plan in (("before", "Before Optimization", before),
                             ("after", "After Optimization", after)):
        lines.append(f"  subgraph cluster_{key} {{")
        lines.append(f'    label="{title}";')
        lines.append("    style=dashed;")
        lines.extend(_plan_node(key, plan, indent="    "))
        lines.append("  }")

    lines.append("}")

    dot_str = "\n".join(lines)

    if filename:
        import graphviz
        graph = graphviz.Source(dot_str)
        graph.render(filename, format="png", cleanup=True)

    return dot_str


def plan_to_frame(plan: Plan) -> pd.DataFrame:
    """
    Tabular view of the plan matrix.

    One row per step and one column per position, up to the widest step.
    Cells a step does not have are shown as Empty.
    """
    depth = max((len(step) for step in plan.steps), default=0)
    records = [
        [str(step.get(position)) for position in range(depth)]
        for step in plan.steps
    ]
    frame = pd.DataFrame(records, columns=list(range(depth)))
    frame.index.name = "step"
    return frame
