"""
Demo: Plan Matrix Optimization

Builds a small plan, removes its dead columns and hoists its filters,
then prints the plan before and after.

Set PLANMATRIX_COLUMN_WIDTH (or put it in .env) to change the cell width.
"""

import logging
import sys
sys.path.insert(0, 'src')

from pathlib import Path

from dotenv import load_dotenv

from planmatrix import Plan
from planmatrix.plan import Empty, Filter, Group, Join, Map, Name, NoneAction, Select


def build_plan() -> Plan:
    return Plan.from_rows([
        [Name("a"),    Name("b"),    Name("c")],
        [Map(),        Map(),        Map()],
        [NoneAction(), NoneAction(), Filter()],
        [Join("d"),    NoneAction(), NoneAction(), Name("d"),    Name("e")],
        [Group(0),     NoneAction(), NoneAction(), NoneAction(), NoneAction()],
        [Empty(),      Select(),     Empty(),      Select(),     Empty()],
    ])


def main():
    load_dotenv(dotenv_path=str(Path(__file__).parent.parent / '.env'))
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    plan = build_plan()
    optimized = plan.optimize()

    print("-> Query: ")
    print(plan)
    print("-> Optimized: ")
    print(optimized)


if __name__ == "__main__":
    main()
