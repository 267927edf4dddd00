"""
planmatrix Settings Module.

Provides a unified configuration API for rendering and optimization.

Usage:
    import planmatrix as pm

    # Wider cells in printed plans
    pm.settings.configure(column_width=16)

    # Only remove dead columns, keep step order
    pm.settings.configure(filter_hoisting=False)
"""

from __future__ import annotations

from typing import Optional

from planmatrix.config import PlanSettings


# Global settings instance
_current_config: Optional[PlanSettings] = None


def get_config() -> PlanSettings:
    """Get the current settings, building them from the environment on first use."""
    global _current_config
    if _current_config is None:
        _current_config = PlanSettings()
    return _current_config


def configure(
    column_width: Optional[int] = None,
    dead_column_elimination: Optional[bool] = None,
    filter_hoisting: Optional[bool] = None,
) -> PlanSettings:
    """
    Configure planmatrix settings.

    Args:
        column_width: Width of one rendered cell (default: 11)
        dead_column_elimination: Run the dead column pass (default: True)
        filter_hoisting: Run the filter hoisting pass (default: True)

    Any argument left as None falls back to the environment, then to the default.

    Returns:
        The new settings
    """
    global _current_config
    _current_config = PlanSettings(
        column_width=column_width,
        dead_column_elimination=dead_column_elimination,
        filter_hoisting=filter_hoisting,
    )
    return _current_config


def reset():
    """Reset settings to defaults."""
    global _current_config
    _current_config = None
