"""Visuals package public API.
This module re-exports key functions and constants from submodules
to provide a simplified interface.
"""

from .core.colors import get_category_color
from .core.constants import (
    cutoff_date,
    dpi,
    duration_ms,
    figsize,
    start_date,
    sub_steps,
    top_n,
)
from .core.fonts import get_fonts
from .core.scales import LinearScale
from .core.style import setup_bar_plot_style

__all__ = [
    "cutoff_date",
    "dpi",
    "duration_ms",
    "figsize",
    "start_date",
    "sub_steps",
    "top_n",
    "get_category_color",
    "get_fonts",
    "LinearScale",
    "setup_bar_plot_style",
]
