"""UI components for the Table Insights viewer."""
from .header import render_table_header
from .panels import (
    render_box_plots,
    render_correlation,
    render_distribution,
    render_preview,
    render_statistics,
    render_visualization,
)
from .training import render_training

__all__ = [
    "render_table_header",
    "render_preview",
    "render_statistics",
    "render_visualization",
    "render_correlation",
    "render_distribution",
    "render_box_plots",
    "render_training",
]
