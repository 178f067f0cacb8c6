"""
Dashboard Components Module

Reusable building blocks for the dashboards.

Components:
- charts: Plotly panel builders and standalone figures
- cards: Streamlit metric cards (imported directly by the Streamlit app)
"""

from .charts import (
    COLORS,
    add_caption,
    create_spectrum_chart,
    get_default_layout,
)

__all__ = [
    "COLORS",
    "add_caption",
    "create_spectrum_chart",
    "get_default_layout",
]
