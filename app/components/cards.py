"""
Metric Card Components

Streamlit cards for displaying single values with context: signal
indicators against their thresholds and headline KPIs.
"""

import streamlit as st
from typing import Optional

from core.indicators import IndicatorValue, STATUS_OK


def get_status_color(status: str) -> str:
    """Get color hex code for an indicator status."""
    if status == STATUS_OK:
        return "#27ae60"
    return "#e74c3c"


def get_status_emoji(status: str) -> str:
    return "🟢" if status == STATUS_OK else "🔴"


def render_metric_card(
    title: str,
    value: str,
    color: str = "#3498db",
    caption: Optional[str] = None,
    help_text: Optional[str] = None
) -> None:
    """
    Render a KPI card with a large value and an optional caption.

    Args:
        title: Card title
        value: Pre-formatted value
        color: Value color
        caption: Optional line under the value
        help_text: Optional help tooltip text
    """
    help_html = ""
    if help_text:
        help_html = f"""
        <span style="
            font-size: 0.75rem;
            color: #7f8c8d;
            cursor: help;
        " title="{help_text}">ⓘ</span>
        """

    caption_html = ""
    if caption:
        caption_html = f"""
        <div style="
            font-size: 0.8rem;
            color: #7f8c8d;
            margin-top: 0.25rem;
        ">{caption}</div>
        """

    card_html = f"""
    <div style="
        padding: 1rem;
        background: #ffffff;
        border-radius: 10px;
        border: 1px solid #ecf0f1;
    ">
        <div style="
            font-size: 0.85rem;
            color: #7f8c8d;
            margin-bottom: 0.5rem;
            display: flex;
            justify-content: space-between;
            align-items: center;
        ">
            <span>{title}</span>
            {help_html}
        </div>
        <div style="
            font-size: 1.75rem;
            font-weight: bold;
            color: {color};
        ">{value}</div>
        {caption_html}
    </div>
    """

    st.markdown(card_html, unsafe_allow_html=True)


def render_indicator_card(indicator: IndicatorValue) -> None:
    """Render one signal indicator with its threshold and status badge."""
    color = get_status_color(indicator.status)
    render_metric_card(
        title=indicator.metric,
        value=f"{indicator.value:.2f}",
        color=color,
        caption=(
            f"{get_status_emoji(indicator.status)} {indicator.status} "
            f"(threshold {indicator.threshold:g})"
        ),
        help_text=f"ALERT when {indicator.metric} exceeds {indicator.threshold:g}",
    )
