"""
Chart Components for Dashboard Panels

This module provides Plotly-based panel builders. Each builder draws one
panel into a given cell of a subplot figure, so the layout module can
compose them into multi-panel dashboards.

All panels are designed to be:
- Consistent in styling (shared palette and fonts)
- Self-describing (axis titles, reference lines, annotations)
- Color-coded for quick interpretation
"""

import plotly.graph_objects as go
import plotly.express as px
from datetime import date
from typing import Dict, Any, Optional

import numpy as np
import pandas as pd


# =========================================
# Color Schemes
# =========================================

COLORS = {
    "healthy": "#27ae60",    # Green
    "fault": "#e74c3c",      # Red
    "primary": "#3498db",    # Blue
    "dark": "#2c3e50",       # Navy
    "muted": "#7f8c8d",      # Gray
    "light": "#95a5a6",      # Light gray
    "warning": "#f39c12",    # Amber
    "caution": "#e67e22",    # Orange
    "purple": "#8e44ad",
    "yellow": "#f1c40f",
    "mint": "#2ecc71",
    "grid": "#ecf0f1",
}

CONDITION_COLORS = {
    "healthy": COLORS["healthy"],
    "current": COLORS["fault"],
    "Healthy": COLORS["healthy"],
    "Current": COLORS["fault"],
}

BAND_COLORS = {
    "60 Hz (Motor)": COLORS["healthy"],
    "85 Hz (Fault)": COLORS["fault"],
    "120 Hz (Harmonic)": COLORS["primary"],
}

ACTION_COLORS = {
    "Monitor": COLORS["light"],
    "Schedule Inspection": COLORS["warning"],
    "Urgent Maintenance": COLORS["fault"],
}

STATUS_SYMBOLS = {
    "Normal": "circle",
    "Warning": "triangle-up",
    "Critical": "square",
}

TEMPERATURE_COLORSCALE = [
    [0.0, COLORS["primary"]],
    [0.5, "#ffffff"],
    [1.0, COLORS["fault"]],
]


# =========================================
# Layout Defaults
# =========================================

def get_default_layout(
    title: str,
    subtitle: str = "",
    height: int = 1000
) -> dict:
    """Get default dashboard layout settings."""
    title_text = f"<b>{title}</b>"
    if subtitle:
        title_text += f"<br><sup>{subtitle}</sup>"
    return {
        "title": {
            "text": title_text,
            "font": {"size": 20, "color": COLORS["dark"]},
            "x": 0.01,
            "xanchor": "left",
        },
        "paper_bgcolor": "#ffffff",
        "plot_bgcolor": "#ffffff",
        "height": height,
        "margin": {"l": 60, "r": 40, "t": 110, "b": 80},
        "font": {"color": COLORS["dark"], "size": 11},
        "legend": {
            "orientation": "h",
            "yanchor": "top",
            "y": -0.04,
            "xanchor": "center",
            "x": 0.5,
        },
        "hovermode": "closest",
    }


def add_caption(fig: go.Figure, text: str) -> None:
    """Add a right-aligned caption below the plotting area."""
    fig.add_annotation(
        text=text,
        xref="paper", yref="paper",
        x=1.0, y=-0.08,
        xanchor="right", yanchor="top",
        showarrow=False,
        font={"size": 9, "color": COLORS["light"]},
    )


def generated_caption(source: str, generated_on: Optional[date] = None) -> str:
    generated_on = generated_on or date.today()
    return f"Dashboard generated: {generated_on.isoformat()} | Source: {source}"


def style_axes(fig: go.Figure) -> None:
    """Minimal theme: light grid, no zero lines."""
    fig.update_xaxes(gridcolor=COLORS["grid"], zeroline=False, showline=False)
    fig.update_yaxes(gridcolor=COLORS["grid"], zeroline=False, showline=False)


def _hide_axes(fig: go.Figure, row: int, col: int) -> None:
    fig.update_xaxes(visible=False, row=row, col=col)
    fig.update_yaxes(visible=False, row=row, col=col)


def _rgba(hex_color: str, alpha: float) -> str:
    return (
        f"rgba({int(hex_color[1:3], 16)}, {int(hex_color[3:5], 16)}, "
        f"{int(hex_color[5:7], 16)}, {alpha})"
    )


# =========================================
# Equipment Health Panels
# =========================================

def add_vibration_time_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """
    Time-domain vibration traces for each condition.

    Args:
        fig: Subplot figure to draw into
        data: Columns time_ms, condition, amplitude
        row: Subplot row
        col: Subplot column
    """
    for condition, group in data.groupby("condition", sort=False):
        fig.add_trace(go.Scatter(
            x=group["time_ms"],
            y=group["amplitude"],
            mode="lines",
            name=condition,
            legendgroup=condition.lower(),
            line={"color": CONDITION_COLORS.get(condition, COLORS["primary"]), "width": 1.5},
            hovertemplate="<b>%{y:.2f}</b> @ %{x:.0f} ms<extra></extra>",
        ), row=row, col=col)

    fig.update_xaxes(title_text="Time (ms)", row=row, col=col)
    fig.update_yaxes(title_text="Amplitude", row=row, col=col)


def add_spectrum_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int,
    fault_frequency_hz: float = 85.0
) -> None:
    """
    FFT power per condition on a log scale with the fault frequency marked.

    Args:
        data: Columns frequency, power, condition
        fault_frequency_hz: Frequency of the bearing fault signature
    """
    for condition, group in data.groupby("condition", sort=False):
        fig.add_trace(go.Scatter(
            x=group["frequency"],
            y=group["power"],
            mode="lines",
            name=condition,
            legendgroup=condition.lower(),
            showlegend=False,
            line={"color": CONDITION_COLORS.get(condition, COLORS["primary"]), "width": 1.5},
            hovertemplate="<b>%{y:.3g}</b> @ %{x:.0f} Hz<extra></extra>",
        ), row=row, col=col)

    fig.add_vline(
        x=fault_frequency_hz,
        line_dash="dash",
        line_color=COLORS["fault"],
        row=row, col=col,
    )

    positive = data["power"][data["power"] > 0]
    if len(positive):
        # Annotation y on a log axis is given in log10 units
        fig.add_annotation(
            x=fault_frequency_hz - 12,
            y=float(np.log10(positive.max() * 0.1)),
            text="Bearing Fault<br>Signature",
            showarrow=False,
            font={"size": 10, "color": COLORS["fault"]},
            row=row, col=col,
        )

    fig.update_xaxes(title_text="Frequency (Hz)", row=row, col=col)
    fig.update_yaxes(title_text="Power (log scale)", type="log", row=row, col=col)


def add_health_trend_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int,
    threshold: float = 70.0,
    projected_crossing_day: Optional[float] = None
) -> None:
    """
    Health index trend against the maintenance threshold.

    Args:
        data: Columns day, health_score
        threshold: Maintenance threshold (%)
        projected_crossing_day: Optional day where the fitted trend crosses
            the threshold, marked with a dotted line
    """
    fig.add_trace(go.Scatter(
        x=data["day"],
        y=data["health_score"],
        mode="lines+markers",
        name="Health Score",
        showlegend=False,
        line={"color": COLORS["primary"], "width": 2},
        marker={"color": COLORS["dark"], "size": 6},
        hovertemplate="Day %{x}: <b>%{y:.1f}</b><extra></extra>",
    ), row=row, col=col)

    fig.add_hline(
        y=threshold,
        line_dash="dash",
        line_color=COLORS["fault"],
        row=row, col=col,
    )
    fig.add_annotation(
        x=float(data["day"].max()) * 0.83,
        y=threshold + 4,
        text=f"Maintenance<br>Threshold ({threshold:.0f}%)",
        showarrow=False,
        font={"size": 10, "color": COLORS["fault"]},
        row=row, col=col,
    )

    if projected_crossing_day is not None:
        fig.add_vline(
            x=projected_crossing_day,
            line_dash="dot",
            line_color=COLORS["muted"],
            row=row, col=col,
        )

    fig.update_xaxes(title_text="Day", row=row, col=col)
    fig.update_yaxes(title_text="Health Index", row=row, col=col)


def add_band_power_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Band power over time, one line per band (columns day, band, power)."""
    for band, group in data.groupby("band", sort=False):
        fig.add_trace(go.Scatter(
            x=group["day"],
            y=group["power"],
            mode="lines",
            name=band,
            line={"color": BAND_COLORS.get(band, COLORS["primary"]), "width": 2},
            hovertemplate=f"<b>{band}</b>: %{{y:.1f}}<extra></extra>",
        ), row=row, col=col)

    fig.update_xaxes(title_text="Day", row=row, col=col)
    fig.update_yaxes(title_text="Relative Power", row=row, col=col)


def add_indicator_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """
    Statistical indicators as bars with threshold markers.

    Args:
        data: Columns metric, value, threshold, status
    """
    bar_colors = [
        _rgba(COLORS["primary"], 0.7) if status == "OK" else _rgba(COLORS["fault"], 0.7)
        for status in data["status"]
    ]
    fig.add_trace(go.Bar(
        x=data["metric"],
        y=data["value"],
        name="Value",
        showlegend=False,
        marker_color=bar_colors,
        customdata=data["status"],
        hovertemplate="<b>%{x}</b>: %{y:.2f} (%{customdata})<extra></extra>",
    ), row=row, col=col)

    fig.add_trace(go.Scatter(
        x=data["metric"],
        y=data["threshold"],
        mode="markers",
        name="Threshold",
        showlegend=False,
        marker={"color": COLORS["fault"], "size": 12, "symbol": "diamond"},
        hovertemplate="Threshold: %{y:.2f}<extra></extra>",
    ), row=row, col=col)

    fig.add_hline(y=0, line_color=COLORS["dark"], line_width=1, row=row, col=col)
    fig.update_xaxes(tickangle=-45, row=row, col=col)
    fig.update_yaxes(title_text="Value", row=row, col=col)


def add_actions_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """
    Recommended actions ordered by priority, labelled with days until due.

    Args:
        data: Columns action, priority, days_until
    """
    ordered = data.sort_values("priority", ascending=False)
    labels = [
        f"<b>{int(days)} days</b>" if pd.notna(days) else ""
        for days in ordered["days_until"]
    ]
    fig.add_trace(go.Bar(
        x=ordered["action"],
        y=ordered["priority"],
        name="Priority",
        showlegend=False,
        marker_color=[ACTION_COLORS.get(a, COLORS["primary"]) for a in ordered["action"]],
        text=labels,
        textposition="outside",
        hovertemplate="<b>%{x}</b>: priority %{y}<extra></extra>",
    ), row=row, col=col)

    fig.update_yaxes(title_text="Priority Level", range=[0, 6], row=row, col=col)


# =========================================
# Energy Management Panels
# =========================================

def add_consumption_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Hourly consumption profile per building (columns building, hour, consumption)."""
    palette = px.colors.qualitative.Set1
    for i, (building, group) in enumerate(data.groupby("building", sort=False)):
        color = palette[i % len(palette)]
        fig.add_trace(go.Scatter(
            x=group["hour"],
            y=group["consumption"],
            mode="lines+markers",
            name=building,
            line={"color": color, "width": 2},
            marker={"size": 6},
            hovertemplate=f"<b>{building}</b> %{{x}}h: %{{y:.1f}} kWh<extra></extra>",
        ), row=row, col=col)

    fig.update_xaxes(title_text="Hour of Day", row=row, col=col)
    fig.update_yaxes(title_text="Consumption (kWh)", row=row, col=col)


def add_efficiency_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Efficiency ratings with a dashed target line (columns building, efficiency, target)."""
    fig.add_trace(go.Bar(
        x=data["building"],
        y=data["efficiency"],
        name="Efficiency",
        showlegend=False,
        marker_color=_rgba(COLORS["primary"], 0.7),
        text=[f"<b>{e:.0f}%</b>" for e in data["efficiency"]],
        textposition="outside",
        hovertemplate="<b>%{x}</b>: %{y:.0f}%<extra></extra>",
    ), row=row, col=col)

    target = float(data["target"].iloc[0])
    fig.add_hline(
        y=target,
        line_dash="dash",
        line_color=COLORS["fault"],
        line_width=2,
        annotation_text=f"<b>Target: {target:.0f}%</b>",
        annotation_position="top left",
        annotation_font_color=COLORS["fault"],
        row=row, col=col,
    )
    fig.update_yaxes(title_text="Efficiency (%)", range=[0, 100], row=row, col=col)


def add_cost_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """
    Monthly costs stacked by category (columns building, category, cost).

    Stacking relies on the figure using barmode="stack".
    """
    palette = px.colors.qualitative.Set2
    for i, (category, group) in enumerate(data.groupby("category", sort=False)):
        fig.add_trace(go.Bar(
            x=group["building"],
            y=group["cost"],
            name=category,
            marker_color=palette[i % len(palette)],
            hovertemplate=f"<b>{category}</b>: $%{{y}}k<extra></extra>",
        ), row=row, col=col)

    fig.update_yaxes(title_text="Cost ($1000s)", row=row, col=col)


# =========================================
# Building Management Panels
# =========================================

def add_sensor_map_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int,
    midpoint: float = 25.0
) -> None:
    """
    Sensor grid as a temperature heat map with status markers.

    Args:
        data: Columns sensor_id, x, y, status, temperature
        midpoint: Temperature at the neutral color
    """
    subplot = fig.get_subplot(row, col)
    x_domain = subplot.xaxis.domain
    y_domain = subplot.yaxis.domain

    fig.add_trace(go.Heatmap(
        x=data["x"],
        y=data["y"],
        z=data["temperature"],
        colorscale=TEMPERATURE_COLORSCALE,
        zmid=midpoint,
        xgap=3,
        ygap=3,
        colorbar={
            "title": {"text": "Temp (°C)"},
            "x": x_domain[1] + 0.01,
            "y": (y_domain[0] + y_domain[1]) / 2,
            "len": (y_domain[1] - y_domain[0]),
            "thickness": 10,
        },
        hovertemplate="Temp: %{z:.1f} °C<extra></extra>",
    ), row=row, col=col)

    for status, group in data.groupby("status", sort=False):
        fig.add_trace(go.Scatter(
            x=group["x"],
            y=group["y"],
            mode="markers",
            name=status,
            marker={
                "symbol": STATUS_SYMBOLS.get(status, "circle"),
                "color": "black",
                "size": 10,
                "opacity": 0.7,
            },
            customdata=group["sensor_id"],
            hovertemplate=f"Sensor %{{customdata}}: {status}<extra></extra>",
        ), row=row, col=col)

    _hide_axes(fig, row, col)


def add_kpi_cards_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """
    KPI cards drawn as tiles with a large value and a caption.

    Args:
        data: Columns metric, value, color, x, y
    """
    for _, card in data.iterrows():
        fig.add_shape(
            type="rect",
            x0=card["x"] - 0.48, x1=card["x"] + 0.48,
            y0=card["y"] - 0.45, y1=card["y"] + 0.45,
            line={"color": COLORS["grid"], "width": 2},
            fillcolor="#ffffff",
            row=row, col=col,
        )

    fig.add_trace(go.Scatter(
        x=data["x"],
        y=data["y"] + 0.1,
        mode="text",
        text=[f"<b>{v}</b>" for v in data["value"]],
        textfont={"size": 20, "color": list(data["color"])},
        showlegend=False,
        hoverinfo="skip",
    ), row=row, col=col)

    fig.add_trace(go.Scatter(
        x=data["x"],
        y=data["y"] - 0.2,
        mode="text",
        text=list(data["metric"]),
        textfont={"size": 11, "color": COLORS["muted"]},
        showlegend=False,
        hoverinfo="skip",
    ), row=row, col=col)

    fig.update_xaxes(range=[0.45, 2.55], row=row, col=col)
    fig.update_yaxes(range=[0.45, 2.55], row=row, col=col)
    _hide_axes(fig, row, col)


def add_power_trend_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Hourly power over time with filled area (columns timestamp, power_kw)."""
    fig.add_trace(go.Scatter(
        x=data["timestamp"],
        y=data["power_kw"],
        mode="lines",
        name="Load",
        showlegend=False,
        line={"color": COLORS["primary"], "width": 1},
        fill="tozeroy",
        fillcolor=_rgba(COLORS["primary"], 0.1),
        hovertemplate="<b>%{y:.1f} kW</b><br>%{x}<extra></extra>",
    ), row=row, col=col)

    fig.update_xaxes(tickformat="%a", dtick=24 * 60 * 60 * 1000, row=row, col=col)
    fig.update_yaxes(title_text="Load (kW)", row=row, col=col)


def add_alert_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Daily alert counts with a dashed smoothed trend (columns day, alerts, trend)."""
    fig.add_trace(go.Bar(
        x=data["day"],
        y=data["alerts"],
        name="Alerts",
        showlegend=False,
        width=0.7,
        marker_color=_rgba(COLORS["fault"], 0.8),
        hovertemplate="Day %{x}: <b>%{y}</b> alerts<extra></extra>",
    ), row=row, col=col)

    fig.add_trace(go.Scatter(
        x=data["day"],
        y=data["trend"],
        mode="lines",
        name="Trend",
        showlegend=False,
        line={"color": COLORS["dark"], "width": 1, "dash": "dash"},
        hoverinfo="skip",
    ), row=row, col=col)

    fig.update_xaxes(title_text="Day (Trailing 30 Days)", row=row, col=col)
    fig.update_yaxes(nticks=4, row=row, col=col)


def add_uptime_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int,
    sla: float = 99.0
) -> None:
    """
    Horizontal uptime bars highlighting systems below the SLA.

    Args:
        data: Columns system, uptime, below_sla
        sla: SLA uptime (%)
    """
    colors = [COLORS["caution"] if below else COLORS["healthy"] for below in data["below_sla"]]
    fig.add_trace(go.Bar(
        x=data["uptime"],
        y=data["system"],
        orientation="h",
        name="Uptime",
        showlegend=False,
        marker_color=colors,
        opacity=0.8,
        text=[f"<b>{u}%</b>" for u in data["uptime"]],
        textposition="inside",
        insidetextanchor="end",
        textfont={"color": "white"},
        hovertemplate="<b>%{y}</b>: %{x}%<extra></extra>",
    ), row=row, col=col)

    fig.add_vline(x=sla, line_dash="dash", line_color=COLORS["fault"], row=row, col=col)
    fig.update_xaxes(range=[0, 100], showticklabels=False, row=row, col=col)


def add_drift_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Temperature drift random walk (columns step, drift)."""
    fig.add_trace(go.Scatter(
        x=data["step"],
        y=data["drift"],
        mode="lines",
        name="Drift",
        showlegend=False,
        line={"color": COLORS["purple"], "width": 1.5},
    ), row=row, col=col)
    fig.update_yaxes(title_text="°C", row=row, col=col)


def add_noise_spectrum_panel(
    fig: go.Figure,
    data: pd.DataFrame,
    row: int,
    col: int
) -> None:
    """Magnitude spectrum bars (columns frequency, magnitude)."""
    fig.add_trace(go.Bar(
        x=data["frequency"],
        y=data["magnitude"],
        name="Spectrum",
        showlegend=False,
        marker_color=COLORS["yellow"],
    ), row=row, col=col)
    fig.update_xaxes(title_text="Hz", row=row, col=col)
    fig.update_yaxes(showticklabels=False, row=row, col=col)


def add_asset_health_panel(
    fig: go.Figure,
    value: float,
    row: int,
    col: int
) -> None:
    """Single horizontal bar showing the asset health index (0-100)."""
    fig.add_trace(go.Bar(
        x=[value],
        y=["Health"],
        orientation="h",
        width=0.5,
        name="Asset Health",
        showlegend=False,
        marker_color=COLORS["mint"],
        hovertemplate="<b>%{x:.0f}%</b><extra></extra>",
    ), row=row, col=col)
    fig.update_xaxes(title_text="%", range=[0, 100], row=row, col=col)
    fig.update_yaxes(showticklabels=False, row=row, col=col)


# =========================================
# Standalone Figures
# =========================================

def create_spectrum_chart(
    data: pd.DataFrame,
    title: str = "Spectral Analysis (FFT Power)",
    height: int = 400
) -> go.Figure:
    """
    Single-panel spectrum figure for the Streamlit spectrum explorer.

    Args:
        data: Columns frequency, power, condition
        title: Chart title
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    fig = go.Figure()
    for condition, group in data.groupby("condition", sort=False):
        fig.add_trace(go.Scatter(
            x=group["frequency"],
            y=group["power"],
            mode="lines",
            name=condition,
            line={"color": CONDITION_COLORS.get(condition, COLORS["primary"]), "width": 1.5},
        ))

    layout: Dict[str, Any] = get_default_layout(title, height=height)
    layout["margin"] = {"l": 60, "r": 40, "t": 60, "b": 60}
    layout["legend"]["y"] = -0.2
    fig.update_layout(**layout)
    fig.update_xaxes(title_text="Frequency (Hz)")
    fig.update_yaxes(title_text="Power (log scale)", type="log")
    style_axes(fig)
    return fig
