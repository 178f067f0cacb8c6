"""
Sensor Telemetry Dashboards - Streamlit Viewer

Interactive viewer for the synthetic telemetry dashboards.

Features:
- Dashboard selection (equipment / energy / building)
- Seed control for reproducible regeneration
- Signal indicator and KPI cards
- Spectrum explorer with adjustable frequency cap

Run with: streamlit run app/dashboard.py
"""

import logging
import os

import streamlit as st

from app.components.cards import render_indicator_card, render_metric_card
from app.components.charts import create_spectrum_chart
from app.layout import (
    DASHBOARDS,
    build_building_dashboard,
    build_energy_dashboard,
    build_equipment_dashboard,
)
from core.errors import TelemetryError
from engine.datasets import (
    BUILDING_SEED,
    ENERGY_SEED,
    EQUIPMENT_SEED,
    generate_building_data,
    generate_energy_data,
    generate_equipment_data,
    spectrum_frame,
)


# =========================================
# Configuration
# =========================================

DEFAULT_DASHBOARD = os.getenv("DEFAULT_DASHBOARD", "equipment")
DEFAULT_SEEDS = {
    "equipment": EQUIPMENT_SEED,
    "energy": ENERGY_SEED,
    "building": BUILDING_SEED,
}

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Sensor Telemetry Dashboards",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)


# =========================================
# Sidebar
# =========================================

def render_sidebar():
    """Render the sidebar with controls."""
    with st.sidebar:
        st.subheader("📊 Dashboard")
        names = list(DASHBOARDS.keys())
        default_index = names.index(DEFAULT_DASHBOARD) if DEFAULT_DASHBOARD in names else 0
        name = st.radio(
            "Select dashboard",
            options=names,
            index=default_index,
            format_func=lambda n: DASHBOARDS[n].title,
            label_visibility="collapsed",
        )

        st.markdown("---")
        st.subheader("🎲 Random Seed")
        seed = st.number_input(
            "Seed",
            min_value=0,
            value=DEFAULT_SEEDS[name],
            step=1,
            key=f"seed_{name}",
        )

        return name, int(seed)


# =========================================
# Pages
# =========================================

def render_equipment_page(seed: int):
    data = generate_equipment_data(seed=seed)

    st.subheader("🔧 Vibration Indicators")
    columns = st.columns(4)
    for column, indicator in zip(columns, data.indicators.values()):
        with column:
            render_indicator_card(indicator)

    st.plotly_chart(build_equipment_dashboard(data), use_container_width=True)

    st.markdown("---")
    st.subheader("🔍 Spectrum Explorer")
    max_frequency = st.slider(
        "Maximum frequency (Hz)",
        min_value=50,
        max_value=int(data.healthy.sample_rate_hz // 2),
        value=200,
        step=10,
    )
    explorer = spectrum_frame(data.healthy, data.current, max_frequency_hz=max_frequency)
    st.plotly_chart(create_spectrum_chart(explorer), use_container_width=True)


def render_energy_page(seed: int):
    data = generate_energy_data(seed=seed)
    st.plotly_chart(build_energy_dashboard(data), use_container_width=True)
    st.dataframe(data.costs.pivot(index="building", columns="category", values="cost"))


def render_building_page(seed: int):
    data = generate_building_data(seed=seed)

    columns = st.columns(len(data.kpis))
    for column, (_, kpi) in zip(columns, data.kpis.iterrows()):
        with column:
            render_metric_card(kpi["metric"], kpi["value"], color=kpi["color"])

    st.plotly_chart(build_building_dashboard(data), use_container_width=True)


PAGES = {
    "equipment": render_equipment_page,
    "energy": render_energy_page,
    "building": render_building_page,
}


# =========================================
# Main Application
# =========================================

def main():
    """Main application entry point."""
    name, seed = render_sidebar()
    st.title(f"📈 {DASHBOARDS[name].title}")

    try:
        PAGES[name](seed)
    except TelemetryError as e:
        logger.error(f"Failed to build {name} dashboard: {e}")
        st.error(f"Could not build dashboard: {e}")


if __name__ == "__main__":
    main()
