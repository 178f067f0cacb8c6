"""
Dashboard Application

Builds the multi-panel dashboard figures and serves them.

Components:
- layout.py: Dashboard assembly (panel grid, titles, captions)
- components/: Reusable chart and card components
  - charts.py: Plotly panel builders
  - cards.py: Streamlit metric cards
- dashboard.py: Streamlit viewer

Run with: streamlit run app/dashboard.py
"""

__version__ = "0.1.0"
