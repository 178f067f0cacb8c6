"""
Test Suite for Sensor Telemetry Dashboards

This module contains tests for:
- Signal synthesis and config loading (test_synthesizer.py)
- Spectral analysis (test_spectral.py)
- Signal indicators (test_indicators.py)
- Dashboard datasets (test_datasets.py)
- Dashboard composition and export (test_layout.py, test_render.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=engine --cov=app
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
