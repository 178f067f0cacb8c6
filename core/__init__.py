"""
Core Module - Signal Analysis

Framework-agnostic building blocks shared by the dataset builders,
the CLI renderer and the Streamlit viewer:
- Signal container (time domain)
- Spectral analysis (FFT power spectrum)
- Statistical indicators (RMS, peak, crest factor, kurtosis)
- Error taxonomy
"""

from .errors import TelemetryError, InvalidParameter, InvalidInput
from .signal import Signal
from .spectral import Spectrum, SpectralAnalyzer, compute_power_spectrum
from .indicators import (
    IndicatorThresholds,
    SignalIndicators,
    compute_indicators,
)

__all__ = [
    # Errors
    "TelemetryError",
    "InvalidParameter",
    "InvalidInput",

    # Signals and spectra
    "Signal",
    "Spectrum",
    "SpectralAnalyzer",
    "compute_power_spectrum",

    # Indicators
    "IndicatorThresholds",
    "SignalIndicators",
    "compute_indicators",
]

__version__ = "0.1.0"
