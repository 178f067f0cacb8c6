"""
Engine Module - Synthetic Data Generation

This module provides the synthetic telemetry behind every dashboard.

Key Components:
- SignalSynthesizer: Sum-of-sinusoids plus Gaussian noise signals
- PresetLibrary: Named signal configurations (vibration, building load)
- datasets: pandas DataFrames for every dashboard panel

Usage:
    from engine import SignalConfig, SinusoidTerm, synthesize_signal

    config = SignalConfig(
        sample_rate_hz=1000,
        duration_seconds=1,
        seed=789,
        terms=[SinusoidTerm(amplitude=2.0, frequency_hz=60.0)],
    )
    signal = synthesize_signal(config)
"""

from .synthesizer import (
    SignalConfig,
    SignalSynthesizer,
    SinusoidTerm,
    load_signal_config,
    synthesize_signal,
)
from .presets import (
    PresetLibrary,
    PresetType,
    SignalPreset,
)
from .datasets import (
    generate_building_data,
    generate_energy_data,
    generate_equipment_data,
)

__all__ = [
    # Synthesis
    "SignalConfig",
    "SignalSynthesizer",
    "SinusoidTerm",
    "load_signal_config",
    "synthesize_signal",

    # Presets
    "PresetLibrary",
    "PresetType",
    "SignalPreset",

    # Datasets
    "generate_building_data",
    "generate_energy_data",
    "generate_equipment_data",
]

__version__ = "0.1.0"
