"""
Spectral Analysis for Synthetic Vibration Signals

Computes the one-sided power spectrum of a real-valued signal for
display. The transform is numpy's FFT; power is the squared magnitude
of each Fourier coefficient.

Bin Layout:
    For a signal of N samples at sampling rate fs, bins 0 .. N/2 - 1
    are emitted with frequency k * fs / N. The optional frequency cap
    is a plain filter applied after the power computation, not a
    band-pass filter on the signal.

    A single-sample signal still yields its DC bin.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidInput, InvalidParameter
from .signal import Signal

logger = logging.getLogger(__name__)

SignalLike = Union[Signal, Sequence[float], np.ndarray]


@dataclass(frozen=True, eq=False)
class Spectrum:
    """
    Ordered (frequency, power) pairs for non-negative frequencies.

    Attributes:
        frequencies: Bin frequencies in Hz, ascending
        power: Squared magnitude per bin (always >= 0)
    """
    frequencies: np.ndarray
    power: np.ndarray

    def __post_init__(self):
        frequencies = np.array(self.frequencies, dtype=float)
        power = np.array(self.power, dtype=float)
        if frequencies.shape != power.shape:
            raise InvalidInput(
                f"frequencies and power differ in shape: "
                f"{frequencies.shape} vs {power.shape}"
            )
        frequencies.setflags(write=False)
        power.setflags(write=False)
        object.__setattr__(self, "frequencies", frequencies)
        object.__setattr__(self, "power", power)

    def __len__(self) -> int:
        return int(self.power.size)

    def pairs(self) -> Iterator[Tuple[float, float]]:
        """Iterate over (frequency, power) tuples."""
        return zip(self.frequencies.tolist(), self.power.tolist())

    @property
    def total_power(self) -> float:
        return float(self.power.sum())

    def peak_frequency(self) -> float:
        """
        Frequency of the strongest bin.

        Raises:
            InvalidInput: If the spectrum has no bins
        """
        if len(self) == 0:
            raise InvalidInput("Spectrum is empty")
        return float(self.frequencies[int(np.argmax(self.power))])

    def band_power(self, low_hz: float, high_hz: float) -> float:
        """Sum of power for bins with low_hz <= frequency <= high_hz."""
        if low_hz > high_hz:
            raise InvalidParameter(
                f"Band limits reversed: low={low_hz} Hz, high={high_hz} Hz"
            )
        mask = (self.frequencies >= low_hz) & (self.frequencies <= high_hz)
        return float(self.power[mask].sum())

    def nearest_bin(self, frequency_hz: float) -> int:
        """Index of the bin whose frequency is closest to frequency_hz."""
        if len(self) == 0:
            raise InvalidInput("Spectrum is empty")
        return int(np.argmin(np.abs(self.frequencies - frequency_hz)))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "frequency": self.frequencies,
            "power": self.power,
        })


def compute_power_spectrum(
    signal: SignalLike,
    sample_rate_hz: float,
    max_frequency_hz: Optional[float] = None
) -> Spectrum:
    """
    Compute the one-sided power spectrum of a real signal.

    Args:
        signal: Real-valued samples (1-D)
        sample_rate_hz: Sampling rate fs in Hz
        max_frequency_hz: Optional cap; bins above it are dropped

    Returns:
        Spectrum with bins 0 .. N/2 - 1 (up to the cap)

    Raises:
        InvalidParameter: fs <= 0 or negative max_frequency_hz
        InvalidInput: Empty or multi-dimensional signal
    """
    if not sample_rate_hz > 0:
        raise InvalidParameter(f"sample_rate_hz must be > 0, got {sample_rate_hz}")
    if max_frequency_hz is not None and max_frequency_hz < 0:
        raise InvalidParameter(
            f"max_frequency_hz must be >= 0, got {max_frequency_hz}"
        )

    samples = signal.samples if isinstance(signal, Signal) else signal
    arr = np.asarray(samples, dtype=float)
    if arr.ndim != 1:
        raise InvalidInput(f"signal must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInput("signal must contain at least one sample")

    n = arr.size
    n_bins = max(n // 2, 1)

    coefficients = np.fft.fft(arr)[:n_bins]
    power = np.abs(coefficients) ** 2
    frequencies = np.arange(n_bins) * float(sample_rate_hz) / n

    if max_frequency_hz is not None:
        keep = frequencies <= max_frequency_hz
        frequencies = frequencies[keep]
        power = power[keep]

    logger.debug(
        f"Power spectrum: {n} samples at {sample_rate_hz} Hz -> {power.size} bins"
    )
    return Spectrum(frequencies=frequencies, power=power)


class SpectralAnalyzer:
    """
    Reusable spectral analysis settings.

    A Signal carries its own sampling rate and takes precedence; plain
    sequences use the analyzer's sample_rate_hz.

    Example:
        analyzer = SpectralAnalyzer(max_frequency_hz=200)
        spectrum = analyzer.analyze(signal)
        spectrum.peak_frequency()   # -> 60.0
    """

    def __init__(
        self,
        sample_rate_hz: Optional[float] = None,
        max_frequency_hz: Optional[float] = None
    ):
        if sample_rate_hz is not None and not sample_rate_hz > 0:
            raise InvalidParameter(
                f"sample_rate_hz must be > 0, got {sample_rate_hz}"
            )
        if max_frequency_hz is not None and max_frequency_hz < 0:
            raise InvalidParameter(
                f"max_frequency_hz must be >= 0, got {max_frequency_hz}"
            )
        self.sample_rate_hz = sample_rate_hz
        self.max_frequency_hz = max_frequency_hz

    def analyze(self, signal: SignalLike) -> Spectrum:
        if isinstance(signal, Signal):
            rate = signal.sample_rate_hz
        elif self.sample_rate_hz is None:
            raise InvalidParameter(
                "sample_rate_hz is required to analyze a plain sequence"
            )
        else:
            rate = self.sample_rate_hz
        return compute_power_spectrum(signal, rate, self.max_frequency_hz)
