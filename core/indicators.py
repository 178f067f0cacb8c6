"""
Statistical Indicators for Vibration Signals

Time-domain statistics commonly used in condition monitoring:

- RMS: Overall vibration energy
- Peak: Largest absolute excursion
- Crest Factor: Peak / RMS, rises with impacting (bearing defects)
- Kurtosis: Fourth standardized moment, rises with impulsive content
  (a pure sinusoid sits near 1.5, Gaussian noise near 3.0)

Each indicator is compared against an alarm threshold; values at or
below the threshold are "OK".
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Union, Sequence

import numpy as np

from .errors import InvalidInput
from .signal import Signal

STATUS_OK = "OK"
STATUS_ALERT = "ALERT"


@dataclass
class IndicatorThresholds:
    """Alarm thresholds for each indicator."""
    rms: float = 2.5
    peak: float = 10.0
    crest_factor: float = 4.0
    kurtosis: float = 5.0


@dataclass
class IndicatorValue:
    """A single indicator reading with its threshold and status."""
    metric: str
    value: float
    threshold: float
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "value": self.value,
            "threshold": self.threshold,
            "status": self.status,
        }


@dataclass
class SignalIndicators:
    """
    Indicator set computed from one signal.

    Attributes:
        rms: Root-mean-square amplitude
        peak: Maximum absolute amplitude
        crest_factor: peak / rms (0 for an all-zero signal)
        kurtosis: Pearson kurtosis (0 for a constant signal)
        thresholds: Thresholds the statuses were evaluated against
    """
    rms: float
    peak: float
    crest_factor: float
    kurtosis: float
    thresholds: IndicatorThresholds = field(default_factory=IndicatorThresholds)

    def values(self) -> List[IndicatorValue]:
        """Indicators in display order with status against thresholds."""
        rows = [
            ("RMS", self.rms, self.thresholds.rms),
            ("Peak", self.peak, self.thresholds.peak),
            ("Crest Factor", self.crest_factor, self.thresholds.crest_factor),
            ("Kurtosis", self.kurtosis, self.thresholds.kurtosis),
        ]
        return [
            IndicatorValue(
                metric=name,
                value=value,
                threshold=threshold,
                status=STATUS_OK if value <= threshold else STATUS_ALERT,
            )
            for name, value, threshold in rows
        ]

    @property
    def alerts(self) -> List[str]:
        """Names of indicators above their threshold."""
        return [v.metric for v in self.values() if v.status == STATUS_ALERT]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rms": self.rms,
            "peak": self.peak,
            "crest_factor": self.crest_factor,
            "kurtosis": self.kurtosis,
            "indicators": [v.to_dict() for v in self.values()],
        }


def _to_1d_array(signal: Union[Signal, Sequence[float], np.ndarray]) -> np.ndarray:
    samples = signal.samples if isinstance(signal, Signal) else signal
    arr = np.asarray(samples, dtype=float)
    if arr.ndim != 1:
        raise InvalidInput(f"signal must be 1-D, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidInput("signal must contain at least one sample")
    return arr


def rms(signal) -> float:
    arr = _to_1d_array(signal)
    return float(np.sqrt(np.mean(np.square(arr))))


def peak(signal) -> float:
    arr = _to_1d_array(signal)
    return float(np.max(np.abs(arr)))


def crest_factor(signal) -> float:
    """Peak over RMS; 0.0 for an all-zero signal."""
    signal_rms = rms(signal)
    if signal_rms == 0:
        return 0.0
    return peak(signal) / signal_rms


def kurtosis(signal) -> float:
    """Pearson (non-excess) kurtosis; 0.0 for a constant signal."""
    arr = _to_1d_array(signal)
    centered = arr - arr.mean()
    variance = np.mean(centered ** 2)
    if variance == 0:
        return 0.0
    return float(np.mean(centered ** 4) / variance ** 2)


def compute_indicators(
    signal,
    thresholds: Optional[IndicatorThresholds] = None
) -> SignalIndicators:
    """
    Compute all indicators for a signal.

    Args:
        signal: Signal or 1-D sequence of samples
        thresholds: Alarm thresholds (defaults if None)

    Returns:
        SignalIndicators

    Raises:
        InvalidInput: If the signal is empty
    """
    arr = _to_1d_array(signal)
    return SignalIndicators(
        rms=rms(arr),
        peak=peak(arr),
        crest_factor=crest_factor(arr),
        kurtosis=kurtosis(arr),
        thresholds=thresholds or IndicatorThresholds(),
    )
