"""
Time-Domain Signal Container

A Signal is an ordered, immutable sequence of real-valued samples taken
at a uniform rate. Sample i sits at time t = i / fs.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import pandas as pd

from .errors import InvalidParameter


@dataclass(frozen=True, eq=False)
class Signal:
    """
    Uniformly sampled real-valued signal.

    Attributes:
        samples: 1-D read-only float array
        sample_rate_hz: Samples per second (fs)
    """
    samples: np.ndarray
    sample_rate_hz: float

    def __post_init__(self):
        if not self.sample_rate_hz > 0:
            raise InvalidParameter(
                f"sample_rate_hz must be > 0, got {self.sample_rate_hz}"
            )
        samples = np.array(self.samples, dtype=float)
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    def __len__(self) -> int:
        return int(self.samples.size)

    def __iter__(self) -> Iterator[float]:
        return iter(self.samples.tolist())

    @property
    def times(self) -> np.ndarray:
        """Sample times in seconds (i / fs)."""
        return np.arange(len(self)) / self.sample_rate_hz

    @property
    def duration_seconds(self) -> float:
        return len(self) / self.sample_rate_hz

    def __add__(self, other: "Signal") -> "Signal":
        """Sample-wise sum of two signals taken at the same rate."""
        if not isinstance(other, Signal):
            return NotImplemented
        if other.sample_rate_hz != self.sample_rate_hz or len(other) != len(self):
            raise InvalidParameter(
                "Signals must share sample rate and length to be combined"
            )
        return Signal(self.samples + other.samples, self.sample_rate_hz)

    def to_frame(self) -> pd.DataFrame:
        """Return the signal as a DataFrame with time_s, time_ms and amplitude."""
        times = self.times
        return pd.DataFrame({
            "time_s": times,
            "time_ms": times * 1000.0,
            "amplitude": self.samples,
        })
