"""
Signal Synthesizer

Builds fixed-length synthetic signals as a sum of sinusoidal terms plus
additive Gaussian noise:

    x[i] = sum(A * sin(2*pi*f*t_i + phi)) + noise_i,   t_i = i / fs

Features:
- Configurable sinusoid terms (amplitude, frequency, phase)
- Gaussian noise with configurable mean and standard deviation
- Reproducible output from a seed, or from a shared numpy Generator
  so several datasets can draw from one random stream
- Config loading from dicts / JSON using the external field names
  (sampleRateHz, durationSeconds, seed, terms, noiseMean, noiseStdDev)
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any, Union

import numpy as np
from pydantic import ValidationError

from core.errors import InvalidParameter
from core.signal import Signal
from .models import SignalConfigDocument, SinusoidTermDocument

logger = logging.getLogger(__name__)


@dataclass
class SinusoidTerm:
    """One sinusoidal component: amplitude * sin(2*pi*f*t + phase)."""
    amplitude: float
    frequency_hz: float
    phase_radians: float = 0.0

    def evaluate(self, times: np.ndarray) -> np.ndarray:
        return self.amplitude * np.sin(
            2 * np.pi * self.frequency_hz * times + self.phase_radians
        )

    @classmethod
    def from_document(cls, document: SinusoidTermDocument) -> "SinusoidTerm":
        return cls(
            amplitude=document.amplitude,
            frequency_hz=document.frequency_hz,
            phase_radians=document.phase_radians,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "amplitude": self.amplitude,
            "frequencyHz": self.frequency_hz,
            "phaseRadians": self.phase_radians,
        }


@dataclass
class SignalConfig:
    """
    Synthesis parameters for one signal.

    Attributes:
        sample_rate_hz: Sampling rate fs (Hz), must be > 0
        duration_seconds: Signal duration (s), must be > 0
        seed: Seed for the noise generator
        terms: Sinusoidal components
        noise_mean: Mean of the additive Gaussian noise
        noise_std: Standard deviation of the noise (0 disables it)
    """
    sample_rate_hz: float = 1000.0
    duration_seconds: float = 1.0
    seed: Optional[int] = None
    terms: List[SinusoidTerm] = field(default_factory=list)
    noise_mean: float = 0.0
    noise_std: float = 0.0

    @property
    def num_samples(self) -> int:
        """Number of samples, fs * duration rounded to the nearest integer."""
        return int(round(self.sample_rate_hz * self.duration_seconds))

    def validate(self) -> None:
        """
        Check the configuration.

        Raises:
            InvalidParameter: Non-positive rate/duration/length, negative
                noise deviation, or non-finite values
        """
        if not self.sample_rate_hz > 0:
            raise InvalidParameter(
                f"sample_rate_hz must be > 0, got {self.sample_rate_hz}"
            )
        if not self.duration_seconds > 0:
            raise InvalidParameter(
                f"duration_seconds must be > 0, got {self.duration_seconds}"
            )
        if not math.isfinite(self.sample_rate_hz * self.duration_seconds):
            raise InvalidParameter("sample_rate_hz * duration_seconds is not finite")
        if self.num_samples < 1:
            raise InvalidParameter(
                f"{self.sample_rate_hz} Hz for {self.duration_seconds} s "
                f"gives no samples"
            )
        if not (math.isfinite(self.noise_mean) and math.isfinite(self.noise_std)):
            raise InvalidParameter("Noise parameters must be finite")
        if self.noise_std < 0:
            raise InvalidParameter(f"noise_std must be >= 0, got {self.noise_std}")
        for term in self.terms:
            values = (term.amplitude, term.frequency_hz, term.phase_radians)
            if not all(math.isfinite(v) for v in values):
                raise InvalidParameter(f"Sinusoid term has non-finite value: {term}")

    @classmethod
    def from_dict(cls, data: Any) -> "SignalConfig":
        """
        Build a config from the external field names.

        Raises:
            InvalidParameter: Unknown fields or malformed values
        """
        try:
            document = SignalConfigDocument.model_validate(data)
        except ValidationError as e:
            raise InvalidParameter(f"Invalid signal config: {e}") from e

        config = cls(
            sample_rate_hz=document.sample_rate_hz,
            duration_seconds=document.duration_seconds,
            seed=document.seed,
            terms=[SinusoidTerm.from_document(t) for t in document.terms],
            noise_mean=document.noise_mean,
            noise_std=document.noise_std,
        )
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sampleRateHz": self.sample_rate_hz,
            "durationSeconds": self.duration_seconds,
            "seed": self.seed,
            "terms": [t.to_dict() for t in self.terms],
            "noiseMean": self.noise_mean,
            "noiseStdDev": self.noise_std,
        }


def load_signal_config(path: Union[str, Path]) -> SignalConfig:
    """
    Load a SignalConfig from a JSON file.

    Raises:
        InvalidParameter: If the file cannot be read, is not valid JSON,
            or the config is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidParameter(f"Cannot read signal config {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidParameter(f"{path} is not valid JSON: {e}") from e
    logger.info(f"Loaded signal config from {path}")
    return SignalConfig.from_dict(data)


class SignalSynthesizer:
    """
    Generator for synthetic sinusoid-plus-noise signals.

    Example:
        config = SignalConfig(
            sample_rate_hz=1000,
            duration_seconds=1,
            seed=789,
            terms=[SinusoidTerm(2.0, 60.0), SinusoidTerm(0.5, 120.0)],
            noise_std=0.2,
        )
        signal = SignalSynthesizer(config).synthesize()
        len(signal)   # -> 1000
    """

    def __init__(self, config: SignalConfig):
        """
        Initialize the synthesizer.

        Args:
            config: Synthesis parameters (validated immediately)

        Raises:
            InvalidParameter: If the config is invalid
        """
        config.validate()
        self.config = config

    def synthesize(self, rng: Optional[np.random.Generator] = None) -> Signal:
        """
        Produce the signal.

        Args:
            rng: Optional shared generator; when None a fresh generator
                seeded from config.seed is used

        Returns:
            Signal of config.num_samples samples
        """
        config = self.config
        if rng is None:
            rng = np.random.default_rng(config.seed)

        n = config.num_samples
        times = np.arange(n) / config.sample_rate_hz

        samples = np.zeros(n)
        for term in config.terms:
            samples += term.evaluate(times)

        if config.noise_std > 0:
            samples += rng.normal(config.noise_mean, config.noise_std, n)
        else:
            samples += config.noise_mean

        logger.debug(
            f"Synthesized {n} samples at {config.sample_rate_hz} Hz "
            f"({len(config.terms)} terms, noise std {config.noise_std})"
        )
        return Signal(samples=samples, sample_rate_hz=config.sample_rate_hz)


# =========================================
# Convenience Functions
# =========================================

def synthesize_signal(
    config: SignalConfig,
    rng: Optional[np.random.Generator] = None
) -> Signal:
    """Synthesize a signal from a config in one call."""
    return SignalSynthesizer(config).synthesize(rng)
