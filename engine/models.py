"""
Pydantic Models for Signal Config Documents

Validates signal configs supplied as JSON (CLI --signal-config files and
plain dicts) using the external camelCase field names:

    {
        "sampleRateHz": 1000,
        "durationSeconds": 1,
        "seed": 789,
        "terms": [{"amplitude": 2, "frequencyHz": 60, "phaseRadians": 0}],
        "noiseMean": 0,
        "noiseStdDev": 0.2
    }

Unknown fields are rejected. Synthesis itself works on the
SignalConfig dataclass; these models only guard the boundary.
"""

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


class SinusoidTermDocument(BaseModel):
    """One sinusoid term as written in a config document."""
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    amplitude: float = Field(..., description="Peak amplitude")
    frequency_hz: float = Field(..., alias="frequencyHz", description="Frequency in Hz")
    phase_radians: float = Field(
        default=0.0,
        alias="phaseRadians",
        description="Phase offset in radians"
    )


class SignalConfigDocument(BaseModel):
    """Signal config document with the recognized external field names."""
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    sample_rate_hz: float = Field(
        default=1000.0,
        alias="sampleRateHz",
        gt=0,
        description="Sampling rate fs in Hz"
    )
    duration_seconds: float = Field(
        default=1.0,
        alias="durationSeconds",
        gt=0,
        description="Signal duration in seconds"
    )
    seed: Optional[StrictInt] = Field(
        default=None,
        ge=0,
        description="Seed for the noise generator"
    )
    terms: List[SinusoidTermDocument] = Field(default_factory=list)
    noise_mean: float = Field(default=0.0, alias="noiseMean")
    noise_std: float = Field(default=0.0, alias="noiseStdDev", ge=0)

    @model_validator(mode="after")
    def check_sample_count(self) -> "SignalConfigDocument":
        """Rate and duration must give at least one sample."""
        product = self.sample_rate_hz * self.duration_seconds
        if not math.isfinite(product):
            raise ValueError("sampleRateHz * durationSeconds is not finite")
        if round(product) < 1:
            raise ValueError(
                f"{self.sample_rate_hz} Hz for {self.duration_seconds} s "
                f"gives no samples"
            )
        return self
