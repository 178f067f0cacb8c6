"""
Error Types for Signal Synthesis and Analysis

Both error classes subclass ValueError so callers that only care about
"bad value" failures can catch the builtin type.

- InvalidParameter: bad synthesis or analysis configuration
  (non-positive sample rate, duration or length)
- InvalidInput: unusable data handed to an analysis routine
  (empty or multi-dimensional signal)
"""


class TelemetryError(Exception):
    """Base class for all telemetry dashboard errors."""


class InvalidParameter(TelemetryError, ValueError):
    """A configuration value is outside its valid range."""


class InvalidInput(TelemetryError, ValueError):
    """A signal passed to an analysis routine cannot be analyzed."""
