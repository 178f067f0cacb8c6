"""
Signal Presets

Named signal configurations used by the dashboards. Each preset pairs a
SignalConfig with a short description of what the signal represents.

Vibration presets are sampled in Hz over one second. Building load
presets use hours as the time unit (one sample per hour, frequency in
cycles per hour), so a daily cycle has frequency 1/24.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .synthesizer import SignalConfig, SinusoidTerm


VIBRATION_SAMPLE_RATE_HZ = 1000.0
MOTOR_FREQUENCY_HZ = 60.0
HARMONIC_FREQUENCY_HZ = 120.0
BEARING_FAULT_FREQUENCY_HZ = 85.0


class PresetType(Enum):
    """Available signal presets."""
    HEALTHY_VIBRATION = "healthy_vibration"
    BEARING_FAULT_OVERLAY = "bearing_fault_overlay"
    BUILDING_ENERGY_LOAD = "building_energy_load"
    WEEKLY_POWER_LOAD = "weekly_power_load"


@dataclass
class SignalPreset:
    """
    A named signal configuration.

    Attributes:
        name: Human-readable preset name
        preset_type: Which preset this is
        description: What the signal models
        config: Synthesis parameters
    """
    name: str
    preset_type: PresetType
    description: str
    config: SignalConfig


class PresetLibrary:
    """
    Library of pre-defined signal configurations.

    Usage:
        preset = PresetLibrary.healthy_vibration(seed=789)
        preset = PresetLibrary.get_preset(PresetType.BEARING_FAULT_OVERLAY)
    """

    @staticmethod
    def healthy_vibration(seed: Optional[int] = 789) -> SignalPreset:
        """
        Healthy rotating machine: motor speed plus its 2x harmonic.

        2 * sin(60 Hz) + 0.5 * sin(120 Hz) + N(0, 0.2)
        """
        return SignalPreset(
            name="Healthy Vibration",
            preset_type=PresetType.HEALTHY_VIBRATION,
            description="60 Hz motor speed with 120 Hz harmonic and white noise",
            config=SignalConfig(
                sample_rate_hz=VIBRATION_SAMPLE_RATE_HZ,
                duration_seconds=1.0,
                seed=seed,
                terms=[
                    SinusoidTerm(amplitude=2.0, frequency_hz=MOTOR_FREQUENCY_HZ),
                    SinusoidTerm(amplitude=0.5, frequency_hz=HARMONIC_FREQUENCY_HZ),
                ],
                noise_std=0.2,
            ),
        )

    @staticmethod
    def bearing_fault_overlay(seed: Optional[int] = 789) -> SignalPreset:
        """
        Bearing defect signature added on top of a healthy signal.

        0.6 * sin(85 Hz) + N(0, 0.3)
        """
        return SignalPreset(
            name="Bearing Fault Overlay",
            preset_type=PresetType.BEARING_FAULT_OVERLAY,
            description="85 Hz bearing fault tone with extra broadband noise",
            config=SignalConfig(
                sample_rate_hz=VIBRATION_SAMPLE_RATE_HZ,
                duration_seconds=1.0,
                seed=seed,
                terms=[
                    SinusoidTerm(amplitude=0.6, frequency_hz=BEARING_FAULT_FREQUENCY_HZ),
                ],
                noise_std=0.3,
            ),
        )

    @staticmethod
    def building_energy_load(seed: Optional[int] = 202) -> SignalPreset:
        """
        Hourly building consumption over one day (kWh).

        100 + 50 * sin(2*pi*h/24 + pi/2) + N(0, 10), peaking at midnight.
        """
        return SignalPreset(
            name="Building Energy Load",
            preset_type=PresetType.BUILDING_ENERGY_LOAD,
            description="Daily consumption cycle sampled hourly",
            config=SignalConfig(
                sample_rate_hz=1.0,
                duration_seconds=24.0,
                seed=seed,
                terms=[
                    SinusoidTerm(
                        amplitude=50.0,
                        frequency_hz=1 / 24,
                        phase_radians=math.pi / 2,
                    ),
                ],
                noise_mean=100.0,
                noise_std=10.0,
            ),
        )

    @staticmethod
    def weekly_power_load(seed: Optional[int] = 999) -> SignalPreset:
        """
        Hourly building power draw over seven days (kW).

        100 + 30 * sin(2*pi*(h + 1)/24) + N(0, 10)
        """
        return SignalPreset(
            name="Weekly Power Load",
            preset_type=PresetType.WEEKLY_POWER_LOAD,
            description="Seven daily load cycles sampled hourly",
            config=SignalConfig(
                sample_rate_hz=1.0,
                duration_seconds=7 * 24.0,
                seed=seed,
                terms=[
                    SinusoidTerm(
                        amplitude=30.0,
                        frequency_hz=1 / 24,
                        phase_radians=2 * math.pi / 24,
                    ),
                ],
                noise_mean=100.0,
                noise_std=10.0,
            ),
        )

    @classmethod
    def get_all_presets(cls) -> List[SignalPreset]:
        """Return all available presets."""
        return [
            cls.healthy_vibration(),
            cls.bearing_fault_overlay(),
            cls.building_energy_load(),
            cls.weekly_power_load(),
        ]

    @classmethod
    def get_preset(
        cls,
        preset_type: PresetType,
        seed: Optional[int] = None
    ) -> Optional[SignalPreset]:
        """
        Get a preset by type.

        Args:
            preset_type: The preset to build
            seed: Optional seed override

        Returns:
            SignalPreset or None if the type is not known
        """
        preset_map = {
            PresetType.HEALTHY_VIBRATION: cls.healthy_vibration,
            PresetType.BEARING_FAULT_OVERLAY: cls.bearing_fault_overlay,
            PresetType.BUILDING_ENERGY_LOAD: cls.building_energy_load,
            PresetType.WEEKLY_POWER_LOAD: cls.weekly_power_load,
        }

        factory = preset_map.get(preset_type)
        if factory is None:
            return None

        if seed is not None:
            return factory(seed=seed)
        return factory()

    @classmethod
    def get_preset_names(cls) -> List[str]:
        return [p.name for p in cls.get_all_presets()]
