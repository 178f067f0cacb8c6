"""
Tests for Signal Synthesis

These tests verify sample counts, the exact sinusoid sum without noise,
seeded determinism, parameter validation and config loading.

Run with: pytest tests/test_synthesizer.py -v
"""

import json
import math

import numpy as np
import pytest

from core.errors import InvalidParameter
from core.signal import Signal
from engine.presets import PresetLibrary, PresetType
from engine.synthesizer import (
    SignalConfig,
    SignalSynthesizer,
    SinusoidTerm,
    load_signal_config,
    synthesize_signal,
)


class TestSignalLength:
    """Signal length is fs * duration."""

    def test_one_second_at_1khz(self):
        config = SignalConfig(sample_rate_hz=1000, duration_seconds=1)
        assert len(synthesize_signal(config)) == 1000

    def test_single_sample_boundary(self):
        """fs=1, duration=1 gives exactly one sample."""
        config = SignalConfig(sample_rate_hz=1, duration_seconds=1)
        assert len(synthesize_signal(config)) == 1

    def test_fractional_duration(self):
        config = SignalConfig(sample_rate_hz=500, duration_seconds=0.5)
        assert len(synthesize_signal(config)) == 250

    def test_signal_keeps_sample_rate(self):
        config = SignalConfig(sample_rate_hz=250, duration_seconds=2)
        signal = synthesize_signal(config)

        assert signal.sample_rate_hz == 250
        assert signal.duration_seconds == pytest.approx(2.0)


class TestNoiseFreeSynthesis:
    """With zero noise the samples are the exact sum of terms."""

    def setup_method(self):
        self.terms = [
            SinusoidTerm(amplitude=2.0, frequency_hz=60.0),
            SinusoidTerm(amplitude=0.5, frequency_hz=120.0, phase_radians=0.3),
            SinusoidTerm(amplitude=1.2, frequency_hz=7.5, phase_radians=-1.0),
        ]
        self.config = SignalConfig(
            sample_rate_hz=1000,
            duration_seconds=1,
            seed=1,
            terms=self.terms,
            noise_std=0.0,
        )

    def test_matches_reference_formula(self):
        signal = synthesize_signal(self.config)

        for i in range(0, 1000, 37):
            t = i / 1000
            expected = sum(
                term.amplitude * math.sin(2 * math.pi * term.frequency_hz * t + term.phase_radians)
                for term in self.terms
            )
            assert signal.samples[i] == pytest.approx(expected, abs=1e-9)

    def test_example_scenario(self):
        """fs=1000, 1 s, 2*sin(60 Hz), no noise."""
        config = SignalConfig(
            sample_rate_hz=1000,
            duration_seconds=1,
            terms=[SinusoidTerm(amplitude=2.0, frequency_hz=60.0)],
        )
        signal = synthesize_signal(config)

        assert len(signal) == 1000
        assert signal.samples[0] == 0.0
        assert signal.samples[250] == pytest.approx(
            2 * math.sin(2 * math.pi * 60 * 0.25), abs=1e-9
        )

    def test_noise_mean_offsets_signal(self):
        config = SignalConfig(
            sample_rate_hz=10,
            duration_seconds=1,
            noise_mean=100.0,
            noise_std=0.0,
        )
        signal = synthesize_signal(config)

        assert np.all(signal.samples == 100.0)

    def test_no_terms_no_noise_is_zero(self):
        signal = synthesize_signal(SignalConfig(sample_rate_hz=10, duration_seconds=1))
        assert np.all(signal.samples == 0.0)


class TestDeterminism:
    """Same seed and config give identical samples."""

    def setup_method(self):
        self.config = PresetLibrary.healthy_vibration(seed=789).config

    def test_same_seed_byte_identical(self):
        first = SignalSynthesizer(self.config).synthesize()
        second = SignalSynthesizer(self.config).synthesize()

        assert first.samples.tobytes() == second.samples.tobytes()

    def test_different_seed_differs(self):
        other = PresetLibrary.healthy_vibration(seed=790).config
        first = synthesize_signal(self.config)
        second = synthesize_signal(other)

        assert first.samples.tobytes() != second.samples.tobytes()

    def test_shared_generator_advances(self):
        """Two draws from one generator differ."""
        rng = np.random.default_rng(5)
        first = synthesize_signal(self.config, rng)
        second = synthesize_signal(self.config, rng)

        assert not np.array_equal(first.samples, second.samples)

    def test_noise_statistics(self):
        config = SignalConfig(
            sample_rate_hz=10000,
            duration_seconds=1,
            seed=3,
            noise_mean=1.0,
            noise_std=0.5,
        )
        samples = synthesize_signal(config).samples

        assert samples.mean() == pytest.approx(1.0, abs=0.05)
        assert samples.std() == pytest.approx(0.5, abs=0.05)


class TestParameterValidation:
    """Bad synthesis parameters raise InvalidParameter."""

    @pytest.mark.parametrize("rate", [0, -1, -1000.0])
    def test_non_positive_sample_rate(self, rate):
        with pytest.raises(InvalidParameter):
            SignalSynthesizer(SignalConfig(sample_rate_hz=rate, duration_seconds=1))

    @pytest.mark.parametrize("duration", [0, -0.5])
    def test_non_positive_duration(self, duration):
        with pytest.raises(InvalidParameter):
            SignalSynthesizer(SignalConfig(sample_rate_hz=100, duration_seconds=duration))

    def test_zero_length(self):
        """A positive rate and duration that round to no samples."""
        with pytest.raises(InvalidParameter):
            synthesize_signal(SignalConfig(sample_rate_hz=1, duration_seconds=0.1))

    def test_negative_noise_std(self):
        with pytest.raises(InvalidParameter):
            synthesize_signal(SignalConfig(noise_std=-0.1))

    def test_non_finite_term(self):
        config = SignalConfig(terms=[SinusoidTerm(amplitude=float("nan"), frequency_hz=5)])
        with pytest.raises(InvalidParameter):
            synthesize_signal(config)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            synthesize_signal(SignalConfig(sample_rate_hz=0))


class TestSignalConfigLoading:
    """Config dicts use the external field names."""

    def setup_method(self):
        self.document = {
            "sampleRateHz": 1000,
            "durationSeconds": 1,
            "seed": 789,
            "terms": [
                {"amplitude": 2, "frequencyHz": 60, "phaseRadians": 0},
                {"amplitude": 0.5, "frequencyHz": 120},
            ],
            "noiseMean": 0,
            "noiseStdDev": 0.2,
        }

    def test_from_dict(self):
        config = SignalConfig.from_dict(self.document)

        assert config.sample_rate_hz == 1000.0
        assert config.duration_seconds == 1.0
        assert config.seed == 789
        assert config.noise_std == 0.2
        assert len(config.terms) == 2
        assert config.terms[1].phase_radians == 0.0

    def test_round_trip(self):
        config = SignalConfig.from_dict(self.document)
        assert SignalConfig.from_dict(config.to_dict()) == config

    def test_matches_preset(self):
        """The document above describes the healthy vibration preset."""
        loaded = synthesize_signal(SignalConfig.from_dict(self.document))
        preset = synthesize_signal(PresetLibrary.healthy_vibration().config)

        assert loaded.samples.tobytes() == preset.samples.tobytes()

    def test_unknown_field_rejected(self):
        self.document["sampleRate"] = 10
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_unknown_term_field_rejected(self):
        self.document["terms"][0]["freq"] = 60
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_missing_term_field_rejected(self):
        self.document["terms"] = [{"amplitude": 1}]
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_invalid_values_rejected(self):
        self.document["sampleRateHz"] = "fast"
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_non_positive_rate_rejected(self):
        self.document["sampleRateHz"] = 0
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "signal.json"
        path.write_text(json.dumps(self.document))

        config = load_signal_config(path)
        assert config.seed == 789

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "signal.json"
        path.write_text("{not json")

        with pytest.raises(InvalidParameter):
            load_signal_config(path)

    def test_load_undecodable_file(self, tmp_path):
        path = tmp_path / "signal.json"
        path.write_bytes(b"\xff\xfe{\"sampleRateHz\": 1000}")

        with pytest.raises(InvalidParameter):
            load_signal_config(path)

    def test_load_directory(self, tmp_path):
        with pytest.raises(InvalidParameter):
            load_signal_config(tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidParameter):
            load_signal_config(tmp_path / "missing.json")

    @pytest.mark.parametrize("seed", [1.5, True, "7", -1])
    def test_seed_must_be_non_negative_integer(self, seed):
        self.document["seed"] = seed
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_null_seed_allowed(self):
        self.document["seed"] = None
        assert SignalConfig.from_dict(self.document).seed is None

    def test_negative_noise_std_rejected(self):
        self.document["noiseStdDev"] = -0.1
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_non_finite_value_rejected(self):
        self.document["terms"][0]["amplitude"] = float("nan")
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_zero_sample_document_rejected(self):
        self.document["sampleRateHz"] = 1
        self.document["durationSeconds"] = 0.2
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)

    def test_non_object_rejected(self):
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict([1000, 1])

    def test_snake_case_names_rejected(self):
        self.document["sample_rate_hz"] = self.document.pop("sampleRateHz")
        with pytest.raises(InvalidParameter):
            SignalConfig.from_dict(self.document)


class TestSignal:
    """Signal container behavior."""

    def test_samples_are_read_only(self):
        signal = Signal(samples=[1.0, 2.0, 3.0], sample_rate_hz=10)
        with pytest.raises(ValueError):
            signal.samples[0] = 5.0

    def test_times(self):
        signal = Signal(samples=np.zeros(4), sample_rate_hz=4)
        assert list(signal.times) == [0.0, 0.25, 0.5, 0.75]

    def test_addition(self):
        a = Signal(samples=[1.0, 2.0], sample_rate_hz=10)
        b = Signal(samples=[0.5, -2.0], sample_rate_hz=10)
        assert list(a + b) == [1.5, 0.0]

    def test_addition_rate_mismatch(self):
        a = Signal(samples=[1.0, 2.0], sample_rate_hz=10)
        b = Signal(samples=[1.0, 2.0], sample_rate_hz=20)
        with pytest.raises(InvalidParameter):
            a + b

    def test_to_frame(self):
        frame = Signal(samples=[0.0, 1.0], sample_rate_hz=1000).to_frame()
        assert list(frame.columns) == ["time_s", "time_ms", "amplitude"]
        assert frame["time_ms"].tolist() == [0.0, 1.0]


class TestPresets:
    """Preset library lookup."""

    def test_all_presets_valid(self):
        for preset in PresetLibrary.get_all_presets():
            preset.config.validate()

    def test_get_preset_with_seed(self):
        preset = PresetLibrary.get_preset(PresetType.HEALTHY_VIBRATION, seed=1)
        assert preset.config.seed == 1

    def test_building_load_is_hourly_day(self):
        config = PresetLibrary.building_energy_load().config
        assert config.num_samples == 24

    def test_weekly_load_length(self):
        assert PresetLibrary.weekly_power_load().config.num_samples == 168
