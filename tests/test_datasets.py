"""
Tests for Dashboard Datasets

These tests verify the shape and content of every dashboard dataset and
that each dashboard is reproducible from its seed.

Run with: pytest tests/test_datasets.py -v
"""

from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from engine.datasets import (
    BUILDINGS,
    SENSOR_STATUSES,
    alert_timeline,
    generate_building_data,
    generate_energy_data,
    generate_equipment_data,
    kpi_summary,
    project_threshold_crossing,
    sensor_grid,
    vibration_signals,
)
from engine.synthesizer import SignalConfig, SinusoidTerm


class TestEquipmentData:
    """Predictive maintenance datasets."""

    def setup_method(self):
        self.data = generate_equipment_data()

    def test_signal_lengths(self):
        assert len(self.data.healthy) == 1000
        assert len(self.data.current) == 1000

    def test_vibration_window(self):
        vibration = self.data.vibration

        assert set(vibration["condition"]) == {"healthy", "current"}
        assert vibration["time_ms"].max() == pytest.approx(200.0)
        assert len(vibration) == 2 * 201

    def test_spectrum_limited_to_200hz(self):
        spectrum = self.data.spectrum

        assert spectrum["frequency"].max() <= 200.0
        assert set(spectrum["condition"]) == {"Healthy", "Current"}
        assert (spectrum["power"] >= 0).all()

    def test_fault_signature_in_current_only(self):
        spectrum = self.data.spectrum
        at_85 = spectrum[spectrum["frequency"] == 85.0].set_index("condition")["power"]

        assert at_85["Current"] > 100 * at_85["Healthy"]

    def test_motor_peak_in_both(self):
        spectrum = self.data.spectrum
        for _, group in spectrum.groupby("condition"):
            peak = group.loc[group["power"].idxmax(), "frequency"]
            assert peak == pytest.approx(60.0)

    def test_health_trend(self):
        health = self.data.health

        assert health["day"].tolist() == list(range(1, 31))
        assert health["health_score"].iloc[0] > health["health_score"].iloc[-1]

    def test_projected_crossing_near_day_15(self):
        assert self.data.projected_crossing_day == pytest.approx(15.0, abs=3.0)

    def test_band_power(self):
        bands = self.data.bands
        means = bands.groupby("band")["power"].mean()

        assert len(bands) == 90
        assert means["60 Hz (Motor)"] == pytest.approx(100, abs=5)
        assert means["120 Hz (Harmonic)"] == pytest.approx(25, abs=3)

    def test_indicator_table(self):
        table = self.data.indicator_table

        assert table["metric"].tolist() == ["RMS", "Peak", "Crest Factor", "Kurtosis"]
        assert set(table.columns) == {"metric", "value", "threshold", "status"}

    def test_actions(self):
        actions = self.data.actions

        assert actions["priority"].tolist() == [2, 5, 4]
        assert pd.isna(actions["days_until"].iloc[2])

    def test_reproducible(self):
        again = generate_equipment_data()

        assert again.current.samples.tobytes() == self.data.current.samples.tobytes()
        pd.testing.assert_frame_equal(again.health, self.data.health)
        pd.testing.assert_frame_equal(again.bands, self.data.bands)

    def test_seed_changes_data(self):
        other = generate_equipment_data(seed=1)
        assert other.current.samples.tobytes() != self.data.current.samples.tobytes()

    def test_custom_healthy_config(self):
        config = SignalConfig(
            sample_rate_hz=500,
            duration_seconds=2,
            terms=[SinusoidTerm(amplitude=1.0, frequency_hz=40.0)],
        )
        data = generate_equipment_data(healthy_config=config)

        assert len(data.current) == 1000
        assert data.current.sample_rate_hz == 500

    def test_config_seed_drives_vibration(self):
        def config(seed):
            return SignalConfig(
                seed=seed,
                terms=[SinusoidTerm(amplitude=1.0, frequency_hz=50.0)],
                noise_std=0.5,
            )

        first = generate_equipment_data(healthy_config=config(1))
        second = generate_equipment_data(healthy_config=config(2))
        again = generate_equipment_data(seed=5, healthy_config=config(1))

        assert first.healthy.samples.tobytes() != second.healthy.samples.tobytes()
        assert first.current.samples.tobytes() != second.current.samples.tobytes()
        assert again.healthy.samples.tobytes() == first.healthy.samples.tobytes()

    def test_unseeded_config_uses_dashboard_stream(self):
        config = SignalConfig(
            terms=[SinusoidTerm(amplitude=1.0, frequency_hz=50.0)],
            noise_std=0.5,
        )
        first = generate_equipment_data(seed=1, healthy_config=config)
        second = generate_equipment_data(seed=2, healthy_config=config)

        assert first.healthy.samples.tobytes() != second.healthy.samples.tobytes()


class TestVibrationSignals:
    def test_current_is_healthy_plus_overlay(self):
        rng = np.random.default_rng(0)
        silent = SignalConfig(sample_rate_hz=100, duration_seconds=1)
        healthy, current = vibration_signals(rng, silent, silent)

        assert np.array_equal(healthy.samples, current.samples)


class TestEnergyData:
    """Energy management datasets."""

    def setup_method(self):
        self.data = generate_energy_data()

    def test_consumption_shape(self):
        consumption = self.data.consumption

        assert len(consumption) == 3 * 24
        assert consumption["building"].unique().tolist() == BUILDINGS
        assert consumption["hour"].max() == 23

    def test_consumption_cycle(self):
        """Midnight load is above the midday load for every building."""
        for _, group in self.data.consumption.groupby("building"):
            by_hour = group.set_index("hour")["consumption"]
            assert by_hour[0] > by_hour[12]

    def test_efficiency(self):
        assert self.data.efficiency["efficiency"].tolist() == [85.0, 78.0, 92.0]
        assert (self.data.efficiency["target"] == 80.0).all()

    def test_costs(self):
        costs = self.data.costs

        assert len(costs) == 9
        assert costs.groupby("building")["cost"].sum()["Building B"] == 103

    def test_reproducible(self):
        pd.testing.assert_frame_equal(
            generate_energy_data().consumption, self.data.consumption
        )


class TestBuildingData:
    """Building management datasets."""

    def setup_method(self):
        self.end_time = datetime(2025, 12, 25, 12, 30)
        self.data = generate_building_data(end_time=self.end_time)

    def test_sensor_grid(self):
        sensors = self.data.sensors

        assert len(sensors) == 12
        assert sensors["x"].tolist() == [1, 2, 3, 4] * 3
        assert sensors["y"].tolist() == [1] * 4 + [2] * 4 + [3] * 4
        assert set(sensors["status"]) <= set(SENSOR_STATUSES)

    def test_alerts(self):
        alerts = self.data.alerts

        assert len(alerts) == 30
        assert (alerts["alerts"] >= 0).all()
        assert alerts["trend"].notna().all()

    def test_weekly_power(self):
        power = self.data.power

        assert len(power) == 168
        assert power["timestamp"].iloc[-1] == pd.Timestamp(2025, 12, 25, 12)
        assert (power["timestamp"].diff().dropna() == pd.Timedelta(hours=1)).all()
        assert power["power_kw"].mean() == pytest.approx(100, abs=5)

    def test_uptime_sorted(self):
        uptime = self.data.uptime

        assert uptime["uptime"].is_monotonic_increasing
        assert uptime.loc[uptime["system"] == "Security", "below_sla"].item()

    def test_kpis(self):
        kpis = self.data.kpis.set_index("metric")["value"]

        online = (self.data.sensors["status"] != "Critical").sum()

        assert kpis["Sensors Online"] == f"{online}/12"
        assert kpis["Avg Temp"].endswith("°C")
        assert kpis["Health Score"].endswith("%")

    def test_noise_spectrum(self):
        spectrum = self.data.spectrum

        assert len(spectrum) == 25
        assert (spectrum["magnitude"] >= 0).all()

    def test_drift_is_cumulative(self):
        assert len(self.data.drift) == 50

    def test_reproducible(self):
        again = generate_building_data(end_time=self.end_time)

        pd.testing.assert_frame_equal(again.sensors, self.data.sensors)
        pd.testing.assert_frame_equal(again.power, self.data.power)


class TestHelpers:
    def test_kpi_health_score(self):
        sensors = pd.DataFrame({
            "status": ["Normal", "Normal", "Warning", "Critical"],
            "temperature": [24.0, 25.0, 26.0, 27.0],
        })
        alerts = pd.DataFrame({"alerts": [1, 4]})
        kpis = kpi_summary(sensors, alerts).set_index("metric")["value"]

        assert kpis["Health Score"] == "62%"
        assert kpis["Active Alerts"] == "4"
        assert kpis["Avg Temp"] == "25.5°C"
        assert kpis["Sensors Online"] == "3/4"

    def test_sensor_grid_dimensions(self):
        grid = sensor_grid(np.random.default_rng(0), columns=2, rows=5)
        assert len(grid) == 10

    def test_alert_trend_is_rolling_mean(self):
        alerts = alert_timeline(np.random.default_rng(0), days=10, smoothing_window=3)
        expected = alerts["alerts"].iloc[0:3].mean()

        assert alerts["trend"].iloc[1] == pytest.approx(expected)

    def test_no_crossing_for_improving_trend(self):
        trend = pd.DataFrame({"day": [1, 2, 3], "health_score": [50.0, 60.0, 70.0]})
        assert project_threshold_crossing(trend) is None

    def test_exact_crossing(self):
        trend = pd.DataFrame({"day": [1, 2, 3], "health_score": [98.0, 96.0, 94.0]})
        assert project_threshold_crossing(trend, threshold=70.0) == pytest.approx(15.0)
