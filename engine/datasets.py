"""
Dataset Builders for the Dashboards

Every panel of every dashboard is fed by a pandas DataFrame built here.
Each dashboard draws all of its randomness from one numpy Generator
seeded once, so a dashboard is fully reproducible from its seed.

Dashboards:
- Equipment health (seed 789): vibration, spectrum, trends, indicators
- Energy management (seed 202): consumption, efficiency, costs
- Building management (seed 999): sensor grid, alerts, uptime, power, KPIs
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from core.indicators import IndicatorThresholds, SignalIndicators, compute_indicators
from core.signal import Signal
from core.spectral import compute_power_spectrum

from .presets import PresetLibrary
from .synthesizer import SignalConfig, synthesize_signal

logger = logging.getLogger(__name__)


EQUIPMENT_SEED = 789
ENERGY_SEED = 202
BUILDING_SEED = 999

SPECTRUM_MAX_FREQUENCY_HZ = 200.0
TIME_WINDOW_MS = 200.0
HEALTH_THRESHOLD = 70.0

BUILDINGS = ["Building A", "Building B", "Building C"]
SENSOR_STATUSES = ["Normal", "Warning", "Critical"]
SENSOR_STATUS_PROBABILITIES = [0.70, 0.25, 0.05]


# =========================================
# Equipment Health
# =========================================

def vibration_signals(
    rng: np.random.Generator,
    healthy_config: Optional[SignalConfig] = None,
    fault_config: Optional[SignalConfig] = None
) -> Tuple[Signal, Signal]:
    """
    Build the healthy and current vibration signals.

    The current signal is the healthy signal plus a bearing fault overlay
    sampled on the same time grid.

    Args:
        rng: Shared random generator
        healthy_config: Healthy signal config (preset if None)
        fault_config: Fault overlay config (preset if None)

    Returns:
        (healthy, current) signals
    """
    healthy_config = healthy_config or PresetLibrary.healthy_vibration().config
    fault_config = fault_config or PresetLibrary.bearing_fault_overlay().config
    fault_config = replace(
        fault_config,
        sample_rate_hz=healthy_config.sample_rate_hz,
        duration_seconds=healthy_config.duration_seconds,
    )

    healthy = synthesize_signal(healthy_config, rng)
    current = healthy + synthesize_signal(fault_config, rng)
    return healthy, current


def vibration_frame(
    healthy: Signal,
    current: Signal,
    window_ms: float = TIME_WINDOW_MS
) -> pd.DataFrame:
    """
    Long-format time-domain data limited to the first window_ms.

    Columns: time_ms, condition ("healthy" / "current"), amplitude
    """
    frames = []
    for condition, signal in (("healthy", healthy), ("current", current)):
        frames.append(pd.DataFrame({
            "time_ms": signal.times * 1000.0,
            "condition": condition,
            "amplitude": signal.samples,
        }))

    data = pd.concat(frames, ignore_index=True)
    return data[data["time_ms"] <= window_ms].reset_index(drop=True)


def spectrum_frame(
    healthy: Signal,
    current: Signal,
    max_frequency_hz: float = SPECTRUM_MAX_FREQUENCY_HZ
) -> pd.DataFrame:
    """
    Long-format power spectra for both conditions.

    Columns: frequency, power, condition ("Healthy" / "Current")
    """
    frames = []
    for condition, signal in (("Healthy", healthy), ("Current", current)):
        spectrum = compute_power_spectrum(
            signal, signal.sample_rate_hz, max_frequency_hz=max_frequency_hz
        )
        frame = spectrum.to_frame()
        frame["condition"] = condition
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)


def health_trend(rng: np.random.Generator, days: int = 30) -> pd.DataFrame:
    """Health index decaying 2 points per day with N(0, 3) noise."""
    day = np.arange(1, days + 1)
    score = 100 - day * 2 - rng.normal(0, 3, days)
    return pd.DataFrame({"day": day, "health_score": score})


def project_threshold_crossing(
    trend: pd.DataFrame,
    threshold: float = HEALTH_THRESHOLD
) -> Optional[float]:
    """
    Day at which a linear fit of the health trend reaches threshold.

    Returns None when the trend is flat or improving.
    """
    if len(trend) < 2:
        return None
    slope, intercept = np.polyfit(trend["day"], trend["health_score"], 1)
    if slope >= 0:
        return None
    return float((threshold - intercept) / slope)


def band_power_evolution(rng: np.random.Generator, days: int = 30) -> pd.DataFrame:
    """
    Relative power of three monitored frequency bands over time.

    Columns: day, band, power
    """
    day = np.arange(1, days + 1)
    bands = {
        "60 Hz (Motor)": np.full(days, 100.0) + rng.normal(0, 5, days),
        "85 Hz (Fault)": np.linspace(10, 80, days) + rng.normal(0, 8, days),
        "120 Hz (Harmonic)": np.full(days, 25.0) + rng.normal(0, 3, days),
    }
    return pd.DataFrame({
        "day": np.tile(day, len(bands)),
        "band": np.repeat(list(bands.keys()), days),
        "power": np.concatenate(list(bands.values())),
    })


def indicator_frame(indicators: SignalIndicators) -> pd.DataFrame:
    """Columns: metric, value, threshold, status"""
    return pd.DataFrame([v.to_dict() for v in indicators.values()])


def maintenance_actions() -> pd.DataFrame:
    """
    Recommended maintenance actions.

    Columns: action, priority (1-5), days_until (None when immediate)
    """
    return pd.DataFrame({
        "action": ["Monitor", "Schedule Inspection", "Urgent Maintenance"],
        "priority": [2, 5, 4],
        "days_until": [30, 14, None],
    })


@dataclass
class EquipmentData:
    """All datasets behind the equipment health dashboard."""
    healthy: Signal
    current: Signal
    vibration: pd.DataFrame
    spectrum: pd.DataFrame
    health: pd.DataFrame
    bands: pd.DataFrame
    indicators: SignalIndicators
    indicator_table: pd.DataFrame
    actions: pd.DataFrame
    projected_crossing_day: Optional[float]


def generate_equipment_data(
    seed: int = EQUIPMENT_SEED,
    healthy_config: Optional[SignalConfig] = None,
    thresholds: Optional[IndicatorThresholds] = None
) -> EquipmentData:
    """
    Generate every dataset of the equipment health dashboard.

    The vibration pair draws from the dashboard stream unless
    healthy_config carries its own seed, in which case that seed alone
    drives the healthy and current signals.

    Args:
        seed: Seed for the dashboard's random stream
        healthy_config: Optional replacement for the healthy vibration preset
        thresholds: Indicator alarm thresholds

    Returns:
        EquipmentData bundle
    """
    rng = np.random.default_rng(seed)
    vibration_rng = rng
    if healthy_config is not None and healthy_config.seed is not None:
        vibration_rng = np.random.default_rng(healthy_config.seed)

    healthy, current = vibration_signals(vibration_rng, healthy_config)
    health = health_trend(rng)
    bands = band_power_evolution(rng)
    indicators = compute_indicators(current, thresholds)

    logger.debug(
        f"Equipment data: {len(healthy)} samples, indicators {indicators.to_dict()}"
    )
    return EquipmentData(
        healthy=healthy,
        current=current,
        vibration=vibration_frame(healthy, current),
        spectrum=spectrum_frame(healthy, current),
        health=health,
        bands=bands,
        indicators=indicators,
        indicator_table=indicator_frame(indicators),
        actions=maintenance_actions(),
        projected_crossing_day=project_threshold_crossing(health),
    )


# =========================================
# Energy Management
# =========================================

def building_consumption(
    rng: np.random.Generator,
    buildings: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Hourly consumption profile per building.

    Columns: building, hour, consumption
    """
    buildings = buildings or BUILDINGS
    config = PresetLibrary.building_energy_load().config

    frames = []
    for building in buildings:
        signal = synthesize_signal(config, rng)
        frames.append(pd.DataFrame({
            "building": building,
            "hour": np.arange(len(signal)),
            "consumption": signal.samples,
        }))
    return pd.concat(frames, ignore_index=True)


def building_efficiency(target: float = 80.0) -> pd.DataFrame:
    """Columns: building, efficiency, target"""
    return pd.DataFrame({
        "building": BUILDINGS,
        "efficiency": [85.0, 78.0, 92.0],
        "target": target,
    })


def operating_costs() -> pd.DataFrame:
    """Monthly cost per building and category in $1000s."""
    categories = ["Electricity", "HVAC", "Lighting"]
    costs = {
        "Building A": [45, 30, 15],
        "Building B": [50, 35, 18],
        "Building C": [38, 25, 12],
    }
    return pd.DataFrame({
        "building": np.repeat(list(costs.keys()), len(categories)),
        "category": categories * len(costs),
        "cost": np.concatenate(list(costs.values())),
    })


@dataclass
class EnergyData:
    """All datasets behind the energy management dashboard."""
    consumption: pd.DataFrame
    efficiency: pd.DataFrame
    costs: pd.DataFrame


def generate_energy_data(seed: int = ENERGY_SEED) -> EnergyData:
    rng = np.random.default_rng(seed)
    return EnergyData(
        consumption=building_consumption(rng),
        efficiency=building_efficiency(),
        costs=operating_costs(),
    )


# =========================================
# Building Management
# =========================================

def sensor_grid(
    rng: np.random.Generator,
    columns: int = 4,
    rows: int = 3
) -> pd.DataFrame:
    """
    Sensors laid out on a grid with temperature and status.

    Columns: sensor_id, x, y, status, temperature
    """
    count = columns * rows
    return pd.DataFrame({
        "sensor_id": np.arange(1, count + 1),
        "x": np.tile(np.arange(1, columns + 1), rows),
        "y": np.repeat(np.arange(1, rows + 1), columns),
        "status": rng.choice(SENSOR_STATUSES, size=count, p=SENSOR_STATUS_PROBABILITIES),
        "temperature": rng.normal(25, 3, count),
    })


def alert_timeline(
    rng: np.random.Generator,
    days: int = 30,
    rate: float = 2.0,
    smoothing_window: int = 7
) -> pd.DataFrame:
    """
    Daily alert counts (Poisson) with a centred rolling-mean trend.

    Columns: day, alerts, trend
    """
    alerts = rng.poisson(rate, days)
    data = pd.DataFrame({"day": np.arange(1, days + 1), "alerts": alerts})
    data["trend"] = (
        data["alerts"]
        .rolling(window=smoothing_window, center=True, min_periods=1)
        .mean()
    )
    return data


def system_uptime(sla: float = 99.0) -> pd.DataFrame:
    """Columns: system, uptime, below_sla"""
    data = pd.DataFrame({
        "system": ["HVAC", "Lighting", "Security", "Network"],
        "uptime": [99.2, 99.8, 98.5, 99.9],
    })
    data["below_sla"] = data["uptime"] < sla
    return data.sort_values("uptime").reset_index(drop=True)


def weekly_power(
    rng: np.random.Generator,
    end_time: Optional[datetime] = None
) -> pd.DataFrame:
    """
    Hourly power draw over the trailing seven days.

    Columns: timestamp, power_kw
    """
    signal = synthesize_signal(PresetLibrary.weekly_power_load().config, rng)
    end = pd.Timestamp(end_time or datetime.now()).floor("h")
    timestamps = pd.date_range(end=end, periods=len(signal), freq="h")
    return pd.DataFrame({"timestamp": timestamps, "power_kw": signal.samples})


def kpi_summary(sensors: pd.DataFrame, alerts: pd.DataFrame) -> pd.DataFrame:
    """
    Headline KPI cards derived from the sensor grid and alert counts.

    Critical sensors count as offline. Health Score weights Normal
    sensors fully and Warning sensors half.

    Columns: metric, value, color, x, y
    """
    total = len(sensors)
    online = int((sensors["status"] != "Critical").sum())
    normal = int((sensors["status"] == "Normal").sum())
    warning = int((sensors["status"] == "Warning").sum())
    health = 100.0 * (normal + 0.5 * warning) / total if total else 0.0
    active_alerts = int(alerts["alerts"].iloc[-1]) if len(alerts) else 0

    return pd.DataFrame({
        "metric": ["Sensors Online", "Avg Temp", "Active Alerts", "Health Score"],
        "value": [
            f"{online}/{total}",
            f"{sensors['temperature'].mean():.1f}°C",
            str(active_alerts),
            f"{health:.0f}%",
        ],
        "color": ["#27ae60", "#2980b9", "#e74c3c", "#8e44ad"],
        "x": [1, 1, 2, 2],
        "y": [2, 1, 2, 1],
    })


def temperature_drift(rng: np.random.Generator, steps: int = 50) -> pd.DataFrame:
    """Random-walk temperature drift. Columns: step, drift"""
    return pd.DataFrame({
        "step": np.arange(1, steps + 1),
        "drift": np.cumsum(rng.normal(0, 1, steps)),
    })


def noise_spectrum(
    rng: np.random.Generator,
    samples: int = 50,
    sample_rate_hz: float = 50.0
) -> pd.DataFrame:
    """
    Magnitude spectrum of white noise, used as a vibration spectrum mockup.

    Columns: frequency, magnitude
    """
    spectrum = compute_power_spectrum(rng.normal(0, 1, samples), sample_rate_hz)
    return pd.DataFrame({
        "frequency": spectrum.frequencies,
        "magnitude": np.sqrt(spectrum.power),
    })


@dataclass
class BuildingData:
    """All datasets behind the building management dashboard."""
    sensors: pd.DataFrame
    alerts: pd.DataFrame
    uptime: pd.DataFrame
    power: pd.DataFrame
    kpis: pd.DataFrame
    drift: pd.DataFrame
    spectrum: pd.DataFrame
    asset_health: float


def generate_building_data(
    seed: int = BUILDING_SEED,
    end_time: Optional[datetime] = None
) -> BuildingData:
    rng = np.random.default_rng(seed)

    sensors = sensor_grid(rng)
    alerts = alert_timeline(rng)
    power = weekly_power(rng, end_time)
    drift = temperature_drift(rng)
    spectrum = noise_spectrum(rng)

    return BuildingData(
        sensors=sensors,
        alerts=alerts,
        uptime=system_uptime(),
        power=power,
        kpis=kpi_summary(sensors, alerts),
        drift=drift,
        spectrum=spectrum,
        asset_health=75.0,
    )
