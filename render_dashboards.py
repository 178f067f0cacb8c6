"""
Sensor Telemetry Dashboards - Static Export

Builds the dashboards and writes each one as a standalone HTML file.

Usage:
    python render_dashboards.py                       # all dashboards
    python render_dashboards.py --dashboard equipment --seed 42
    python render_dashboards.py --signal-config vibration.json

Environment:
    LOG_LEVEL: Logging level (default INFO)
    DASHBOARD_OUTPUT_DIR: Output directory (default "output")
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from app.layout import build_dashboard, get_dashboard_names
from core.errors import TelemetryError
from engine.synthesizer import load_signal_config

logger = logging.getLogger(__name__)

OUTPUT_DIR = os.getenv("DASHBOARD_OUTPUT_DIR", "output")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render synthetic telemetry dashboards to HTML"
    )
    parser.add_argument(
        "--dashboard",
        choices=get_dashboard_names() + ["all"],
        default="all",
        help="Dashboard to render (default: all)",
    )
    parser.add_argument(
        "--output-dir",
        default=OUTPUT_DIR,
        help=f"Directory for the HTML files (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the dashboard's random seed",
    )
    parser.add_argument(
        "--signal-config",
        type=Path,
        default=None,
        help="JSON signal config replacing the healthy vibration signal",
    )
    return parser.parse_args(argv)


def render(
    names: List[str],
    output_dir: Path,
    seed: Optional[int] = None,
    signal_config_path: Optional[Path] = None
) -> List[Path]:
    """
    Build the named dashboards and write them as HTML.

    Returns:
        Paths of the written files
    """
    signal_config = load_signal_config(signal_config_path) if signal_config_path else None
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name in names:
        kwargs = {"seed": seed}
        if name == "equipment":
            kwargs["signal_config"] = signal_config
        fig = build_dashboard(name, **kwargs)

        path = output_dir / f"{name}.html"
        fig.write_html(str(path), include_plotlyjs="cdn")
        logger.info(f"Wrote {name} dashboard to {path}")
        written.append(path)

    return written


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    args = parse_args(argv)
    names = get_dashboard_names() if args.dashboard == "all" else [args.dashboard]

    try:
        render(names, Path(args.output_dir), args.seed, args.signal_config)
    except TelemetryError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
