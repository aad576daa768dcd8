"""Command-line entry point: load a CSV and serve the activity chart page."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from nicegui import ui

from mouseviz.utils.gui_defaults import setUpGuiDefaults
from mouseviz.utils.logging import configure_logging, get_logger
from mouseviz.activity_chart.activity_chart import ActivityChart
from mouseviz.activity_chart.chart_config import ChartConfig, ChartConfigStore
from mouseviz.activity_chart.loader import (
    DEFAULT_DATA_PATH,
    ActivityDataError,
    InvalidRowPolicy,
    load_activity_csv,
)
from mouseviz.activity_chart.session import ChartSession
from mouseviz.activity_chart.theme import ThemeMode

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="mouseviz",
        description="Interactive line chart of mouse activity by minute, filterable by sex.",
    )
    parser.add_argument(
        "csv",
        nargs="?",
        default=str(DEFAULT_DATA_PATH),
        help=f"CSV with Minute, Activity, Sex, Day columns (default: {DEFAULT_DATA_PATH}).",
    )
    parser.add_argument(
        "--invalid-rows",
        choices=[p.value for p in InvalidRowPolicy],
        default=InvalidRowPolicy.KEEP.value,
        help="What to do with rows that are not numeric or have an unknown sex (default: keep).",
    )
    parser.add_argument(
        "--theme",
        choices=[t.value for t in ThemeMode],
        default=None,
        help="Chart theme (default: from saved config).",
    )
    parser.add_argument("--config", default=None, help="Chart config JSON path (default: user config dir).")
    parser.add_argument("--save-config", action="store_true", help="Write the effective chart config and continue.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--native", action="store_true", help="Open in a native window.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: MOUSEVIZ_LOG_LEVEL or INFO).")
    return parser.parse_args(argv)


def load_config(ns: argparse.Namespace) -> ChartConfig:
    """Chart config from disk, with command-line overrides applied."""
    store = ChartConfigStore.load(config_path=Path(ns.config).expanduser() if ns.config else None)
    config = store.get_chart_config()
    if ns.theme is not None:
        config.theme = ThemeMode(ns.theme)
    if ns.save_config:
        store.set_chart_config(config)
        store.save()
    return config


def build_page(session: ChartSession) -> ActivityChart:
    """Lay out the page and render the chart into it."""
    setUpGuiDefaults("text-sm")
    ui.page_title("Mouse activity")
    with ui.column().classes("w-full gap-4 p-4"):
        ui.label("Mouse activity by minute").classes("text-2xl font-bold")
        chart = ActivityChart(session)
        chart.render()
    return chart


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the app.

    Returns:
        Exit code (1 when the data cannot be loaded).
    """
    ns = parse_args(argv)
    configure_logging(level=ns.log_level)

    config = load_config(ns)
    try:
        records = load_activity_csv(ns.csv, invalid_rows=ns.invalid_rows)
    except (FileNotFoundError, ActivityDataError) as e:
        logger.error(f"Could not load activity data from {ns.csv}: {e}")
        return 1

    session = ChartSession.create(records, config)
    build_page(session)

    ui.run(
        host=ns.host,
        port=ns.port,
        native=ns.native,
        reload=False,
        title="Mouse activity",
        window_size=(config.width + 80, config.height + 200) if ns.native else None,
    )
    return 0
