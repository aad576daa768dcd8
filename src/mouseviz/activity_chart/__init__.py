"""Interactive mouse-activity line chart with NiceGUI and Plotly."""

from mouseviz.activity_chart.activity_chart import ActivityChart
from mouseviz.activity_chart.chart_config import ChartConfig, ChartConfigStore
from mouseviz.activity_chart.loader import ActivityDataError, InvalidRowPolicy, load_activity_csv
from mouseviz.activity_chart.session import ChartSession

__all__ = [
    "ActivityChart",
    "ActivityDataError",
    "ChartConfig",
    "ChartConfigStore",
    "ChartSession",
    "InvalidRowPolicy",
    "load_activity_csv",
]
