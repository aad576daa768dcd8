"""Chart session: the state shared by the renderer and the pointer handler.

One ChartSession is built per page. The records and the x scale are fixed
for its lifetime; the aggregation, per-sex series and y scale are replaced
together each time the sex filter changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.aggregator import ActivityAggregator, SexSeries, empty_aggregation, series_by_sex
from mouseviz.activity_chart.chart_config import ChartConfig
from mouseviz.activity_chart.scales import LinearScale, domain_or_fallback, extent
from mouseviz.activity_chart.sex_filter import SEX_FILTER_ALL, normalize_sex_filter

logger = get_logger(__name__)


@dataclass
class ChartSession:
    """Records, scales and the current aggregation for one chart."""

    config: ChartConfig
    aggregator: ActivityAggregator
    x_scale: LinearScale
    y_scale: LinearScale
    selection: str = SEX_FILTER_ALL
    aggregated: pd.DataFrame = field(default_factory=empty_aggregation)
    series: dict[str, SexSeries] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        records: pd.DataFrame,
        config: Optional[ChartConfig] = None,
        *,
        selection: str = SEX_FILTER_ALL,
    ) -> "ChartSession":
        """Build a session and aggregate for the initial selection."""
        config = config if config is not None else ChartConfig()
        aggregator = ActivityAggregator(records)

        x_domain = domain_or_fallback(extent(records["minute"]), what="minute")
        session = cls(
            config=config,
            aggregator=aggregator,
            x_scale=LinearScale(domain=x_domain, range=(config.plot_left, config.plot_right)),
            y_scale=LinearScale(domain=(0.0, 1.0), range=(config.plot_bottom, config.plot_top)),
        )
        session.apply_filter(selection)
        return session

    @property
    def records(self) -> pd.DataFrame:
        return self.aggregator.df

    def apply_filter(self, selection: str) -> pd.DataFrame:
        """Re-aggregate for selection and update the y scale.

        Returns:
            The new aggregated frame (also stored on the session).
        """
        selection = normalize_sex_filter(selection)
        aggregated = self.aggregator.aggregate(selection)

        y_max = extent(aggregated["activity"])
        y_domain = domain_or_fallback(
            None if y_max is None else (0.0, y_max[1]),
            what="activity",
        )

        self.selection = selection
        self.aggregated = aggregated
        self.series = series_by_sex(aggregated)
        self.y_scale = self.y_scale.with_domain(y_domain)
        logger.info(
            f"apply_filter: selection={selection!r}, points={len(aggregated)}, "
            f"series={list(self.series)}, y_domain={y_domain}"
        )
        return aggregated

    def in_plot_area(self, x: float, y: float) -> bool:
        """True if pixel (x, y) lies inside the plot area."""
        return self.x_scale.contains_pixel(x) and self.y_scale.contains_pixel(y)
