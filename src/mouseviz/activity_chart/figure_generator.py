"""Plotly figure generation for the activity chart.

This module provides FigureGenerator, which turns a ChartSession into a
Plotly figure dict for ui.plotly. Every call rebuilds the whole figure from
the session's current series; nothing from a previous figure is reused.
"""

from __future__ import annotations

import plotly.graph_objects as go

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.chart_config import ChartConfig
from mouseviz.activity_chart.session import ChartSession
from mouseviz.activity_chart.sex_filter import format_sex_filter_display
from mouseviz.activity_chart.theme import theme_style

logger = get_logger(__name__)

# ui.plotly reads this key from the figure dict.
PLOTLY_CONFIG = {
    "displayModeBar": False,
    "scrollZoom": False,
    "doubleClick": False,
    "responsive": False,
}


class FigureGenerator:
    """Generates Plotly figure dicts: one line per sex plus axes.

    The figure has a fixed size and margins taken from ChartConfig so that
    Plotly's plot area coincides with the ranges of the session scales.
    Plotly's own hover and drag are disabled; hover is handled by
    PointerHandler.
    """

    def __init__(self, config: ChartConfig) -> None:
        self.config = config

    def make_figure(self, session: ChartSession) -> dict:
        """Build the figure dict for the session's current aggregation."""
        cfg = self.config
        style = theme_style(cfg.theme)

        fig = go.Figure()
        for sex, series in session.series.items():
            fig.add_trace(
                go.Scatter(
                    x=series.minutes.tolist(),
                    y=series.activity.tolist(),
                    mode="lines",
                    name=sex,
                    line=dict(color=cfg.color_for(sex), width=cfg.line_width),
                    hoverinfo="skip",
                )
            )

        x0, x1 = session.x_scale.domain
        y0, y1 = session.y_scale.domain
        fig.update_layout(
            template=style.template,
            paper_bgcolor=style.background,
            plot_bgcolor=style.background,
            font=dict(color=style.foreground),
            width=cfg.width,
            height=cfg.height,
            autosize=False,
            margin=dict(l=cfg.margin.left, r=cfg.margin.right, t=cfg.margin.top, b=cfg.margin.bottom, pad=0),
            title=dict(text=f"Mouse activity ({format_sex_filter_display(session.selection)})", x=0.5),
            xaxis=dict(
                title=cfg.x_title,
                range=[x0, x1],
                ticksuffix=cfg.x_tick_suffix,
                showgrid=False,
                zeroline=False,
                fixedrange=True,
            ),
            yaxis=dict(
                title=cfg.y_title,
                range=[y0, y1],
                showgrid=False,
                zeroline=False,
                fixedrange=True,
            ),
            hovermode=False,
            dragmode=False,
            showlegend=cfg.show_legend,
            legend=dict(orientation="h", x=1.0, xanchor="right", y=1.0, yanchor="bottom"),
        )

        fig_dict = fig.to_dict()
        fig_dict["config"] = dict(PLOTLY_CONFIG)
        logger.debug(f"Figure generated: {len(fig_dict.get('data', []))} traces")
        return fig_dict
