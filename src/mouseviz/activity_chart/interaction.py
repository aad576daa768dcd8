"""Pointer hover handling for the activity chart.

PointerHandler turns pointer coordinates into a HoverState (tooltip text,
tooltip position, cursor line geometry). It has no UI dependency; the widget
applies the HoverState to its elements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.session import ChartSession
from mouseviz.activity_chart.tooltip import TooltipContent, build_tooltip

logger = get_logger(__name__)


@dataclass(frozen=True)
class HoverState:
    """What the tooltip and cursor line should show after a pointer event.

    Attributes:
        visible: False hides both tooltip and cursor.
        minute: Minute under the pointer (x scale inverted), unrounded.
        cursor_x: Cursor line x in chart pixels.
        cursor_y0: Cursor line top in chart pixels.
        cursor_y1: Cursor line bottom in chart pixels.
        tooltip: Tooltip text.
        tooltip_left: Tooltip left edge in viewport pixels.
        tooltip_top: Tooltip top edge in viewport pixels.
    """

    visible: bool
    minute: Optional[float] = None
    cursor_x: Optional[float] = None
    cursor_y0: Optional[float] = None
    cursor_y1: Optional[float] = None
    tooltip: Optional[TooltipContent] = None
    tooltip_left: Optional[float] = None
    tooltip_top: Optional[float] = None


HIDDEN = HoverState(visible=False)


class PointerHandler:
    """Computes hover state against the session's latest aggregation."""

    def __init__(self, session: ChartSession) -> None:
        self.session = session

    def on_pointer_move(self, x: float, y: float, client_x: float, client_y: float) -> HoverState:
        """Handle a pointer move.

        Args:
            x: Pointer x relative to the chart's top-left corner, in pixels.
            y: Pointer y relative to the chart's top-left corner, in pixels.
            client_x: Pointer x in the browser viewport, used to place the tooltip.
            client_y: Pointer y in the browser viewport, used to place the tooltip.

        Returns:
            HIDDEN when the pointer is outside the plot area, otherwise the
            cursor at x and a tooltip with the nearest value per sex.
        """
        session = self.session
        if not session.in_plot_area(x, y):
            return HIDDEN

        minute = float(session.x_scale.invert(x))
        tooltip = build_tooltip(session.series, minute)
        cfg = session.config
        return HoverState(
            visible=True,
            minute=minute,
            cursor_x=float(x),
            cursor_y0=float(cfg.plot_top),
            cursor_y1=float(cfg.plot_bottom),
            tooltip=tooltip,
            tooltip_left=float(client_x) + cfg.tooltip_offset_x,
            tooltip_top=float(client_y) + cfg.tooltip_offset_y,
        )

    def on_pointer_leave(self) -> HoverState:
        return HIDDEN
