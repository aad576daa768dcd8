"""Activity chart widget.

Self-contained NiceGUI widget with a sex selector, a Plotly line chart, a
vertical cursor line and a floating tooltip. Uses Plotly dicts only for
ui.plotly (never go.Figure).
"""

from __future__ import annotations

from typing import Callable, Optional

from nicegui import ui
from nicegui.events import GenericEventArguments

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.figure_generator import FigureGenerator
from mouseviz.activity_chart.interaction import HIDDEN, HoverState, PointerHandler
from mouseviz.activity_chart.session import ChartSession
from mouseviz.activity_chart.sex_filter import SEX_FILTER_OPTIONS
from mouseviz.activity_chart.theme import theme_style

logger = get_logger(__name__)

# Pointer position relative to the chart area plus viewport position for the tooltip.
MOUSEMOVE_JS = """(e) => {
    const r = e.currentTarget.getBoundingClientRect();
    emit({x: e.clientX - r.left, y: e.clientY - r.top, clientX: e.clientX, clientY: e.clientY});
}"""

OnFilterChange = Callable[[str], None]


def _safe_call(func: Callable, *args, **kwargs) -> None:
    """Safely call a function, catching 'client deleted' RuntimeErrors only."""
    try:
        func(*args, **kwargs)
    except RuntimeError as e:
        if "deleted" not in str(e).lower():
            raise


def _as_float(value: object) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class ActivityChart:
    """Interactive line chart of mean activity per minute, one line per sex.

    Call render() inside the container the chart should attach to.
    """

    def __init__(
        self,
        session: ChartSession,
        *,
        figure_generator: Optional[FigureGenerator] = None,
        on_filter_change: Optional[OnFilterChange] = None,
    ) -> None:
        self.session = session
        self._figure_generator = figure_generator or FigureGenerator(session.config)
        self._pointer = PointerHandler(session)
        self._on_filter_change = on_filter_change
        self._updating_programmatically = False
        self._hover: HoverState = HIDDEN

        self._filter_select: Optional[ui.select] = None
        self._chart_area: Optional[ui.element] = None
        self._plot: Optional[ui.plotly] = None
        self._cursor: Optional[ui.element] = None
        self._tooltip: Optional[ui.column] = None
        self._tooltip_title: Optional[ui.label] = None
        self._tooltip_body: Optional[ui.label] = None

    @property
    def hover(self) -> HoverState:
        """Last hover state applied to the tooltip and cursor."""
        return self._hover

    def render(self) -> None:
        """Create the selector, chart, cursor and tooltip inside the current container."""
        cfg = self.session.config

        with ui.row().classes("items-center gap-4"):
            self._filter_select = ui.select(
                SEX_FILTER_OPTIONS,
                value=self.session.selection,
                label="Sex",
            ).classes("w-40")
            self._filter_select.on("update:model-value", self._on_filter_select)

        self._chart_area = ui.element("div").style(
            f"position: relative; width: {cfg.width}px; height: {cfg.height}px;"
        )
        self._chart_area.on(
            "mousemove",
            self._on_mousemove,
            js_handler=MOUSEMOVE_JS,
            throttle=cfg.mousemove_throttle,
        )
        self._chart_area.on("mouseleave", self._on_mouseleave)

        with self._chart_area:
            self._plot = ui.plotly(self._figure_generator.make_figure(self.session)).style(
                f"width: {cfg.width}px; height: {cfg.height}px;"
            )
            self._cursor = ui.element("div").style(
                "position: absolute; pointer-events: none; opacity: 0; "
                f"width: {cfg.cursor_width}px; background-color: {cfg.cursor_color}; "
                f"top: {cfg.plot_top}px; height: {cfg.plot_bottom - cfg.plot_top}px; left: 0px;"
            )

        style = theme_style(cfg.theme)
        self._tooltip = (
            ui.column()
            .classes("gap-0 p-2 rounded shadow text-sm")
            .style(
                "position: fixed; pointer-events: none; z-index: 1000; opacity: 0; "
                f"background-color: {style.tooltip_background}; color: {style.tooltip_foreground};"
            )
        )
        with self._tooltip:
            self._tooltip_title = ui.label("").classes("font-bold")
            self._tooltip_body = ui.label("").style("white-space: pre-line;")

        logger.info(
            f"ActivityChart rendered: {cfg.width}x{cfg.height}, selection={self.session.selection!r}, "
            f"series={list(self.session.series)}"
        )

    def set_filter(self, selection: str) -> None:
        """Re-aggregate for selection and redraw (also updates the selector)."""
        _safe_call(self._set_filter_impl, selection)

    def _set_filter_impl(self, selection: str) -> None:
        self.session.apply_filter(selection)
        if self._filter_select is not None and self._filter_select.value != self.session.selection:
            self._updating_programmatically = True
            try:
                self._filter_select.value = self.session.selection
            finally:
                self._updating_programmatically = False
        self._redraw()
        self._apply_hover(HIDDEN)
        if self._on_filter_change is not None:
            self._on_filter_change(self.session.selection)

    def _redraw(self) -> None:
        if self._plot is None:
            return
        self._plot.update_figure(self._figure_generator.make_figure(self.session))

    def _on_filter_select(self, _e: Optional[GenericEventArguments] = None) -> None:
        if self._updating_programmatically or self._filter_select is None:
            return
        self.set_filter(self._filter_select.value)

    def _on_mousemove(self, e: GenericEventArguments) -> None:
        args = e.args if isinstance(e.args, dict) else {}
        x = _as_float(args.get("x"))
        y = _as_float(args.get("y"))
        if x is None or y is None:
            logger.debug(f"mousemove without coordinates: {e.args!r}")
            return
        client_x = _as_float(args.get("clientX")) or 0.0
        client_y = _as_float(args.get("clientY")) or 0.0
        _safe_call(self._apply_hover, self._pointer.on_pointer_move(x, y, client_x, client_y))

    def _on_mouseleave(self, _e: Optional[GenericEventArguments] = None) -> None:
        _safe_call(self._apply_hover, self._pointer.on_pointer_leave())

    def _apply_hover(self, state: HoverState) -> None:
        self._hover = state
        if self._tooltip is None or self._cursor is None:
            return
        if not state.visible or state.tooltip is None:
            self._tooltip.style("opacity: 0;")
            self._cursor.style("opacity: 0;")
            return

        self._cursor.style(f"left: {state.cursor_x}px; opacity: 1;")
        if self._tooltip_title is not None:
            self._tooltip_title.text = state.tooltip.title
        if self._tooltip_body is not None:
            self._tooltip_body.text = "\n".join(state.tooltip.rows())
        self._tooltip.style(
            f"left: {state.tooltip_left}px; top: {state.tooltip_top}px; opacity: 1;"
        )
