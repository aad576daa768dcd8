"""Set up default classes and props for NiceGUI widgets used by the chart page."""

from __future__ import annotations

from nicegui import ui

from mouseviz.utils.logging import get_logger

logger = get_logger(__name__)

# tailwind text size -> quasar size
TEXT_SIZES = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = "text-base") -> None:
    """Set up default classes and props for the ui elements on the page.

    Args:
        text_size: Tailwind CSS text size class ('text-xs', 'text-sm',
                   'text-base' or 'text-lg'). Defaults to 'text-base'.

    Raises:
        ValueError: If text_size is not one of the supported classes.
    """
    if text_size not in TEXT_SIZES:
        raise ValueError(f"Unsupported text_size {text_size!r}, expected one of {sorted(TEXT_SIZES)}")
    text_size_quasar = TEXT_SIZES[text_size]

    logger.debug(f'using classes text_size:"{text_size}" text_size_quasar:{text_size_quasar}')

    ui.label.default_classes(f"{text_size} select-text")
    ui.label.default_props("dense")
    #
    ui.select.default_classes(text_size)
    ui.select.default_props("dense")
    #
    ui.button.default_classes(text_size)
    ui.button.default_props("dense")
