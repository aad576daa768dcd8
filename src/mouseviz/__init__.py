"""
mouseviz: interactive line chart of mouse activity, filterable by sex.

This package provides:
- Loader and aggregator for Minute/Activity/Sex/Day CSV files
- ActivityChart: NiceGUI widget with a Plotly line chart and hover tooltip
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from mouseviz.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from mouseviz.utils.logging import configure_logging, get_logger

# NullHandler so logs don't propagate to root when no application has
# configured logging. configure_logging() adds a real handler.
_logger = logging.getLogger("mouseviz")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
