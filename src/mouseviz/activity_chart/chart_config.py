"""
Chart display settings and their persistence (platformdirs + JSON).

Persisted items (schema v1):
- chart: ChartConfig dict representation (size, margins, colors, cursor,
  tooltip offsets, theme, ...)

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches -> reset to defaults
- Unknown keys and bad values are ignored with warnings

Only display settings are stored here; activity data is never persisted.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.theme import ThemeMode, resolve_theme

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1

APP_NAME = "mouseviz"
CONFIG_FILENAME = "chart_config.json"


@dataclass(frozen=True)
class Margin:
    """Space in pixels between the figure edge and the plot area."""

    top: int = 40
    right: int = 30
    bottom: int = 50
    left: int = 60


def _default_colors() -> dict[str, str]:
    return {"M": "#1f77b4", "F": "#e377c2"}


@dataclass
class ChartConfig:
    """Display settings for the activity chart.

    The figure has a fixed pixel size so pointer positions on the page map
    directly onto the x/y scales.
    """

    width: int = 1200
    height: int = 600
    margin: Margin = field(default_factory=Margin)
    colors: dict[str, str] = field(default_factory=_default_colors)
    fallback_color: str = "#7f7f7f"
    line_width: float = 2.0
    cursor_color: str = "#333"
    cursor_width: float = 1.0
    tooltip_offset_x: int = 15
    tooltip_offset_y: int = -28
    x_tick_suffix: str = "m"
    x_title: str = "Minute"
    y_title: str = "Activity"
    theme: ThemeMode = ThemeMode.LIGHT
    show_legend: bool = True
    mousemove_throttle: float = 0.03  # seconds between forwarded mousemove events

    def __post_init__(self) -> None:
        if isinstance(self.margin, dict):
            self.margin = Margin(**self.margin)
        self.theme = resolve_theme(self.theme)
        if self.width <= self.margin.left + self.margin.right:
            raise ValueError(f"width={self.width} leaves no room for margins {self.margin}")
        if self.height <= self.margin.top + self.margin.bottom:
            raise ValueError(f"height={self.height} leaves no room for margins {self.margin}")

    @property
    def plot_left(self) -> int:
        return self.margin.left

    @property
    def plot_right(self) -> int:
        return self.width - self.margin.right

    @property
    def plot_top(self) -> int:
        return self.margin.top

    @property
    def plot_bottom(self) -> int:
        return self.height - self.margin.bottom

    def color_for(self, sex: str) -> str:
        return self.colors.get(sex, self.fallback_color)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["theme"] = self.theme.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartConfig":
        """Tolerant constructor: unknown keys and unusable values fall back to defaults."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown key '{key}' in chart config, ignoring")
                continue
            kwargs[key] = value

        margin = kwargs.get("margin")
        if margin is not None:
            try:
                kwargs["margin"] = Margin(**{k: int(v) for k, v in dict(margin).items()})
            except (TypeError, ValueError) as e:
                logger.warning(f"Bad margin {margin!r} in chart config: {e}, using default")
                kwargs.pop("margin")

        colors = kwargs.get("colors")
        if colors is not None and not isinstance(colors, dict):
            logger.warning("colors is not a dict in chart config, using default")
            kwargs.pop("colors")

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid chart config values: {e}, using defaults")
            return cls()


@dataclass
class ChartConfigData:
    """JSON-serializable config payload."""

    schema_version: int = SCHEMA_VERSION
    chart: Dict[str, Any] = field(default_factory=dict)

    def to_json_dict(self) -> Dict[str, Any]:
        return {"schema_version": self.schema_version, "chart": self.chart}

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "ChartConfigData":
        schema_version = int(d.get("schema_version", -1))
        chart = d.get("chart", {})
        if not isinstance(chart, dict):
            logger.warning("chart is not a dict, using empty dict")
            chart = {}
        for key in d.keys():
            if key not in {"schema_version", "chart"}:
                logger.warning(f"Unknown key '{key}' in chart config file, ignoring")
        return cls(schema_version=schema_version, chart=chart)


class ChartConfigStore:
    """
    Manager for loading/saving ChartConfig to disk.
    """

    def __init__(self, *, path: Path, data: Optional[ChartConfigData] = None):
        self.path = path
        self.data = data if data is not None else ChartConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = APP_NAME,
        filename: str = CONFIG_FILENAME,
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/mouseviz/chart_config.json
        Linux:   ~/.config/mouseviz/chart_config.json
        Windows: %APPDATA%\\mouseviz\\chart_config.json
        """
        return Path(user_config_dir(app_name, app_author)) / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        schema_version: int = SCHEMA_VERSION,
    ) -> "ChartConfigStore":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch -> defaults.
        """
        path = config_path or cls.default_config_path()
        default_data = ChartConfigData(schema_version=schema_version)

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug(f"Chart config file not found at {path}, using defaults")
            return cls(path=path, data=default_data)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read chart config at {path}: {e}, using defaults")
            return cls(path=path, data=default_data)
        except json.JSONDecodeError as e:
            logger.warning(f"Chart config file at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)

        if not isinstance(parsed, dict):
            logger.warning(f"Chart config file at {path} does not contain a dict, using defaults")
            return cls(path=path, data=default_data)

        try:
            loaded = ChartConfigData.from_json_dict(parsed)
        except (TypeError, ValueError) as e:
            logger.warning(f"Bad schema_version in chart config at {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

        if loaded.schema_version != schema_version:
            logger.warning(
                f"Chart config schema version mismatch: loaded={loaded.schema_version}, "
                f"expected={schema_version}, resetting to defaults"
            )
            return cls(path=path, data=default_data)

        return cls(path=path, data=loaded)

    def save(self) -> None:
        """Write config to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data.to_json_dict(), indent=2), encoding="utf-8")
            logger.info(f"Saved chart config to {self.path}")
        except OSError as e:
            logger.error(f"Error saving chart config to {self.path}: {e}")
            raise

    def get_chart_config(self) -> ChartConfig:
        return ChartConfig.from_dict(self.data.chart)

    def set_chart_config(self, config: ChartConfig) -> None:
        self.data.chart = config.to_dict()
