from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from salary_explorer.core.exceptions import ConfigError
from salary_explorer.core.projector import parse_hex

DEFAULT_COLOR_ANCHORS: Tuple[str, str, str] = ("#e41a1c", "#377eb8", "#4daf4a")


def _scale_extent(raw: Any) -> Tuple[float, float]:
    """[min_k, max_k] with 0 < min_k <= max_k."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ConfigError(f"scale_extent must be a pair [min, max], got {raw!r}")
    try:
        lo, hi = float(raw[0]), float(raw[1])
    except (TypeError, ValueError):
        raise ConfigError(f"scale_extent must hold numbers, got {raw!r}") from None
    if lo <= 0 or hi < lo:
        raise ConfigError(f"Invalid scale_extent: {raw!r}")
    return lo, hi


def _color_anchors(raw: Any) -> Tuple[str, str, str]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise ConfigError("color_anchors must list exactly three colors")
    for color in raw:
        try:
            parse_hex(color)
        except (AttributeError, ValueError):
            raise ConfigError(f"color_anchors: {color!r} is not a #rrggbb color") from None
    return tuple(raw)


@dataclass(frozen=True)
class Margin:
    top: int = 40
    right: int = 40
    bottom: int = 60
    left: int = 80


@dataclass(frozen=True)
class ExplorerConfig:
    """
    Tunables for aggregation, projection and interaction.

    - min_group_count: groups with fewer rows are dropped from the overview
    - top_n: number of groups kept after sorting by mean
    - headroom: multiplier applied to numeric maxima so marks don't touch the top edge
    - nice: round numeric domains outward to human-friendly bounds
    - employment_type: constant filter applied to every working set
    - scale_extent: allowed zoom factors for the scatter view
    - color_anchors: colors at remote ratio 0, 50 and 100
    """

    min_group_count: int = 10
    top_n: int = 15
    headroom: float = 1.05
    nice: bool = True
    employment_type: Optional[str] = "FT"
    scale_extent: Tuple[float, float] = (1.0, 8.0)
    color_anchors: Tuple[str, str, str] = DEFAULT_COLOR_ANCHORS
    band_padding: float = 0.2
    point_padding: float = 0.1
    chart_width: int = 900
    chart_height: int = 420
    margin: Margin = field(default_factory=Margin)

    @property
    def inner_width(self) -> int:
        return self.chart_width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> int:
        return self.chart_height - self.margin.top - self.margin.bottom

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> ExplorerConfig:
        """
        Build from the 'explorer' block of global.json. Unknown keys are rejected
        so typos don't silently fall back to defaults.
        """
        raw = dict(raw or {})
        known = {f for f in cls.__dataclass_fields__}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"Unknown explorer config keys: {unknown}")

        if "margin" in raw:
            raw["margin"] = Margin(**raw["margin"])

        if "scale_extent" in raw:
            raw["scale_extent"] = _scale_extent(raw["scale_extent"])

        if "color_anchors" in raw:
            raw["color_anchors"] = _color_anchors(raw["color_anchors"])

        cfg = cls(**raw)

        if cfg.min_group_count < 1:
            raise ConfigError("min_group_count must be >= 1")
        if cfg.top_n < 1:
            raise ConfigError("top_n must be >= 1")
        if cfg.headroom < 1:
            raise ConfigError("headroom must be >= 1")
        if cfg.inner_width <= 0 or cfg.inner_height <= 0:
            raise ConfigError("chart size must be larger than its margins")

        return cfg


@dataclass
class GlobalConfig:
    ui_title: str
    subtitle: str
    data_path: Path
    explorer: ExplorerConfig = field(default_factory=ExplorerConfig)
    source_path: Optional[Path] = None
