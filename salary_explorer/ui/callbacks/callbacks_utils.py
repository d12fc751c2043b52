from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import plotly.graph_objs as go

from salary_explorer.core.explorer_state import ExplorerState
from salary_explorer.core.transform import DEFAULT_SCALE_EXTENT, ViewTransform

logger = logging.getLogger(__name__)


def try_parse_explorer_state(data: object) -> ExplorerState:
    """
    Parse the explorer-state store. Missing or corrupt data falls back to the
    initial state (nothing brushed, no zoom).
    """
    if not isinstance(data, dict) or not data:
        return ExplorerState()
    try:
        return ExplorerState.from_dict(data)
    except Exception:
        logger.exception("Invalid explorer-state: %r", data)
        return ExplorerState()


# -----------------------------------------------------------------------------
# Plotly event payloads -> core events
# -----------------------------------------------------------------------------
def brush_extent(selected_data: Optional[dict]) -> Optional[Tuple[float, float]]:
    """
    Pixel extent of a box selection, or None when the selection was cleared
    (or was not a box).
    """
    if not selected_data:
        return None
    x_range = (selected_data.get("range") or {}).get("x")
    if not x_range or len(x_range) != 2:
        return None
    x0, x1 = sorted(float(v) for v in x_range)
    return x0, x1


def _axis_range(relayout: dict, axis: str) -> Optional[Tuple[float, float]]:
    if f"{axis}.range[0]" in relayout and f"{axis}.range[1]" in relayout:
        return float(relayout[f"{axis}.range[0]"]), float(relayout[f"{axis}.range[1]"])
    full = relayout.get(f"{axis}.range")
    if isinstance(full, (list, tuple)) and len(full) == 2:
        return float(full[0]), float(full[1])
    return None


def is_autorange_reset(relayout: Optional[dict]) -> bool:
    if not relayout:
        return False
    return bool(relayout.get("xaxis.autorange") or relayout.get("yaxis.autorange"))


def is_resize(relayout: Optional[dict]) -> bool:
    return bool(relayout) and bool(relayout.get("autosize"))


def transform_from_relayout(
    relayout: Optional[dict],
    current: ViewTransform,
    width: float,
    height: float,
    scale_extent: Tuple[float, float] = DEFAULT_SCALE_EXTENT,
) -> Optional[ViewTransform]:
    """
    Convert a Plotly zoom/pan (new visible axis window, in the pixels currently
    on screen) into the next ViewTransform.

    The window [x0, x1] x [y_top, y_top + span] is stretched back over the
    full chart, i.e. new = s * shown - s * window_start with a single scale s
    for both axes. When current.k * s falls outside scale_extent, s is clamped
    first and the window is re-centred on the requested one, so the point
    under the gesture stays put. Returns None when relayout carries no axis
    window.
    """
    if not relayout:
        return None

    x_range = _axis_range(relayout, "xaxis")
    y_range = _axis_range(relayout, "yaxis")
    if x_range is None and y_range is None:
        return None

    if x_range is not None:
        x0, x1 = sorted(x_range)
        span = x1 - x0
        s = width / span if span > 0 else 1.0
    else:
        x0 = 0.0

    if y_range is not None:
        y_top, y_bottom = sorted(y_range)
        if x_range is None:
            span = y_bottom - y_top
            s = height / span if span > 0 else 1.0
    else:
        y_top = 0.0

    lo, hi = scale_extent
    k = min(hi, max(lo, current.k * s))
    if k != current.k * s:
        clamped_s = k / current.k
        if x_range is not None:
            x0 = (x_range[0] + x_range[1]) / 2 - width / (2 * clamped_s)
        if y_range is not None:
            y_top = (y_range[0] + y_range[1]) / 2 - height / (2 * clamped_s)
        s = clamped_s

    return ViewTransform(
        k=k,
        tx=s * current.tx - s * x0,
        ty=s * current.ty - s * y_top,
    )


def hovered_row_index(hover_data: Optional[dict]) -> Optional[int]:
    if not hover_data:
        return None
    points = hover_data.get("points") or []
    if not points:
        return None
    custom = points[0].get("customdata")
    if isinstance(custom, (list, tuple)):
        custom = custom[0] if custom else None
    if custom is None:
        return None
    try:
        return int(custom)
    except (TypeError, ValueError):
        return None


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def error_figure(details: str) -> go.Figure:
    return message_figure("Something went wrong while rendering this view.", details)


def figures_in_order(view_ids: list[str], rendered: dict[str, Any], no_update: Any) -> list[Any]:
    """Map rendered outputs onto callback outputs; views not re-rendered keep their figure."""
    return [rendered.get(view_id, no_update) for view_id in view_ids]
