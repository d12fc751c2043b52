from __future__ import annotations

__all__ = ["IDs", "graph_id"]


class IDs:
    class Store:
        EXPLORER_STATE = "explorer-state"

    class Control:
        STATUS_BAR = "status-bar"
        HOVER_DETAILS = "hover-details"
        RESET_ZOOM_BTN = "reset-zoom-btn"
        CLEAR_SELECTION_BTN = "clear-selection-btn"


def graph_id(view_id: str) -> str:
    """dcc.Graph id for a registered view."""
    return f"graph-{view_id}"
