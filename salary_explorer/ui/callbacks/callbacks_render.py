from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, exceptions, html

from salary_explorer.ui.callbacks.callbacks_utils import (
    error_figure,
    figures_in_order,
    is_resize,
    try_parse_explorer_state,
)
from salary_explorer.ui.ids import IDs, graph_id

if TYPE_CHECKING:
    from salary_explorer.core.coordinator import ViewCoordinator
    from salary_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def filter_message(coordinator: ViewCoordinator) -> str:
    """'N jobs', or 'N jobs for K job title(s)' while a selection is active."""
    n_jobs = len(coordinator.working_set)
    allowed = coordinator.predicate.allowed
    if allowed:
        return f"{n_jobs} jobs for {len(allowed)} job title(s)"
    return f"{n_jobs} jobs"


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    view_ids = ctx.registry.ids()

    # ---------------------------------------------------------
    # Resize: full re-render of every view, predicate untouched
    # ---------------------------------------------------------
    @app.callback(
        [Output(graph_id(v), "figure", allow_duplicate=True) for v in view_ids],
        [Input(graph_id(v), "relayoutData") for v in view_ids],
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def on_resize(*args):
        *relayouts, state_data = args
        if not any(is_resize(r) for r in relayouts):
            raise exceptions.PreventUpdate

        try:
            coordinator = ctx.build_coordinator(try_parse_explorer_state(state_data))
            rendered = coordinator.on_resize()
        except Exception:
            logger.exception("Error in on_resize", extra={"explorer_state": state_data})
            return [error_figure("The charts could not be redrawn.") for _ in view_ids]

        return figures_in_order(view_ids, rendered, dash.no_update)

    # ---------------------------------------------------------
    # Status Bar (Pure UI reflection of State)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(IDs.Store.EXPLORER_STATE, "data"),
    )
    def update_status_bar(state_data):
        state = try_parse_explorer_state(state_data)
        try:
            coordinator = ctx.build_coordinator(state)
        except Exception:
            logger.exception("Error building status bar", extra={"explorer_state": state_data})
            return html.Span([html.Strong("Status: "), "Error parsing state"])

        allowed = state.predicate.allowed
        if allowed:
            titles = sorted(allowed)
            title_label = ", ".join(titles[:3]) + (f" (+{len(titles) - 3})" if len(titles) > 3 else "")
        else:
            title_label = "All"

        zoomed = [v for v, t in state.transforms.items() if not t.is_identity]

        return html.Span(
            [
                html.Strong("Dataset: "), ctx.dataset.name, " • ",
                html.Strong("Job titles: "), title_label, " • ",
                html.Strong("Showing: "), filter_message(coordinator),
                *([" • ", html.Strong("Zoomed: "), ", ".join(zoomed)] if zoomed else []),
            ]
        )
