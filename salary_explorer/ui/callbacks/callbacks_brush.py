from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State

from salary_explorer.core.events import BrushEvent
from salary_explorer.ui.callbacks.callbacks_utils import (
    brush_extent,
    error_figure,
    figures_in_order,
    try_parse_explorer_state,
)
from salary_explorer.ui.ids import IDs, graph_id

if TYPE_CHECKING:
    from salary_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_brush_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    view_ids = ctx.registry.ids()
    figure_outputs = [Output(graph_id(v), "figure", allow_duplicate=True) for v in view_ids]
    state_output = Output(IDs.Store.EXPLORER_STATE, "data", allow_duplicate=True)

    for origin_id in ctx.registry.brushable_ids():
        _register_brush(app, ctx, origin_id, view_ids, figure_outputs, state_output)

    # ---------------------------------------------------------
    # Clear selection: back to pass-all, every view re-renders
    # ---------------------------------------------------------
    @app.callback(
        figure_outputs + [state_output],
        Input(IDs.Control.CLEAR_SELECTION_BTN, "n_clicks"),
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def clear_selection(_n_clicks, state_data):
        state = try_parse_explorer_state(state_data)
        try:
            coordinator = ctx.build_coordinator(state)
            rendered = coordinator.on_filter_change(coordinator.selection_filter.clear(), origin=None)
        except Exception:
            logger.exception("Error while clearing selection", extra={"explorer_state": state_data})
            return [error_figure("Could not clear the selection.") for _ in view_ids] + [dash.no_update]

        return figures_in_order(view_ids, rendered, dash.no_update) + [coordinator.snapshot().to_dict()]


def _register_brush(app, ctx, origin_id, view_ids, figure_outputs, state_output) -> None:
    # ---------------------------------------------------------
    # Brush end on origin -> predicate -> dependent views
    # ---------------------------------------------------------
    @app.callback(
        figure_outputs + [state_output],
        Input(graph_id(origin_id), "selectedData"),
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def on_brush_end(selected_data, state_data):
        state = try_parse_explorer_state(state_data)
        event = BrushEvent(view_id=origin_id, extent=brush_extent(selected_data))

        try:
            coordinator = ctx.build_coordinator(state)
            rendered = coordinator.on_brush_end(event)
        except Exception:
            logger.exception(
                "Error in on_brush_end",
                extra={"view_id": origin_id, "extent": event.extent},
            )
            return [
                dash.no_update if v == origin_id else error_figure("The selection could not be applied.")
                for v in view_ids
            ] + [dash.no_update]

        return figures_in_order(view_ids, rendered, dash.no_update) + [coordinator.snapshot().to_dict()]
