from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, exceptions

from salary_explorer.core.events import ZoomEvent
from salary_explorer.ui.callbacks.callbacks_utils import (
    error_figure,
    figures_in_order,
    is_autorange_reset,
    is_resize,
    transform_from_relayout,
    try_parse_explorer_state,
)
from salary_explorer.ui.ids import IDs, graph_id

if TYPE_CHECKING:
    from salary_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_zoom_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    zoomable = ctx.registry.zoomable_ids()
    state_output = Output(IDs.Store.EXPLORER_STATE, "data", allow_duplicate=True)

    for view_id in zoomable:
        _register_zoom(app, ctx, view_id, state_output)

    if not zoomable:
        return

    # ---------------------------------------------------------
    # Reset zoom on every zoomable view
    # ---------------------------------------------------------
    @app.callback(
        [Output(graph_id(v), "figure", allow_duplicate=True) for v in zoomable] + [state_output],
        Input(IDs.Control.RESET_ZOOM_BTN, "n_clicks"),
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def reset_zoom(_n_clicks, state_data):
        return reset_zoom_outputs(ctx, zoomable, state_data)


def reset_zoom_outputs(ctx: AppConfig, zoomable: list[str], state_data) -> list:
    """Figures for every zoomable view back at identity, plus the new explorer state."""
    try:
        coordinator = ctx.build_coordinator(try_parse_explorer_state(state_data))
        rendered = {}
        for view_id in zoomable:
            rendered.update(coordinator.on_zoom_reset(view_id))
    except Exception:
        logger.exception("Error in reset_zoom", extra={"explorer_state": state_data})
        return [error_figure("Zoom could not be reset.") for _ in zoomable] + [dash.no_update]

    return figures_in_order(zoomable, rendered, dash.no_update) + [coordinator.snapshot().to_dict()]


def _register_zoom(app, ctx, view_id, state_output) -> None:
    # ---------------------------------------------------------
    # Zoom/pan: relayout window -> ViewTransform -> this view only
    # ---------------------------------------------------------
    @app.callback(
        Output(graph_id(view_id), "figure", allow_duplicate=True),
        state_output,
        Input(graph_id(view_id), "relayoutData"),
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def on_zoom(relayout, state_data):
        if not relayout or is_resize(relayout):
            raise exceptions.PreventUpdate

        state = try_parse_explorer_state(state_data)
        cfg = ctx.global_config.explorer

        try:
            coordinator = ctx.build_coordinator(state)
            if is_autorange_reset(relayout):
                rendered = coordinator.on_zoom_reset(view_id)
            else:
                transform = transform_from_relayout(
                    relayout,
                    coordinator.transforms.get(view_id),
                    cfg.inner_width,
                    cfg.inner_height,
                    cfg.scale_extent,
                )
                if transform is None:
                    raise exceptions.PreventUpdate
                rendered = coordinator.on_zoom(
                    ZoomEvent(view_id=view_id, k=transform.k, tx=transform.tx, ty=transform.ty)
                )
        except exceptions.PreventUpdate:
            raise
        except Exception:
            logger.exception("Error in on_zoom", extra={"view_id": view_id, "relayout": relayout})
            return error_figure("Zoom could not be applied."), dash.no_update

        return rendered[view_id], coordinator.snapshot().to_dict()
