from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, html

from salary_explorer.core.events import HoverEvent
from salary_explorer.ui.callbacks.callbacks_utils import hovered_row_index, try_parse_explorer_state
from salary_explorer.ui.ids import IDs, graph_id
from salary_explorer.views.formatting import row_details

if TYPE_CHECKING:
    from salary_explorer.ui.config import AppConfig

logger = logging.getLogger(__name__)

HOVER_HINT = "Hover over a line to see details"


def hover_panel(event: HoverEvent | None):
    """Details panel for a hovered job; the hint text on hover-exit."""
    if event is None:
        return html.Small(HOVER_HINT, className="text-muted")

    row = event.row
    return html.Div(
        [
            html.Strong(row.job_title),
            html.Ul(
                [html.Li([f"{label}: ", value]) for label, value in row_details(row)],
                className="mb-0 ps-3",
            ),
        ]
    )


def register_hover_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    hoverable = ctx.registry.hoverable_ids()
    if not hoverable:
        return

    @app.callback(
        Output(IDs.Control.HOVER_DETAILS, "children"),
        [Input(graph_id(v), "hoverData") for v in hoverable],
        State(IDs.Store.EXPLORER_STATE, "data"),
        prevent_initial_call=True,
    )
    def on_hover(*args):
        *hover_inputs, state_data = args

        triggered = dash.ctx.triggered_id
        view_id = next((v for v in hoverable if graph_id(v) == triggered), hoverable[0])
        hover_data = hover_inputs[hoverable.index(view_id)]

        try:
            coordinator = ctx.build_coordinator(try_parse_explorer_state(state_data))
            event = coordinator.on_hover(view_id, hovered_row_index(hover_data))
        except Exception:
            logger.exception("Error in on_hover", extra={"view_id": view_id})
            return hover_panel(None)

        return hover_panel(event)
