from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

import dash_bootstrap_components as dbc
from dash import dcc, html

from salary_explorer.core.explorer_state import ExplorerState
from salary_explorer.ui.ids import IDs
from salary_explorer.ui.callbacks.callbacks_hover import hover_panel
from salary_explorer.ui.layout.build_chart_panel import build_chart_panel
from salary_explorer.ui.layout.build_navbar import build_navbar

if TYPE_CHECKING:
    from salary_explorer.ui.config import AppConfig


def build_layout(ctx: AppConfig, initial_figures: Dict[str, Any], initial_state: ExplorerState):
    ctx.validate()
    navbar = build_navbar(ctx.global_config, ctx.dataset)

    panels = []
    for view_cls in ctx.registry.all_classes():
        footer = None
        if view_cls.hoverable:
            footer = html.Div(hover_panel(None), id=IDs.Control.HOVER_DETAILS)
        panels.append(build_chart_panel(view_cls, initial_figures[view_cls.id], footer))

    return dbc.Container(
        fluid=True,
        children=[
            navbar,
            dcc.Store(id=IDs.Store.EXPLORER_STATE, data=initial_state.to_dict(), storage_type="memory"),
            html.Div(id=IDs.Control.STATUS_BAR, className="mt-2 small"),
            dbc.Row([dbc.Col(panel, lg=12) for panel in panels], className="gx-3"),
        ],
    )
