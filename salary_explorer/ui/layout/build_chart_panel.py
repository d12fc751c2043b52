from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dcc, html

from salary_explorer.core.base_view import BaseView
from salary_explorer.ui.ids import graph_id


def build_chart_panel(view_cls: type[BaseView], figure: go.Figure, footer=None) -> dbc.Card:
    """One card per registered view. Graph config follows the view's capabilities."""
    graph = dcc.Graph(
        id=graph_id(view_cls.id),
        figure=figure,
        clear_on_unhover=view_cls.hoverable,
        config={
            "responsive": True,
            "scrollZoom": view_cls.zoomable,
            "displaylogo": False,
        },
    )

    children = [
        dbc.CardHeader(html.Strong(view_cls.label), className="p-2"),
        dbc.CardBody(graph),
    ]
    if footer is not None:
        children.append(dbc.CardFooter(footer))

    return dbc.Card(children, className="mt-3")
