from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from salary_explorer.config.model import GlobalConfig
from salary_explorer.core.dataset import Dataset
from salary_explorer.ui.ids import IDs


def build_navbar(global_config: GlobalConfig, dataset: Dataset) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(
                            global_config.subtitle,
                            className="text-muted",
                            id="navbar-subtitle",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    [
                        html.Div(dataset.name, className="navbar-dataset-title"),
                        html.Small(f"{len(dataset)} records", className="text-muted"),
                    ],
                    className="ms-auto d-flex flex-column align-items-end",
                ),
                html.Div(
                    [
                        dbc.Button(
                            "Clear selection",
                            id=IDs.Control.CLEAR_SELECTION_BTN,
                            color="secondary",
                            size="sm",
                            className="ms-3",
                        ),
                        dbc.Button(
                            "Reset zoom",
                            id=IDs.Control.RESET_ZOOM_BTN,
                            color="secondary",
                            outline=True,
                            size="sm",
                            className="ms-2",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm",
    )
