from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from salary_explorer.config.loader import load_global_config
from salary_explorer.core.dataset_loader import load_csv
from salary_explorer.core.view_registry import ViewRegistry
from salary_explorer.ui.config import AppConfig
from salary_explorer.ui.layout.build_layout import build_layout
from salary_explorer.ui.callbacks.callbacks_brush import register_brush_callbacks
from salary_explorer.ui.callbacks.callbacks_zoom import register_zoom_callbacks
from salary_explorer.ui.callbacks.callbacks_hover import register_hover_callbacks
from salary_explorer.ui.callbacks.callbacks_render import register_render_callbacks

logger = logging.getLogger(__name__)


def _build_view_registry() -> ViewRegistry:
    from salary_explorer.views import (
        SalaryBarView,
        ScatterView,
        ParallelCoordinatesView,
    )

    registry = ViewRegistry()
    registry.register(SalaryBarView)
    registry.register(ScatterView)
    registry.register(ParallelCoordinatesView)
    return registry


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config + Dataset
    global_config = load_global_config(config_root)
    dataset = load_csv(global_config.data_path)

    # 2) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        dataset=dataset,
        registry=_build_view_registry(),
    )
    ctx.validate()

    # 3) Initial render: nothing brushed, no zoom
    coordinator = ctx.build_coordinator()
    initial_figures = coordinator.on_resize()

    logger.info(
        "App initialised",
        extra={
            "dataset": dataset.name,
            "n_rows": len(dataset),
            "n_working_set": len(coordinator.working_set),
            "views": coordinator.view_ids,
        },
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx, initial_figures, coordinator.snapshot())

    # Register callbacks
    register_brush_callbacks(app, ctx)
    register_zoom_callbacks(app, ctx)
    register_hover_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    return app
