from pathlib import Path

import dash
import pandas as pd
import plotly.graph_objects as go

from salary_explorer.config.model import GlobalConfig
from salary_explorer.core.dataset import Dataset
from salary_explorer.core.view_registry import ViewRegistry
from salary_explorer.ui.callbacks.callbacks_zoom import reset_zoom_outputs
from salary_explorer.ui.config import AppConfig
from salary_explorer.views import ParallelCoordinatesView, SalaryBarView, ScatterView


def _make_app_config():
    levels = ["EN", "MI", "SE", "EX"]
    records = [
        {
            "job_title": "Data Scientist",
            "experience_level": levels[i % 4],
            "employment_type": "FT",
            "remote_ratio": [0, 50, 100][i % 3],
            "company_size": "M",
            "salary_in_usd": 100000.0 + 1000.0 * i,
            "company_location": "US",
        }
        for i in range(12)
    ]
    registry = ViewRegistry()
    for cls in (SalaryBarView, ScatterView, ParallelCoordinatesView):
        registry.register(cls)
    return AppConfig(
        config_root=Path("config"),
        global_config=GlobalConfig(ui_title="Test", subtitle="", data_path=Path("unused.csv")),
        dataset=Dataset(name="salaries", frame=pd.DataFrame(records)),
        registry=registry,
    )


def test_reset_zoom_outputs_returns_identity_state():
    state = {"predicate": None, "transforms": {"scatter": [4.0, -100.0, -50.0]}}

    figure, new_state = reset_zoom_outputs(_make_app_config(), ["scatter"], state)

    assert isinstance(figure, go.Figure)
    assert new_state["transforms"] == {}


def test_reset_zoom_outputs_reports_errors_as_figures():
    class _BrokenContext:
        def build_coordinator(self, state=None):
            raise RuntimeError("no dataset")

    outputs = reset_zoom_outputs(_BrokenContext(), ["scatter"], {})

    assert len(outputs) == 2
    assert isinstance(outputs[0], go.Figure)
    assert outputs[1] is dash.no_update
