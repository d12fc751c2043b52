import pandas as pd
import pytest

from salary_explorer.core.dataset import Dataset
from salary_explorer.core.view_registry import ViewRegistry
from salary_explorer.core.fields import REQUIRED_COLUMNS
from salary_explorer.views import ParallelCoordinatesView, SalaryBarView, ScatterView


def _make_registry():
    registry = ViewRegistry()
    for cls in (SalaryBarView, ScatterView, ParallelCoordinatesView):
        registry.register(cls)
    return registry


def test_registration_order_and_capabilities():
    registry = _make_registry()

    assert registry.ids() == ["salary_bar", "scatter", "parallel"]
    assert registry.brushable_ids() == ["salary_bar"]
    assert registry.zoomable_ids() == ["scatter"]
    assert registry.hoverable_ids() == ["parallel"]


def test_create_all_instantiates_with_dataset():
    ds = Dataset(name="empty", frame=pd.DataFrame(columns=list(REQUIRED_COLUMNS)))
    registry = _make_registry()

    views = registry.create_all(ds)

    assert [v.id for v in views] == registry.ids()
    assert isinstance(views[1], ScatterView)
    assert all(v.dataset is ds for v in views)


def test_register_rejects_duplicates_and_non_views():
    registry = _make_registry()

    with pytest.raises(ValueError):
        registry.register(ScatterView)
    with pytest.raises(TypeError):
        registry.register(object)
