import pandas as pd
import pytest

from salary_explorer.core.aggregator import aggregate
from salary_explorer.core.dataset import Dataset
from salary_explorer.core.projector import CategoricalProjector
from salary_explorer.core.selection import SelectionFilter, SelectionPredicate


def _make_dataset(extra_rows=()):
    """
    12 x Data Scientist (mean 120000) and 8 x Analyst (70000), all full-time.
    """
    records = []
    levels = ["EN", "MI", "SE", "EX"]
    for i in range(12):
        records.append(
            {
                "job_title": "Data Scientist",
                "experience_level": levels[i % 4],
                "employment_type": "FT",
                "remote_ratio": [0, 50, 100][i % 3],
                "company_size": ["S", "M", "L"][i % 3],
                "salary_in_usd": 110000.0 if i % 2 == 0 else 130000.0,
                "company_location": "US",
            }
        )
    for i in range(8):
        records.append(
            {
                "job_title": "Analyst",
                "experience_level": levels[i % 4],
                "employment_type": "FT",
                "remote_ratio": 50,
                "company_size": "M",
                "salary_in_usd": 70000.0,
                "company_location": "GB",
            }
        )
    records.extend(extra_rows)
    return Dataset(name="salaries", frame=pd.DataFrame(records))


def _bars(dataset, min_count=5):
    groups = aggregate(dataset.frame, "job_title", "salary_in_usd", min_count=min_count)
    band = CategoricalProjector.band("job_title", [g.key for g in groups], (0, 100), padding=0.2)
    return groups, band


def test_brush_over_one_bar_selects_its_rows():
    ds = _make_dataset()
    groups, band = _bars(ds)
    sf = SelectionFilter()

    predicate = sf.brush((0, 50), groups, band)
    ws = sf.working_set(ds, predicate)

    assert predicate.allowed == frozenset({"Data Scientist"})
    assert len(ws) == 12
    assert set(ws["job_title"]) == {"Data Scientist"}


def test_brush_excludes_partially_covered_bars():
    ds = _make_dataset()
    groups, band = _bars(ds)
    sf = SelectionFilter()

    predicate = sf.brush((20, 100), groups, band)

    assert predicate.allowed == frozenset({"Analyst"})


def test_brush_covering_no_whole_bar_falls_back_to_pass_all():
    ds = _make_dataset()
    groups, band = _bars(ds)
    sf = SelectionFilter()

    predicate = sf.brush((46, 54), groups, band)

    assert predicate.is_pass_all
    pd.testing.assert_frame_equal(
        sf.working_set(ds, predicate),
        sf.working_set(ds, SelectionPredicate.pass_all()),
    )


@pytest.mark.parametrize("extent", [None, (30.0, 30.0)])
def test_cleared_or_zero_width_brush_is_pass_all(extent):
    ds = _make_dataset()
    groups, band = _bars(ds)

    assert SelectionFilter().brush(extent, groups, band).is_pass_all


def test_brush_extent_order_does_not_matter():
    ds = _make_dataset()
    groups, band = _bars(ds)
    sf = SelectionFilter()

    assert sf.brush((50, 0), groups, band) == sf.brush((0, 50), groups, band)


def test_working_set_is_idempotent():
    ds = _make_dataset()
    sf = SelectionFilter()
    predicate = SelectionPredicate.of("job_title", ["Analyst"])

    first = sf.working_set(ds, predicate)
    second = sf.working_set(ds, predicate)

    pd.testing.assert_frame_equal(first, second)


def test_working_set_keeps_dataset_positions():
    ds = _make_dataset()
    ws = SelectionFilter().working_set(ds, SelectionPredicate.of("job_title", ["Analyst"]))

    assert list(ws.index) == list(range(12, 20))
    assert ws.index.isin(ds.frame.index).all()


def test_working_set_applies_constant_employment_filter():
    part_time = {
        "job_title": "Data Scientist",
        "experience_level": "MI",
        "employment_type": "PT",
        "remote_ratio": 0,
        "company_size": "S",
        "salary_in_usd": 40000.0,
        "company_location": "DE",
    }
    ds = _make_dataset(extra_rows=[part_time])

    full_time_only = SelectionFilter().working_set(ds, SelectionPredicate.pass_all())
    everything = SelectionFilter(employment_type=None).working_set(ds, SelectionPredicate.pass_all())

    assert len(full_time_only) == 20
    assert len(everything) == 21


def test_working_set_is_rebuilt_from_dataset_not_previous_selection():
    ds = _make_dataset()
    sf = SelectionFilter()

    sf.working_set(ds, SelectionPredicate.of("job_title", ["Analyst"]))
    ws = sf.working_set(ds, SelectionPredicate.of("job_title", ["Data Scientist"]))

    assert len(ws) == 12


def test_predicate_dict_round_trip():
    predicate = SelectionPredicate.of("job_title", ["b", "a"])

    assert predicate.to_dict() == {"field": "job_title", "allowed": ["a", "b"]}
    assert SelectionPredicate.from_dict(predicate.to_dict()) == predicate
    assert SelectionPredicate.from_dict(None).is_pass_all


def test_working_set_accepts_read_only_predicate_mask(monkeypatch):
    # Copy-on-write pandas hands back read-only arrays from Series.to_numpy()
    ds = _make_dataset()
    plain_mask = SelectionPredicate.mask

    def read_only_mask(self, frame):
        mask = plain_mask(self, frame).copy()
        mask.flags.writeable = False
        return mask

    monkeypatch.setattr(SelectionPredicate, "mask", read_only_mask)

    ws = SelectionFilter().working_set(ds, SelectionPredicate.of("job_title", ["Data Scientist"]))

    assert len(ws) == 12
