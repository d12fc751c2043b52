import pytest

from salary_explorer.core.fields import EXPERIENCE_RANK_FIELD
from salary_explorer.core.projector import LinearProjector, project
from salary_explorer.core.transform import IDENTITY, TransformState, ViewTransform, rescale


def test_views_start_at_identity():
    state = TransformState()

    assert state.get("scatter") == IDENTITY
    assert state.get("scatter").is_identity


@pytest.mark.parametrize("requested, expected", [(20.0, 8.0), (0.5, 1.0), (3.0, 3.0)])
def test_zoom_clamps_scale_to_extent(requested, expected):
    state = TransformState(scale_extent=(1.0, 8.0))

    transform = state.zoom("scatter", requested, 5.0, -5.0)

    assert transform.k == expected
    assert (transform.tx, transform.ty) == (5.0, -5.0)
    assert state.get("scatter") == transform


def test_zoom_is_per_view_and_reset_restores_identity():
    state = TransformState()
    state.zoom("scatter", 2.0, 0.0, 0.0)

    assert state.get("parallel") == IDENTITY
    assert state.to_dict() == {"scatter": [2.0, 0.0, 0.0]}

    state.reset("scatter")
    assert state.get("scatter") == IDENTITY
    assert state.to_dict() == {}


def test_initial_transforms_are_clamped():
    state = TransformState((1.0, 8.0), {"scatter": ViewTransform(k=50.0)})

    assert state.get("scatter").k == 8.0


def test_gesture_tracking():
    state = TransformState()

    state.begin_gesture("scatter")
    assert state.is_interacting("scatter")
    assert not state.is_interacting("parallel")

    state.end_gesture("scatter")
    assert not state.is_interacting("scatter")


def test_rescale_composes_transform_without_touching_base():
    base = LinearProjector(field="salary_in_usd", domain=(0, 100), range=(0, 200))

    r = rescale(base, ViewTransform(k=2.0, tx=-50.0, ty=0.0), "x")

    assert r.map(50) == 150
    assert r.invert(150) == 50
    assert r.visible_domain() == (12.5, 62.5)
    assert base.domain == (0, 100)
    assert base.map(50) == 100


def test_rescale_uses_ty_for_y_axis():
    base = LinearProjector(field="salary_in_usd", domain=(0, 100), range=(100, 0))

    r = rescale(base, ViewTransform(k=2.0, tx=7.0, ty=-100.0), "y")

    assert r.map(50) == 0


def test_rescale_ordinal_projector():
    base = project(EXPERIENCE_RANK_FIELD, None, (0, 400))

    r = rescale(base, ViewTransform(k=2.0, tx=-100.0), "x")

    assert r.map("EN") == pytest.approx(0.0)
    assert r.map("MI") == pytest.approx(200.0)


def test_rescale_rejects_unknown_axis():
    base = LinearProjector(field="salary_in_usd", domain=(0, 100), range=(0, 200))

    with pytest.raises(ValueError):
        rescale(base, IDENTITY, "z")
