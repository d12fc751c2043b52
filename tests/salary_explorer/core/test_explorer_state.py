from salary_explorer.core.explorer_state import ExplorerState
from salary_explorer.core.selection import SelectionPredicate
from salary_explorer.core.transform import ViewTransform


def test_default_state_is_unselected_and_unzoomed():
    state = ExplorerState()

    assert state.predicate.is_pass_all
    assert state.transforms == {}
    assert state.to_dict() == {"predicate": {"field": "job_title", "allowed": None}, "transforms": {}}


def test_state_survives_json_shaped_round_trip():
    state = ExplorerState(
        predicate=SelectionPredicate.of("job_title", ["Data Scientist"]),
        transforms={"scatter": ViewTransform(k=2.0, tx=-10.0, ty=-20.0)},
    )

    restored = ExplorerState.from_dict(state.to_dict())

    assert restored == state


def test_from_empty_dict():
    assert ExplorerState.from_dict({}) == ExplorerState()
    assert ExplorerState.from_dict(None) == ExplorerState()
