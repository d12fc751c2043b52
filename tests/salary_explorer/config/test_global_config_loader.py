import json

import pytest

from salary_explorer.config import load_global_config
from salary_explorer.config.model import ExplorerConfig, Margin
from salary_explorer.core.exceptions import ConfigError


def _write_global(tmp_path, payload):
    (tmp_path / "global.json").write_text(json.dumps(payload))
    return tmp_path


def test_load_global_config_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("SALARY_EXPLORER_DATA_ROOT", raising=False)
    root = _write_global(tmp_path, {"data_path": "data/ds_salaries.csv"})

    cfg = load_global_config(root)

    assert cfg.ui_title == "Salary Explorer"
    assert cfg.data_path == (tmp_path / "data" / "ds_salaries.csv").resolve()
    assert cfg.source_path == tmp_path / "global.json"
    assert cfg.explorer == ExplorerConfig()


def test_load_global_config_explorer_overrides(tmp_path):
    root = _write_global(
        tmp_path,
        {
            "ui_title": "Jobs",
            "data_path": "/abs/salaries.csv",
            "explorer": {
                "min_group_count": 3,
                "top_n": 5,
                "scale_extent": [1, 4],
                "employment_type": None,
                "margin": {"top": 10, "right": 10, "bottom": 10, "left": 10},
            },
        },
    )

    cfg = load_global_config(root)

    assert cfg.ui_title == "Jobs"
    assert str(cfg.data_path) == "/abs/salaries.csv"
    assert cfg.explorer.min_group_count == 3
    assert cfg.explorer.top_n == 5
    assert cfg.explorer.scale_extent == (1.0, 4.0)
    assert cfg.explorer.employment_type is None
    assert cfg.explorer.margin == Margin(top=10, right=10, bottom=10, left=10)
    assert cfg.explorer.inner_width == 880


def test_data_root_env_var(tmp_path, monkeypatch):
    data_root = tmp_path / "mounted"
    monkeypatch.setenv("SALARY_EXPLORER_DATA_ROOT", str(data_root))
    root = _write_global(tmp_path, {"data_path": "ds_salaries.csv"})

    cfg = load_global_config(root)

    assert cfg.data_path == (data_root / "ds_salaries.csv").resolve()


def test_missing_global_json(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


def test_invalid_json(tmp_path):
    (tmp_path / "global.json").write_text("{not json")

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_missing_data_path(tmp_path):
    root = _write_global(tmp_path, {"ui_title": "Jobs"})

    with pytest.raises(ConfigError):
        load_global_config(root)


@pytest.mark.parametrize(
    "explorer",
    [
        {"min_group_cnt": 3},
        {"top_n": 0},
        {"headroom": 0.5},
        {"scale_extent": [0, 8]},
        {"color_anchors": ["#000", "#fff"]},
        {"chart_width": 50},
        {"scale_extent": [1, 2, 3]},
        {"scale_extent": "wide"},
        {"scale_extent": ["a", 8]},
        {"color_anchors": ["#e41a1c", "#377eb8", "green"]},
        {"color_anchors": ["#e41a1c", "#377eb8", 7]},
    ],
)
def test_invalid_explorer_block(tmp_path, explorer):
    root = _write_global(tmp_path, {"data_path": "x.csv", "explorer": explorer})

    with pytest.raises(ConfigError):
        load_global_config(root)
