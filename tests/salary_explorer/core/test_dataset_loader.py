import pandas as pd
import pytest

from salary_explorer.core.dataset import Dataset, Row
from salary_explorer.core.dataset_loader import from_frame, load_csv
from salary_explorer.core.exceptions import DatasetSchemaError

HEADER = "work_year,experience_level,employment_type,job_title,salary_in_usd,remote_ratio,company_location,company_size"


def _write_csv(tmp_path, lines):
    path = tmp_path / "ds_salaries.csv"
    path.write_text("\n".join([HEADER] + lines) + "\n")
    return path


def test_load_csv_coerces_numeric_columns(tmp_path):
    path = _write_csv(
        tmp_path,
        [
            "2023,SE,FT,Data Scientist,120000,100,US,M",
            "2023,EN,PT,Analyst,45000,0,GB,S",
        ],
    )

    ds = load_csv(path)

    assert ds.name == "ds_salaries"
    assert ds.file_path == path
    assert len(ds) == 2
    assert ds.frame["salary_in_usd"].dtype == float
    assert ds.frame["remote_ratio"].tolist() == [100, 0]
    # Extra columns are dropped
    assert "work_year" not in ds.frame.columns


def test_load_csv_rows_are_immutable_records(tmp_path):
    path = _write_csv(tmp_path, ["2023,SE,FT,Data Scientist,120000,50,US,M"])

    row = load_csv(path, name="jobs").row(0)

    assert row == Row(
        job_title="Data Scientist",
        experience_level="SE",
        employment_type="FT",
        remote_ratio=50,
        company_size="M",
        salary_in_usd=120000.0,
        company_location="US",
    )
    with pytest.raises(AttributeError):
        row.salary_in_usd = 1.0


def test_load_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv(tmp_path / "nope.csv")


def test_non_numeric_salary_is_a_schema_error(tmp_path):
    path = _write_csv(tmp_path, ["2023,SE,FT,Data Scientist,lots,50,US,M"])

    with pytest.raises(DatasetSchemaError):
        load_csv(path)


def test_missing_column_is_a_schema_error():
    frame = pd.DataFrame({"job_title": ["Analyst"], "salary_in_usd": [1.0]})

    with pytest.raises(DatasetSchemaError):
        from_frame("broken", frame)


def test_dataset_subset_keeps_positions_and_checks_length():
    rows = [
        Row("A", "EN", "FT", 0, "S", 10.0, "US"),
        Row("B", "MI", "FT", 50, "M", 20.0, "US"),
        Row("C", "SE", "FT", 100, "L", 30.0, "US"),
    ]
    ds = Dataset.from_rows("tiny", rows)

    subset = ds.subset([False, True, True])

    assert list(subset.index) == [1, 2]
    assert list(ds.rows()) == rows
    with pytest.raises(ValueError):
        ds.subset([True])
