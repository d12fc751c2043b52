from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from salary_explorer.core.dataset import Dataset
from salary_explorer.core.exceptions import DatasetSchemaError
from salary_explorer.core.fields import NUMERIC_COLUMNS, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


def from_frame(name: str, frame: pd.DataFrame, path: Path | None = None) -> Dataset:
    """
    Validate the required columns and coerce numeric ones.

    Precondition: numeric columns are well formed. Values that cannot be parsed
    are a loader-boundary defect and raise DatasetSchemaError instead of being
    silently dropped.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        msg = f"Dataset '{name}': missing required columns {missing}"
        logger.error(msg, extra={"dataset": name, "path": str(path) if path else None})
        raise DatasetSchemaError(msg)

    frame = frame.copy()
    for col in NUMERIC_COLUMNS:
        coerced = pd.to_numeric(frame[col], errors="coerce")
        n_bad = int(coerced.isna().sum())
        if n_bad:
            msg = f"Dataset '{name}': column '{col}' has {n_bad} non-numeric values"
            logger.error(msg, extra={"dataset": name, "column": col, "n_bad": n_bad})
            raise DatasetSchemaError(msg)
        frame[col] = coerced

    frame["remote_ratio"] = frame["remote_ratio"].astype(int)
    frame["salary_in_usd"] = frame["salary_in_usd"].astype(float)

    return Dataset(name=name, frame=frame, file_path=path)


def load_csv(path: Path, name: str | None = None) -> Dataset:
    """
    Load the salary CSV once at startup. Every column is read as text and
    numeric columns are coerced afterwards.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    ds = from_frame(name or path.stem, frame, path)

    logger.info(
        "Dataset loaded",
        extra={
            "dataset": ds.name,
            "path": str(path),
            "n_rows": len(ds),
        },
    )
    return ds
