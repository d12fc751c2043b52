from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional

import numpy as np
import pandas as pd

from salary_explorer.core.exceptions import DatasetSchemaError
from salary_explorer.core.fields import REQUIRED_COLUMNS


@dataclass(frozen=True)
class Row:
    """
    One job-salary record. Immutable once loaded.
    """

    job_title: str
    experience_level: str
    employment_type: str
    remote_ratio: int
    company_size: str
    salary_in_usd: float
    company_location: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Row:
        return cls(
            job_title=str(record["job_title"]),
            experience_level=str(record["experience_level"]),
            employment_type=str(record["employment_type"]),
            remote_ratio=int(record["remote_ratio"]),
            company_size=str(record["company_size"]),
            salary_in_usd=float(record["salary_in_usd"]),
            company_location=str(record["company_location"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class Dataset:
    """
    The loaded salary table.

    Includes:
    - Ordered, position-indexed rows (index 0..n-1 is the row position)
    - Row-level access returning immutable Row objects
    - Mask-based subsetting that keeps the original index, so any subset can be
      traced back to its rows in this Dataset

    The underlying frame is never mutated after construction.
    """

    def __init__(
        self,
        name: str,
        frame: pd.DataFrame,
        file_path: Optional[Path] = None,
    ) -> None:
        missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
        if missing:
            raise DatasetSchemaError(
                f"Dataset '{name}' is missing required columns: {missing}"
            )

        self.name = name
        self.file_path = file_path

        # Own a private copy with a clean positional index
        self._frame: pd.DataFrame = frame.loc[:, list(REQUIRED_COLUMNS)].reset_index(drop=True).copy()

    @classmethod
    def from_rows(cls, name: str, rows: List[Row]) -> Dataset:
        frame = pd.DataFrame([r.to_dict() for r in rows], columns=list(REQUIRED_COLUMNS))
        return cls(name=name, frame=frame)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------
    @property
    def frame(self) -> pd.DataFrame:
        """The full table. Callers must treat it as read-only."""
        return self._frame

    def __len__(self) -> int:
        return len(self._frame)

    def row(self, index: int) -> Row:
        """Return the Row at the given Dataset position."""
        return Row.from_record(self._frame.loc[index])

    def rows(self) -> Iterator[Row]:
        for record in self._frame.to_dict(orient="records"):
            yield Row.from_record(record)

    def column(self, name: str) -> pd.Series:
        return self._frame[name]

    # -------------------------------------------------------------------------
    # Subsetting
    # -------------------------------------------------------------------------
    def subset(self, mask: np.ndarray | pd.Series) -> pd.DataFrame:
        """
        Return the rows selected by a boolean mask, keeping Dataset positions
        as the index.
        """
        mask_arr = np.asarray(mask, dtype=bool)
        if mask_arr.shape != (len(self._frame),):
            raise ValueError(
                f"Mask length {mask_arr.shape} does not match dataset length {len(self._frame)}"
            )
        return self._frame.loc[mask_arr]
