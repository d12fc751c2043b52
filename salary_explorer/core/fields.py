from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class FieldKind(str, Enum):
    CATEGORICAL = "categorical"
    NUMERICAL = "numerical"
    ORDINAL = "ordinal"


@dataclass(frozen=True)
class FieldSpec:
    """
    Describes how one column of the salary table is projected.

    - name: column name in the Dataset
    - label: human-readable axis label
    - kind: categorical / numerical / ordinal
    - values: enumerated, ordered domain for categorical and ordinal fields
    - value_labels: optional display names for enumerated values
    """

    name: str
    label: str
    kind: FieldKind
    values: Tuple[str, ...] = ()
    value_labels: Optional[Dict[str, str]] = None

    def display(self, value) -> str:
        if self.value_labels and value in self.value_labels:
            return self.value_labels[value]
        return str(value)


JOB_TITLE = "job_title"
EXPERIENCE_LEVEL = "experience_level"
EMPLOYMENT_TYPE = "employment_type"
REMOTE_RATIO = "remote_ratio"
COMPANY_SIZE = "company_size"
SALARY_IN_USD = "salary_in_usd"
COMPANY_LOCATION = "company_location"

REQUIRED_COLUMNS: Tuple[str, ...] = (
    JOB_TITLE,
    EXPERIENCE_LEVEL,
    EMPLOYMENT_TYPE,
    REMOTE_RATIO,
    COMPANY_SIZE,
    SALARY_IN_USD,
    COMPANY_LOCATION,
)

NUMERIC_COLUMNS: Tuple[str, ...] = (REMOTE_RATIO, SALARY_IN_USD)

EXPERIENCE_FIELD = FieldSpec(
    name=EXPERIENCE_LEVEL,
    label="Experience Level",
    kind=FieldKind.CATEGORICAL,
    values=("EN", "MI", "SE", "EX"),
    value_labels={"EN": "Entry", "MI": "Mid", "SE": "Senior", "EX": "Executive"},
)

# Same categories, projected as ranks 1..4 (scatter x axis)
EXPERIENCE_RANK_FIELD = FieldSpec(
    name=EXPERIENCE_LEVEL,
    label="Experience Level",
    kind=FieldKind.ORDINAL,
    values=EXPERIENCE_FIELD.values,
    value_labels=EXPERIENCE_FIELD.value_labels,
)

COMPANY_SIZE_FIELD = FieldSpec(
    name=COMPANY_SIZE,
    label="Company Size",
    kind=FieldKind.CATEGORICAL,
    values=("S", "M", "L"),
)

REMOTE_RATIO_FIELD = FieldSpec(
    name=REMOTE_RATIO,
    label="Remote Work %",
    kind=FieldKind.NUMERICAL,
)

SALARY_FIELD = FieldSpec(
    name=SALARY_IN_USD,
    label="Salary (USD)",
    kind=FieldKind.NUMERICAL,
)

# Axes of the parallel-coordinates view, left to right
PARALLEL_DIMENSIONS: Tuple[FieldSpec, ...] = (
    EXPERIENCE_FIELD,
    REMOTE_RATIO_FIELD,
    COMPANY_SIZE_FIELD,
    SALARY_FIELD,
)
