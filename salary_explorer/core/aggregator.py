from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pandas as pd

DEFAULT_MIN_COUNT = 10
DEFAULT_TOP_N = 15


@dataclass(frozen=True)
class AggregateGroup:
    key: str
    mean: float
    count: int


def aggregate(
    rows: pd.DataFrame,
    key_field: str,
    value_field: str,
    min_count: int = DEFAULT_MIN_COUNT,
    top_n: int = DEFAULT_TOP_N,
) -> List[AggregateGroup]:
    """
    Group rows by key_field and summarise value_field per group.

    - Groups with fewer than min_count rows are dropped (display-quality filter)
    - Remaining groups are sorted by mean, descending
    - Ties keep the order in which each key first appears in rows
    - At most top_n groups are returned; an empty list when nothing qualifies
    """
    if rows.empty:
        return []

    # sort=False keeps first-appearance order, which the stable sort below relies on
    summary = (
        rows.groupby(key_field, sort=False)[value_field]
        .agg(["mean", "count"])
    )
    summary = summary[summary["count"] >= min_count]
    summary = summary.sort_values("mean", ascending=False, kind="stable")
    summary = summary.head(top_n)

    return [
        AggregateGroup(key=str(key), mean=float(rec["mean"]), count=int(rec["count"]))
        for key, rec in summary.iterrows()
    ]
