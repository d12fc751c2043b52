from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from salary_explorer.core.aggregator import AggregateGroup
from salary_explorer.core.dataset import Dataset
from salary_explorer.core.fields import EMPLOYMENT_TYPE, JOB_TITLE
from salary_explorer.core.projector import CategoricalProjector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionPredicate:
    """
    Allowed values for one field, or no restriction when `allowed` is None.

    Instances are never mutated; a new brush produces a new predicate.
    """

    field: str = JOB_TITLE
    allowed: Optional[FrozenSet[str]] = None

    @classmethod
    def pass_all(cls, field: str = JOB_TITLE) -> SelectionPredicate:
        return cls(field=field, allowed=None)

    @classmethod
    def of(cls, field: str, values: Iterable[str]) -> SelectionPredicate:
        return cls(field=field, allowed=frozenset(str(v) for v in values))

    @property
    def is_pass_all(self) -> bool:
        return self.allowed is None

    def mask(self, frame: pd.DataFrame) -> np.ndarray:
        if self.allowed is None:
            return np.ones(len(frame), dtype=bool)
        return frame[self.field].astype(str).isin(self.allowed).to_numpy()

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "allowed": None if self.allowed is None else sorted(self.allowed),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> SelectionPredicate:
        if not data:
            return cls.pass_all()
        allowed = data.get("allowed")
        field = data.get("field", JOB_TITLE)
        if allowed is None:
            return cls.pass_all(field)
        return cls.of(field, allowed)


class SelectionFilter:
    """
    Turns brush gestures into predicates and predicates into working sets.

    States:
    - Unselected: predicate passes every row
    - Selected: predicate allows only the keys whose bars sit fully inside the brush

    Working sets are always rebuilt from the Dataset (constant filter plus
    predicate), never from a previous working set.
    """

    def __init__(self, employment_type: Optional[str] = "FT", field: str = JOB_TITLE) -> None:
        self.employment_type = employment_type
        self.field = field

    def selected_keys(
        self,
        extent: Tuple[float, float],
        groups: List[AggregateGroup],
        band: CategoricalProjector,
    ) -> List[str]:
        x0, x1 = sorted(extent)
        keys = []
        for group in groups:
            left, right = band.extent(group.key)
            # Partial overlap does not count: both edges must be inside the brush
            if left >= x0 and right <= x1:
                keys.append(group.key)
        return keys

    def brush(
        self,
        extent: Optional[Tuple[float, float]],
        groups: List[AggregateGroup],
        band: CategoricalProjector,
    ) -> SelectionPredicate:
        """
        Predicate for a finished brush gesture. A cleared or zero-width brush,
        or one that covers no whole bar, falls back to pass-all.
        """
        if extent is None or extent[0] == extent[1]:
            return self.clear()

        keys = self.selected_keys(extent, groups, band)
        if not keys:
            logger.info("Brush selected no groups; falling back to pass-all", extra={"extent": list(extent)})
            return self.clear()

        return SelectionPredicate.of(self.field, keys)

    def clear(self) -> SelectionPredicate:
        return SelectionPredicate.pass_all(self.field)

    def working_set(self, dataset: Dataset, predicate: SelectionPredicate) -> pd.DataFrame:
        frame = dataset.frame
        mask = predicate.mask(frame)
        if self.employment_type is not None:
            mask = mask & (frame[EMPLOYMENT_TYPE] == self.employment_type).to_numpy()
        return dataset.subset(mask)
