from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from salary_explorer.core.dataset import Row
from salary_explorer.core.transform import ViewTransform


@dataclass(frozen=True)
class BrushEvent:
    """Finished brush on a view. extent is None when the brush was cleared."""

    view_id: str
    extent: Optional[Tuple[float, float]]

    @property
    def is_clear(self) -> bool:
        return self.extent is None or self.extent[0] == self.extent[1]


@dataclass(frozen=True)
class ZoomEvent:
    """
    Zoom/pan gesture on a view. `active` is True while the gesture is still
    in progress (drag not yet released).
    """

    view_id: str
    k: float
    tx: float
    ty: float
    active: bool = False

    @property
    def transform(self) -> ViewTransform:
        return ViewTransform(k=self.k, tx=self.tx, ty=self.ty)


@dataclass(frozen=True)
class HoverEvent:
    """Pointer entered a mark; carries the full Row behind it."""

    view_id: str
    row_index: int
    row: Row
