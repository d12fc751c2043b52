from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from salary_explorer.core.projector import LinearProjector, OrdinalProjector

logger = logging.getLogger(__name__)

DEFAULT_SCALE_EXTENT: Tuple[float, float] = (1.0, 8.0)


@dataclass(frozen=True)
class ViewTransform:
    """
    Zoom/pan state of one view: new_pixel = k * base_pixel + (tx, ty).
    """

    k: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @property
    def is_identity(self) -> bool:
        return self.k == 1.0 and self.tx == 0.0 and self.ty == 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.k, self.tx, self.ty

    def clamped(self, scale_extent: Tuple[float, float]) -> ViewTransform:
        lo, hi = scale_extent
        k = min(hi, max(lo, self.k))
        if k == self.k:
            return self
        return ViewTransform(k=k, tx=self.tx, ty=self.ty)


IDENTITY = ViewTransform()

Rescalable = Union[LinearProjector, OrdinalProjector]


@dataclass(frozen=True)
class RescaledProjector:
    """
    A base projector composed with one axis of a ViewTransform. The base
    projector (and its domain) is left untouched.
    """

    base: Rescalable
    k: float
    offset: float

    @property
    def field(self) -> str:
        return self.base.field

    def map(self, value) -> float:
        return self.k * self.base.map(value) + self.offset

    def invert(self, pixel: float) -> float:
        return self.base.invert((pixel - self.offset) / self.k)

    def visible_domain(self) -> Tuple[float, float]:
        """Data values at the two ends of the base projector's pixel range."""
        r0, r1 = self.base.range
        return self.invert(r0), self.invert(r1)


def rescale(projector: Rescalable, transform: ViewTransform, axis: str) -> RescaledProjector:
    if axis == "x":
        return RescaledProjector(base=projector, k=transform.k, offset=transform.tx)
    if axis == "y":
        return RescaledProjector(base=projector, k=transform.k, offset=transform.ty)
    raise ValueError(f"Unknown axis '{axis}', expected 'x' or 'y'")


class TransformState:
    """
    Per-view zoom/pan transforms.

    - Every view starts at identity
    - Scale factors are clamped silently to scale_extent
    - A gesture in flight is tracked so views can skip decorations (gridlines)
      while it lasts; they come back once the gesture ends
    """

    def __init__(
        self,
        scale_extent: Tuple[float, float] = DEFAULT_SCALE_EXTENT,
        transforms: Optional[Dict[str, ViewTransform]] = None,
    ) -> None:
        self.scale_extent = scale_extent
        self._transforms: Dict[str, ViewTransform] = {
            view_id: t.clamped(scale_extent) for view_id, t in (transforms or {}).items()
        }
        self._active_gestures: set[str] = set()

    def get(self, view_id: str) -> ViewTransform:
        return self._transforms.get(view_id, IDENTITY)

    def zoom(self, view_id: str, k: float, tx: float, ty: float) -> ViewTransform:
        requested = ViewTransform(k=float(k), tx=float(tx), ty=float(ty))
        transform = requested.clamped(self.scale_extent)
        if transform is not requested:
            logger.debug(
                "Zoom scale clamped",
                extra={"view_id": view_id, "requested_k": requested.k, "k": transform.k},
            )
        self._transforms[view_id] = transform
        return transform

    def reset(self, view_id: str) -> ViewTransform:
        self._transforms.pop(view_id, None)
        return IDENTITY

    def begin_gesture(self, view_id: str) -> None:
        self._active_gestures.add(view_id)

    def end_gesture(self, view_id: str) -> None:
        self._active_gestures.discard(view_id)

    def is_interacting(self, view_id: str) -> bool:
        return view_id in self._active_gestures

    def rescale(self, view_id: str, projector: Rescalable, axis: str) -> RescaledProjector:
        return rescale(projector, self.get(view_id), axis)

    def to_dict(self) -> Dict[str, list]:
        return {
            view_id: list(t.as_tuple())
            for view_id, t in self._transforms.items()
            if not t.is_identity
        }
