from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from salary_explorer.core.exceptions import OutOfDomainError
from salary_explorer.core.fields import FieldKind, FieldSpec

PixelRange = Tuple[float, float]

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


# -----------------------------------------------------------------------------
# Tick / nice helpers (same arithmetic as d3-array, so axes match the browser)
# -----------------------------------------------------------------------------
def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Positive result: tick step. Negative result: inverse of a fractional step
    (e.g. -10 means 0.1), which avoids float drift when generating ticks.
    """
    step = (stop - start) / max(0, count)
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


def ticks(start: float, stop: float, count: int = 10) -> List[float]:
    if count <= 0:
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    inc = tick_increment(start, stop, count)
    if inc == 0:
        return []

    if inc > 0:
        i0, i1 = math.ceil(start / inc), math.floor(stop / inc)
        values = [(i0 + i) * inc for i in range(i1 - i0 + 1)]
    else:
        inc = -inc
        i0, i1 = math.ceil(start * inc), math.floor(stop * inc)
        values = [(i0 + i) / inc for i in range(i1 - i0 + 1)]

    if reverse:
        values.reverse()
    return values


def nice_domain(start: float, stop: float, count: int = 10) -> Tuple[float, float]:
    """Extend [start, stop] outward to round tick boundaries."""
    if stop <= start:
        return start, stop

    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep or step == 0:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        else:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        prestep = step
    return start, stop


# -----------------------------------------------------------------------------
# Projectors
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LinearProjector:
    """
    Numeric field -> pixel coordinate.

    Out-of-domain values are clamped to the range. A degenerate domain maps
    every value to the middle of the range.
    """

    field: str
    domain: Tuple[float, float]
    range: PixelRange
    clamp: bool = True

    def _normalize(self, value: float) -> float:
        d0, d1 = self.domain
        if d0 == d1:
            return 0.5
        t = (float(value) - d0) / (d1 - d0)
        if self.clamp:
            t = min(1.0, max(0.0, t))
        return t

    def map(self, value: float) -> float:
        r0, r1 = self.range
        return r0 + self._normalize(value) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return (d0 + d1) / 2
        t = (float(pixel) - r0) / (r1 - r0)
        return d0 + t * (d1 - d0)

    def ticks(self, count: int = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class CategoricalProjector:
    """
    Enumerated field -> evenly spaced positions across the range.

    With padding_inner=1 this is a point scale (bandwidth 0). With
    padding_inner < 1 each value owns a band of width `bandwidth` starting at
    map(value), which bar marks and brushing use.
    """

    field: str
    values: Tuple[str, ...]
    range: PixelRange
    padding_inner: float = 1.0
    padding_outer: float = 0.0
    align: float = 0.5
    step: float = field(init=False)
    bandwidth: float = field(init=False)
    _positions: Dict[str, float] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        n = len(self.values)
        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)

        step = (stop - start) / max(1.0, n - self.padding_inner + self.padding_outer * 2)
        start += (stop - start - step * (n - self.padding_inner)) * self.align
        positions = [start + step * i for i in range(n)]
        if reverse:
            positions.reverse()

        object.__setattr__(self, "step", step)
        object.__setattr__(self, "bandwidth", step * (1 - self.padding_inner))
        object.__setattr__(self, "_positions", dict(zip(self.values, positions)))

    @classmethod
    def point(cls, field: str, values: Sequence[str], range: PixelRange, padding: float = 0.0) -> CategoricalProjector:
        return cls(field=field, values=tuple(values), range=range, padding_inner=1.0, padding_outer=padding)

    @classmethod
    def band(cls, field: str, values: Sequence[str], range: PixelRange, padding: float = 0.0) -> CategoricalProjector:
        return cls(field=field, values=tuple(values), range=range, padding_inner=padding, padding_outer=padding)

    def map(self, value: str) -> float:
        try:
            return self._positions[value]
        except KeyError:
            raise OutOfDomainError(self.field, value) from None

    def center(self, value: str) -> float:
        return self.map(value) + self.bandwidth / 2

    def extent(self, value: str) -> Tuple[float, float]:
        left = self.map(value)
        return left, left + self.bandwidth


@dataclass(frozen=True)
class OrdinalProjector:
    """
    Ordered categories mapped to ranks 1..n, then projected linearly over
    [0.5, n + 0.5] so every rank sits half a step away from the edges.
    """

    field: str
    values: Tuple[str, ...]
    range: PixelRange
    linear: LinearProjector = field(init=False)

    def __post_init__(self) -> None:
        n = len(self.values)
        object.__setattr__(
            self,
            "linear",
            LinearProjector(field=self.field, domain=(0.5, n + 0.5), range=self.range, clamp=False),
        )

    def rank(self, value: str) -> int:
        try:
            return self.values.index(value) + 1
        except ValueError:
            raise OutOfDomainError(self.field, value) from None

    def map(self, value: str) -> float:
        return self.linear.map(self.rank(value))

    def invert(self, pixel: float) -> float:
        return self.linear.invert(pixel)


def parse_hex(color: str) -> Tuple[int, int, int]:
    c = color.lstrip("#")
    if len(c) == 3:
        c = "".join(ch * 2 for ch in c)
    if len(c) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {color!r}")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


@dataclass(frozen=True)
class ColorProjector:
    """
    Piecewise-linear RGB interpolation through anchor colors.

    Values below the first stop or above the last stop take the end colors.
    Channels are rounded half up so anchors come back exactly.
    """

    field: str
    stops: Tuple[float, ...] = (0.0, 50.0, 100.0)
    anchors: Tuple[str, ...] = ("#e41a1c", "#377eb8", "#4daf4a")

    def __post_init__(self) -> None:
        if len(self.stops) != len(self.anchors) or len(self.stops) < 2:
            raise ValueError("ColorProjector needs matching stops and anchors (at least two)")
        if list(self.stops) != sorted(self.stops):
            raise ValueError("ColorProjector stops must be ascending")

    def rgb(self, value: float) -> Tuple[int, int, int]:
        value = float(value)
        stops = self.stops
        if value <= stops[0]:
            return parse_hex(self.anchors[0])
        if value >= stops[-1]:
            return parse_hex(self.anchors[-1])

        i = 0
        while value > stops[i + 1]:
            i += 1
        t = (value - stops[i]) / (stops[i + 1] - stops[i])
        a = parse_hex(self.anchors[i])
        b = parse_hex(self.anchors[i + 1])
        return tuple(int(math.floor(ca + (cb - ca) * t + 0.5)) for ca, cb in zip(a, b))

    def map(self, value: float) -> str:
        r, g, b = self.rgb(value)
        return f"#{r:02x}{g:02x}{b:02x}"


Projector = Union[LinearProjector, CategoricalProjector, OrdinalProjector]


# -----------------------------------------------------------------------------
# Builders
# -----------------------------------------------------------------------------
def numeric_domain(
    values: Iterable[float],
    zero_based: bool = False,
    headroom: float = 1.0,
    nice: bool = False,
) -> Tuple[float, float]:
    """
    [min, max] (or [0, max]) of the given values, max scaled by headroom, then
    optionally rounded outward. An empty input gives [0, 1].
    """
    series = pd.Series(list(values), dtype=float)
    if series.empty:
        return 0.0, 1.0

    lo = 0.0 if zero_based else float(series.min())
    hi = float(series.max()) * headroom
    if nice:
        lo, hi = nice_domain(lo, hi)
    return lo, hi


def project(
    spec: FieldSpec,
    working_set: pd.DataFrame,
    pixel_range: PixelRange,
    *,
    padding: float = 0.0,
    band: bool = False,
    zero_based: bool = False,
    headroom: float = 1.0,
    nice: bool = False,
    domain: Optional[Tuple[float, float]] = None,
) -> Projector:
    """
    Build a fresh projector for one field.

    Categorical and ordinal fields use their fixed enumerated domain. Numeric
    fields take their domain from the rows currently in working_set (not the
    whole Dataset) unless an explicit domain is given.
    """
    if spec.kind is FieldKind.CATEGORICAL:
        if band:
            return CategoricalProjector.band(spec.name, spec.values, pixel_range, padding)
        return CategoricalProjector.point(spec.name, spec.values, pixel_range, padding)

    if spec.kind is FieldKind.ORDINAL:
        return OrdinalProjector(field=spec.name, values=tuple(spec.values), range=pixel_range)

    if domain is None:
        column = working_set[spec.name] if spec.name in working_set.columns else []
        domain = numeric_domain(column, zero_based=zero_based, headroom=headroom, nice=nice)
    return LinearProjector(field=spec.name, domain=domain, range=pixel_range)
