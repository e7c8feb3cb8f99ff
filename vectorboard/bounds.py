from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from .commands import Circle, DrawingCommand, LineTo, MoveTo
from .entities import Point, Stroke

BOUNDS_PADDING = 0.1
MIN_EXTENT = 1e-6
BOARD_FILL = 0.8
BOARD_SCALE_RANGE = (1e-3, 10.0)

BoundsItem = Union[Stroke, Circle, MoveTo, LineTo, Sequence[float]]


@dataclass(frozen=True)
class Bounds:
    min: Point
    max: Point

    @property
    def width(self) -> float:
        return self.max[0] - self.min[0]

    @property
    def height(self) -> float:
        return self.max[1] - self.min[1]

    @property
    def center(self) -> Point:
        return (self.min[0] + self.max[0]) / 2.0, (self.min[1] + self.max[1]) / 2.0

    def translate(self, dx: float, dy: float) -> "Bounds":
        return Bounds((self.min[0] + dx, self.min[1] + dy), (self.max[0] + dx, self.max[1] + dy))


@dataclass(frozen=True)
class Transform:
    scale: float
    offset: Point

    def apply(self, point: Sequence[float]) -> Point:
        return point[0] * self.scale + self.offset[0], point[1] * self.scale + self.offset[1]


def _extent_points(item: BoundsItem) -> Iterator[Point]:
    if isinstance(item, Stroke):
        yield from item.points
    elif isinstance(item, Circle):
        cx, cy = item.center
        yield cx - item.radius, cy - item.radius
        yield cx + item.radius, cy + item.radius
    elif isinstance(item, (MoveTo, LineTo)):
        yield item.position
    else:
        yield item[0], item[1]


def compute_bounds(items: Iterable[BoundsItem], padding: float = BOUNDS_PADDING) -> Bounds:
    """
    Axis-aligned bounds over strokes, circles, commands or bare points, grown
    by ``padding`` times the extent on both sides of each axis.
    """

    xs = []
    ys = []
    for item in items:
        for x, y in _extent_points(item):
            xs.append(x)
            ys.append(y)
    if not xs:
        raise ValueError("cannot compute bounds of an empty drawing")

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    pad_x = (max_x - min_x) * padding
    pad_y = (max_y - min_y) * padding
    return Bounds((min_x - pad_x, min_y - pad_y), (max_x + pad_x, max_y + pad_y))


def command_bounds(commands: Iterable[DrawingCommand], padding: float = 0.0) -> Bounds:
    return compute_bounds(commands, padding=padding)


def build_transform(
    bounds: Bounds,
    target_width: float,
    target_height: float,
    *,
    fill: float = BOARD_FILL,
    scale_range: Optional[Tuple[float, float]] = None,
    target_center: Optional[Point] = None,
) -> Transform:
    """
    Uniform scale + offset that fits ``bounds`` into a ``fill`` fraction of the
    target and puts the bounds centre on ``target_center`` (the target's own
    centre when omitted).
    """

    width = max(bounds.width, MIN_EXTENT)
    height = max(bounds.height, MIN_EXTENT)
    scale = min(target_width * fill / width, target_height * fill / height)
    if scale_range is not None:
        low, high = scale_range
        scale = min(max(scale, low), high)
    if target_center is None:
        target_center = (target_width / 2.0, target_height / 2.0)
    cx, cy = bounds.center
    return Transform(scale, (target_center[0] - cx * scale, target_center[1] - cy * scale))
