from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

Point = Tuple[float, float]
RGBA = Tuple[float, float, float, float]

WHITE: RGBA = (1.0, 1.0, 1.0, 1.0)
RED: RGBA = (1.0, 0.0, 0.0, 1.0)

MIN_STROKE_POINTS = 2
DEFAULT_STROKE_WIDTH = 0.01
DEFAULT_CIRCLE_SEGMENTS = 32


@dataclass
class Stroke:
    points: List[Point]
    color: RGBA = WHITE
    width: float = DEFAULT_STROKE_WIDTH
    closed: bool = False
    kind: str = "freehand"
    visible: bool = True

    def is_valid(self) -> bool:
        if len(self.points) < MIN_STROKE_POINTS:
            return False
        if not (math.isfinite(self.width) and self.width > 0):
            return False
        return all(math.isfinite(x) and math.isfinite(y) for x, y in self.points)

    def center(self) -> Point:
        xs = [pt[0] for pt in self.points]
        ys = [pt[1] for pt in self.points]
        return (min(xs) + max(xs)) / 2.0, (min(ys) + max(ys)) / 2.0

    def translate(self, dx: float, dy: float) -> None:
        self.points[:] = [(x + dx, y + dy) for x, y in self.points]

    def scale_about(self, origin: Point, factor: float) -> None:
        ox, oy = origin
        self.points[:] = [(ox + (x - ox) * factor, oy + (y - oy) * factor) for x, y in self.points]

    def loop_points(self) -> List[Point]:
        """Points with the first vertex repeated at the end for closed strokes."""

        if self.closed and self.points and self.points[0] != self.points[-1]:
            return list(self.points) + [self.points[0]]
        return list(self.points)


@dataclass(frozen=True)
class CircleShape:
    center: Point
    radius: float
    color: RGBA = WHITE
    width: float = DEFAULT_STROKE_WIDTH
    segments: int = DEFAULT_CIRCLE_SEGMENTS

    def sample_points(self) -> List[Point]:
        segments = max(3, int(self.segments))
        cx, cy = self.center
        points: List[Point] = []
        for step in range(segments):
            angle = 2 * math.pi * step / segments
            points.append((cx + self.radius * math.cos(angle), cy + self.radius * math.sin(angle)))
        points.append(points[0])
        return points

    def to_stroke(self) -> Stroke:
        return Stroke(
            points=self.sample_points(),
            color=self.color,
            width=self.width,
            closed=True,
            kind="circle",
        )


@dataclass
class TextEntry:
    content: str
    position: Point
    font_size: int = 12
    box: Tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class Board:
    width: float = 1.0
    height: float = 1.0
    origin: Point = (0.0, 0.0)

    def clamp(self, point: Point, margin: Tuple[float, float] = (0.0, 0.0)) -> Point:
        half_w = max(self.width / 2.0 - margin[0], 0.0)
        half_h = max(self.height / 2.0 - margin[1], 0.0)
        ox, oy = self.origin
        x = min(max(point[0], ox - half_w), ox + half_w)
        y = min(max(point[1], oy - half_h), oy + half_h)
        return x, y

    def contains(self, point: Point) -> bool:
        return self.clamp(point) == (point[0], point[1])

