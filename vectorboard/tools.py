"""
Per-tool drawing state machines.

A ``DrawingTool`` is created for one mode and driven by the host's input
events::

    IDLE --begin--> DRAWING --commit/cancel--> IDLE
    IDLE --begin_drag/begin_resize--> EDITING --end_edit--> IDLE

Only committed strokes leave the tool; an in-progress shape is a preview that
can be dropped at any time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .entities import DEFAULT_CIRCLE_SEGMENTS, DEFAULT_STROKE_WIDTH, RGBA, WHITE, Board, CircleShape, Point, Stroke


class ToolMode(str, Enum):
    FREEHAND = "freehand"
    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    POLYGON = "polygon"


class ToolState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    EDITING = "editing"


class ToolStateError(RuntimeError):
    """Raised when a tool receives an event its current state cannot take."""


@dataclass(frozen=True)
class ToolSettings:
    color: RGBA = WHITE
    width: float = DEFAULT_STROKE_WIDTH
    min_point_distance: float = 0.01
    min_line_length: float = 0.01
    min_rect_size: float = 0.01
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS
    polygon_sides: int = 6
    min_radius: float = 0.05
    max_radius: float = 0.5
    constrain_to_board: bool = True


def _distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def regular_polygon(center: Point, radius: float, sides: int) -> List[Point]:
    """Closed regular polygon with its first vertex straight above ``center``."""

    sides = max(3, int(sides))
    cx, cy = center
    points = []
    for step in range(sides):
        angle = math.pi / 2 + 2 * math.pi * step / sides
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    points.append(points[0])
    return points


def rectangle_corners(a: Point, b: Point) -> List[Point]:
    left, right = min(a[0], b[0]), max(a[0], b[0])
    bottom, top = min(a[1], b[1]), max(a[1], b[1])
    return [(left, top), (right, top), (right, bottom), (left, bottom), (left, top)]


class DrawingTool:
    def __init__(self, mode: ToolMode, board: Optional[Board] = None, settings: Optional[ToolSettings] = None) -> None:
        self.mode = ToolMode(mode)
        self.board = board or Board()
        self.settings = settings or ToolSettings()
        self.state = ToolState.IDLE
        self._points: List[Point] = []
        self._anchor: Optional[Point] = None
        self._cursor: Optional[Point] = None
        self._edit_stroke: Optional[Stroke] = None
        self._edit_kind: Optional[str] = None
        self._grab_offset: Point = (0.0, 0.0)
        self._radius = 0.0

    def _require(self, state: ToolState, event: str) -> None:
        if self.state is not state:
            raise ToolStateError(f"{self.mode.value} tool cannot {event} while {self.state.value}")

    def _constrain(self, point: Point) -> Point:
        point = (float(point[0]), float(point[1]))
        if self.settings.constrain_to_board:
            return self.board.clamp(point)
        return point

    def _reset(self) -> None:
        self.state = ToolState.IDLE
        self._points = []
        self._anchor = None
        self._cursor = None
        self._edit_stroke = None
        self._edit_kind = None
        self._grab_offset = (0.0, 0.0)
        self._radius = 0.0

    # -------- drawing --------

    def begin(self, point: Point) -> None:
        self._require(ToolState.IDLE, "begin a stroke")
        start = self._constrain(point)
        self._anchor = start
        self._cursor = start
        self._points = [start]
        self.state = ToolState.DRAWING

    def extend(self, point: Point) -> None:
        self._require(ToolState.DRAWING, "extend a stroke")
        current = self._constrain(point)
        self._cursor = current
        if self.mode is ToolMode.FREEHAND and _distance(self._points[-1], current) > self.settings.min_point_distance:
            self._points.append(current)

    def _shape_radius(self) -> float:
        return min(_distance(self._anchor, self._cursor), self.settings.max_radius)

    def preview(self) -> List[Point]:
        if self.state is not ToolState.DRAWING:
            return []
        if self.mode is ToolMode.FREEHAND:
            return list(self._points)
        if self.mode is ToolMode.LINE:
            return [self._anchor, self._cursor]
        if self.mode is ToolMode.RECTANGLE:
            return rectangle_corners(self._anchor, self._cursor)
        if self.mode is ToolMode.CIRCLE:
            return CircleShape(self._anchor, self._shape_radius(), segments=self.settings.circle_segments).sample_points()
        return regular_polygon(self._anchor, self._shape_radius(), self.settings.polygon_sides)

    def _build_stroke(self) -> Optional[Stroke]:
        settings = self.settings
        if self.mode is ToolMode.FREEHAND:
            if len(self._points) < 2:
                return None
            return Stroke(list(self._points), settings.color, settings.width, kind="freehand")
        if self.mode is ToolMode.LINE:
            if _distance(self._anchor, self._cursor) < settings.min_line_length:
                return None
            return Stroke([self._anchor, self._cursor], settings.color, settings.width, kind="line")
        if self.mode is ToolMode.RECTANGLE:
            width = abs(self._cursor[0] - self._anchor[0])
            height = abs(self._cursor[1] - self._anchor[1])
            if width < settings.min_rect_size or height < settings.min_rect_size:
                return None
            points = rectangle_corners(self._anchor, self._cursor)
            return Stroke(points, settings.color, settings.width, closed=True, kind="rectangle")

        if _distance(self._anchor, self._cursor) < settings.min_radius:
            return None
        radius = self._shape_radius()
        if self.mode is ToolMode.CIRCLE:
            shape = CircleShape(self._anchor, radius, settings.color, settings.width, settings.circle_segments)
            return shape.to_stroke()
        points = regular_polygon(self._anchor, radius, settings.polygon_sides)
        return Stroke(points, settings.color, settings.width, closed=True, kind="polygon")

    def commit(self) -> Optional[Stroke]:
        """Finish the shape; ``None`` means it was too small and was discarded."""

        self._require(ToolState.DRAWING, "commit")
        try:
            return self._build_stroke()
        finally:
            self._reset()

    def cancel(self) -> None:
        if self.state is ToolState.DRAWING:
            self._reset()

    # -------- editing committed strokes --------

    def begin_drag(self, stroke: Stroke, grab_point: Point) -> None:
        self._require(ToolState.IDLE, "start dragging")
        cx, cy = stroke.center()
        self._edit_stroke = stroke
        self._edit_kind = "drag"
        self._grab_offset = (cx - grab_point[0], cy - grab_point[1])
        self.state = ToolState.EDITING

    def drag_to(self, point: Point) -> Point:
        self._require(ToolState.EDITING, "drag")
        if self._edit_kind != "drag":
            raise ToolStateError("drag_to called during a resize")
        target = (point[0] + self._grab_offset[0], point[1] + self._grab_offset[1])
        if self.settings.constrain_to_board:
            target = self.board.clamp(target)
        cx, cy = self._edit_stroke.center()
        self._edit_stroke.translate(target[0] - cx, target[1] - cy)
        return target

    def begin_resize(self, stroke: Stroke) -> float:
        self._require(ToolState.IDLE, "start resizing")
        center = stroke.center()
        radius = max((_distance(center, pt) for pt in stroke.points), default=0.0)
        if radius <= 0:
            raise ToolStateError("cannot resize a stroke without extent")
        self._edit_stroke = stroke
        self._edit_kind = "resize"
        self._radius = radius
        self.state = ToolState.EDITING
        return radius

    def resize_by(self, delta: float) -> float:
        self._require(ToolState.EDITING, "resize")
        if self._edit_kind != "resize":
            raise ToolStateError("resize_by called during a drag")
        target = min(max(self._radius + delta, self.settings.min_radius), self.settings.max_radius)
        self._edit_stroke.scale_about(self._edit_stroke.center(), target / self._radius)
        self._radius = target
        return target

    def end_edit(self) -> Stroke:
        self._require(ToolState.EDITING, "end an edit")
        stroke = self._edit_stroke
        self._reset()
        return stroke
