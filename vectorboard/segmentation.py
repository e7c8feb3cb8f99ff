from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from .commands import Circle, DrawingCommand, LineTo, MoveTo
from .entities import DEFAULT_CIRCLE_SEGMENTS, DEFAULT_STROKE_WIDTH, RGBA, WHITE, CircleShape, Point, Stroke


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Point, ...]


Path = Union[Polyline, Circle]


def segment_paths(commands: Iterable[DrawingCommand]) -> List[Path]:
    """
    Split a flat command list into disjoint paths.  A circle always stands on
    its own, a ``MoveTo`` always starts a fresh polyline and a ``LineTo``
    extends the open one, so no segment ever bridges two paths.
    """

    paths: List[Path] = []
    current: List[Point] = []

    def flush() -> None:
        if current:
            paths.append(Polyline(tuple(current)))
            current.clear()

    for command in commands:
        if isinstance(command, Circle):
            flush()
            paths.append(command)
        elif isinstance(command, MoveTo):
            flush()
            current.append(command.position)
        elif isinstance(command, LineTo):
            current.append(command.position)
    flush()
    return paths


def paths_to_strokes(
    paths: Sequence[Path],
    *,
    color: RGBA = WHITE,
    width: float = DEFAULT_STROKE_WIDTH,
    circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
    kind: str = "imported",
) -> List[Stroke]:
    strokes: List[Stroke] = []
    for path in paths:
        if isinstance(path, Circle):
            stroke = CircleShape(path.center, path.radius, color, width, circle_segments).to_stroke()
            stroke.kind = kind
            strokes.append(stroke)
            continue
        if len(path.points) < 2:
            continue
        closed = len(path.points) > 2 and path.points[0] == path.points[-1]
        strokes.append(Stroke(points=list(path.points), color=color, width=width, closed=closed, kind=kind))
    return strokes
