"""
Drawing commands shared by the parsers, the live drawing tools and the
exporters.  A command list is a flat sequence of ``MoveTo``/``LineTo``/``Circle``
records; ``normalize_commands`` is the single place that enforces the rules
every consumer relies on.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from .entities import Point, Stroke
from .numeric import is_finite_point


@dataclass(frozen=True)
class MoveTo:
    position: Point


@dataclass(frozen=True)
class LineTo:
    position: Point


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float


DrawingCommand = Union[MoveTo, LineTo, Circle]


def is_valid_command(command: DrawingCommand) -> bool:
    if isinstance(command, Circle):
        return is_finite_point(command.center) and math.isfinite(command.radius) and command.radius > 0
    if isinstance(command, (MoveTo, LineTo)):
        return is_finite_point(command.position)
    return False


def normalize_commands(commands: Iterable[DrawingCommand]) -> List[DrawingCommand]:
    """
    Drop invalid commands and turn every ``LineTo`` that has no open path
    (sequence start, or right after a circle) into a ``MoveTo`` so unrelated
    points are never joined.  A ``MoveTo`` is only kept once a ``LineTo``
    follows it; a bare pen move draws nothing.
    """

    normalized: List[DrawingCommand] = []
    pending: Optional[MoveTo] = None
    path_open = False
    for command in commands:
        if not is_valid_command(command):
            continue
        if isinstance(command, Circle):
            normalized.append(command)
            pending = None
            path_open = False
        elif isinstance(command, MoveTo):
            pending = command
            path_open = False
        elif path_open:
            normalized.append(command)
        elif pending is not None:
            normalized.extend((pending, command))
            pending = None
            path_open = True
        else:
            pending = MoveTo(command.position)
    return normalized


def commands_from_points(points: Sequence[Point]) -> List[DrawingCommand]:
    if not points:
        return []
    commands: List[DrawingCommand] = [MoveTo(tuple(points[0]))]
    commands.extend(LineTo(tuple(pt)) for pt in points[1:])
    return commands


def commands_from_strokes(strokes: Iterable[Stroke]) -> List[DrawingCommand]:
    commands: List[DrawingCommand] = []
    for stroke in strokes:
        commands.extend(commands_from_points(stroke.loop_points()))
    return commands


def iter_positions(commands: Iterable[DrawingCommand]) -> Iterator[Point]:
    for command in commands:
        if isinstance(command, Circle):
            yield command.center
        else:
            yield command.position
