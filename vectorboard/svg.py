"""
SVG reader for the shapes the whiteboard can draw back.

Only geometry is read: ``line``, ``rect``, ``circle``, ``polyline``,
``polygon`` and ``path`` (``M L H V Z C`` plus their relative forms).  SVG grows
Y downward and the board grows it upward, so every Y is negated on the way in.
Transforms, styles and units other than ``px`` are ignored.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional, Sequence, Tuple

from .commands import Circle, DrawingCommand, LineTo, MoveTo, normalize_commands
from .entities import Point
from .logging import ImportLogger
from .numeric import try_parse_coordinate

BEZIER_SEGMENTS = 10

_PATH_TOKEN_RE = re.compile(r"[MmLlHhVvZzCcSsQqTtAa]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_POINT_SPLIT_RE = re.compile(r"[\s,]+")

# Operand counts; S Q T A are recognised so their operands can be skipped.
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7}


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def _iter_shapes(element: ET.Element) -> Iterator[ET.Element]:
    if _local_name(element.tag) == "defs":
        return
    yield element
    for child in element:
        yield from _iter_shapes(child)


def _number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = raw.strip()
    if text.endswith("px"):
        text = text[:-2]
    return try_parse_coordinate(text)


def _attributes(element: ET.Element, names: Sequence[str], required: Sequence[str] = ()) -> Optional[List[float]]:
    """Numeric attributes; absent optional ones default to 0, bad ones void the element."""

    values: List[float] = []
    for name in names:
        raw = element.get(name)
        if raw is None:
            if name in required:
                return None
            values.append(0.0)
            continue
        number = _number(raw)
        if number is None:
            return None
        values.append(number)
    return values


def _flip(x: float, y: float) -> Point:
    return x, -y


def _parse_points(text: str) -> List[Point]:
    tokens = [tok for tok in _POINT_SPLIT_RE.split(text.strip()) if tok]
    points: List[Point] = []
    for idx in range(0, len(tokens) - 1, 2):
        x = try_parse_coordinate(tokens[idx])
        y = try_parse_coordinate(tokens[idx + 1])
        if x is None or y is None:
            continue
        points.append(_flip(x, y))
    return points


def _cubic_bezier(p0: Point, p1: Point, p2: Point, p3: Point, segments: int = BEZIER_SEGMENTS) -> List[Point]:
    """Points at t = 1/segments .. 1 on the cubic Bernstein curve."""

    points: List[Point] = []
    for step in range(1, segments + 1):
        t = step / segments
        u = 1.0 - t
        b0 = u * u * u
        b1 = 3 * u * u * t
        b2 = 3 * u * t * t
        b3 = t * t * t
        points.append(
            (
                b0 * p0[0] + b1 * p1[0] + b2 * p2[0] + b3 * p3[0],
                b0 * p0[1] + b1 * p1[1] + b2 * p2[1] + b3 * p3[1],
            )
        )
    return points


def _take_operands(tokens: Sequence[str], idx: int, count: int) -> Tuple[Optional[List[float]], int]:
    """Read ``count`` numeric tokens; on a short or bad group skip to the next letter."""

    values: List[float] = []
    pos = idx
    while pos < len(tokens) and len(values) < count and not tokens[pos].isalpha():
        number = try_parse_coordinate(tokens[pos])
        pos += 1
        if number is None:
            break
        values.append(number)
    if len(values) == count:
        return values, pos
    while pos < len(tokens) and not tokens[pos].isalpha():
        pos += 1
    return None, pos


def _parse_path_data(data: str, logger: Optional[ImportLogger] = None) -> List[DrawingCommand]:
    tokens = _PATH_TOKEN_RE.findall(data)
    commands: List[DrawingCommand] = []
    # cursor and subpath start stay in SVG space; Y is flipped on emit
    cx = cy = 0.0
    sx = sy = 0.0
    path_open = False
    op: Optional[str] = None

    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        if token.isalpha():
            idx += 1
            if token in "Zz":
                if path_open:
                    commands.append(LineTo(_flip(sx, sy)))
                cx, cy = sx, sy
                op = None
            else:
                op = token
            continue
        if op is None:
            idx += 1
            continue

        upper = op.upper()
        relative = op != upper
        args, idx = _take_operands(tokens, idx, _ARITY[upper])
        if args is None:
            if logger:
                logger.field_dropped("path", op, "incomplete operands")
            continue

        if upper == "M":
            cx, cy = (cx + args[0], cy + args[1]) if relative else (args[0], args[1])
            sx, sy = cx, cy
            commands.append(MoveTo(_flip(cx, cy)))
            path_open = True
            # further pairs after a moveto are implicit linetos
            op = "l" if relative else "L"
        elif upper == "L":
            cx, cy = (cx + args[0], cy + args[1]) if relative else (args[0], args[1])
            commands.append(LineTo(_flip(cx, cy)))
        elif upper == "H":
            cx = cx + args[0] if relative else args[0]
            commands.append(LineTo(_flip(cx, cy)))
        elif upper == "V":
            cy = cy + args[0] if relative else args[0]
            commands.append(LineTo(_flip(cx, cy)))
        elif upper == "C":
            base_x, base_y = (cx, cy) if relative else (0.0, 0.0)
            c1 = (base_x + args[0], base_y + args[1])
            c2 = (base_x + args[2], base_y + args[3])
            end = (base_x + args[4], base_y + args[5])
            for x, y in _cubic_bezier((cx, cy), c1, c2, end):
                commands.append(LineTo(_flip(x, y)))
            cx, cy = end
        elif logger:
            logger.field_dropped("path", op, "unsupported operator")
    return commands


def _line(element: ET.Element) -> List[DrawingCommand]:
    values = _attributes(element, ("x1", "y1", "x2", "y2"))
    if values is None:
        return []
    x1, y1, x2, y2 = values
    return [MoveTo(_flip(x1, y1)), LineTo(_flip(x2, y2))]


def _rect(element: ET.Element) -> List[DrawingCommand]:
    values = _attributes(element, ("x", "y", "width", "height"), required=("width", "height"))
    if values is None:
        return []
    x, y, width, height = values
    if width <= 0 or height <= 0:
        return []
    corners = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
    commands: List[DrawingCommand] = []
    for idx, (ax, ay) in enumerate(corners):
        bx, by = corners[(idx + 1) % len(corners)]
        commands.append(MoveTo(_flip(ax, ay)))
        commands.append(LineTo(_flip(bx, by)))
    return commands


def _circle(element: ET.Element) -> List[DrawingCommand]:
    values = _attributes(element, ("cx", "cy", "r"), required=("r",))
    if values is None or values[2] <= 0:
        return []
    cx, cy, radius = values
    return [Circle(_flip(cx, cy), radius)]


def _poly(element: ET.Element, closed: bool) -> List[DrawingCommand]:
    points = _parse_points(element.get("points", ""))
    if len(points) < 2:
        return []
    if closed:
        points.append(points[0])
    return [MoveTo(points[0])] + [LineTo(pt) for pt in points[1:]]


def parse_svg(xml_text: str, *, logger: Optional[ImportLogger] = None) -> List[DrawingCommand]:
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        if logger:
            logger.note(f"svg: malformed XML ({exc})")
        return []

    commands: List[DrawingCommand] = []
    for element in _iter_shapes(root):
        name = _local_name(element.tag)
        if name == "line":
            produced = _line(element)
        elif name == "rect":
            produced = _rect(element)
        elif name == "circle":
            produced = _circle(element)
        elif name in ("polyline", "polygon"):
            produced = _poly(element, closed=name == "polygon")
        elif name == "path":
            produced = _parse_path_data(element.get("d", ""), logger)
        else:
            continue
        if not produced and logger:
            logger.entity_dropped(name, "no usable geometry")
        commands.extend(produced)
    if logger:
        logger.tier("svg", len(commands))
    return normalize_commands(commands)
