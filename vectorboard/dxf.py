"""
Permissive DXF reader.

DXF files reaching the whiteboard come from all kinds of exporters, and a fair
share of them are truncated or hand-edited.  Parsing therefore happens in
three passes of decreasing structure-awareness; a later pass only runs when the
previous one produced nothing:

1. structured: group-code pairs inside the ENTITIES section, one extractor per
   supported entity kind;
2. grouped: a line scan that collects coordinate pairs per drawable entity;
3. raw: every coordinate pair in the file as one polyline.

Nothing in here raises on file content.  Bad numbers and incomplete entities
are dropped (and reported to an optional ``ImportLogger``).
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .commands import Circle, DrawingCommand, LineTo, MoveTo, normalize_commands
from .entities import Point
from .logging import ImportLogger
from .numeric import try_parse_coordinate

ARC_SEGMENTS = 16
CIRCLE_LOOKAHEAD = 20
SHORT_ENTITY_WINDOW = 64
VERTEX_ENTITY_WINDOW = 100_000

GroupPair = Tuple[str, str]


class EntityKind(str, Enum):
    LINE = "LINE"
    CIRCLE = "CIRCLE"
    ARC = "ARC"
    LWPOLYLINE = "LWPOLYLINE"
    POLYLINE = "POLYLINE"
    SPLINE = "SPLINE"
    ELLIPSE = "ELLIPSE"


class DxfTier(str, Enum):
    STRUCTURED = "structured"
    GROUPED = "grouped"
    RAW = "raw"


# Upper bound on group pairs read per entity.
SCAN_WINDOWS: Dict[EntityKind, int] = {
    EntityKind.LINE: SHORT_ENTITY_WINDOW,
    EntityKind.CIRCLE: SHORT_ENTITY_WINDOW,
    EntityKind.ARC: SHORT_ENTITY_WINDOW,
    EntityKind.ELLIPSE: SHORT_ENTITY_WINDOW,
    EntityKind.LWPOLYLINE: VERTEX_ENTITY_WINDOW,
    EntityKind.POLYLINE: VERTEX_ENTITY_WINDOW,
    EntityKind.SPLINE: VERTEX_ENTITY_WINDOW,
}

# Entity kinds whose coordinates form one path in the grouped pass.
GROUPED_KINDS = frozenset({"LINE", "LWPOLYLINE", "POLYLINE", "ARC", "SPLINE"})

_ENTITY_NAME_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_X_CODES = ("10", "11")
_Y_CODES = ("20", "21")


@dataclass(frozen=True)
class DxfParseResult:
    commands: List[DrawingCommand]
    tier: Optional[DxfTier]


def _read_pairs(text: str) -> List[GroupPair]:
    lines = text.lstrip("\ufeff").splitlines()
    return [(lines[idx].strip(), lines[idx + 1].strip()) for idx in range(0, len(lines) - 1, 2)]


def _content_lines(text: str) -> List[str]:
    stripped = (line.strip() for line in text.lstrip("\ufeff").splitlines())
    return [line for line in stripped if line]


def _is_entity_start(lines: Sequence[str], idx: int) -> bool:
    return lines[idx] == "0" and idx + 1 < len(lines) and bool(_ENTITY_NAME_RE.match(lines[idx + 1]))


def entity_census(text: str) -> Counter:
    lines = _content_lines(text)
    counts: Counter = Counter()
    for idx in range(len(lines) - 1):
        if _is_entity_start(lines, idx):
            counts[lines[idx + 1].upper()] += 1
    return counts


# -------- structured pass --------


def _find_entities_section(pairs: Sequence[GroupPair]) -> Optional[int]:
    for idx, (code, value) in enumerate(pairs):
        if code == "2" and value.upper() == "ENTITIES":
            return idx + 1
    return None


def _collect_fields(pairs: Sequence[GroupPair], idx: int, window: int) -> Tuple[List[GroupPair], int]:
    """Read the pairs of one entity; returns them and the index of the next ``0`` code."""

    fields: List[GroupPair] = []
    while idx < len(pairs) and pairs[idx][0] != "0":
        if len(fields) < window:
            fields.append(pairs[idx])
        idx += 1
    return fields, idx


def _scalar_fields(
    entity: str,
    fields: Sequence[GroupPair],
    wanted: Sequence[str],
    logger: Optional[ImportLogger],
) -> Dict[str, float]:
    values: Dict[str, float] = {}
    for code, raw in fields:
        if code not in wanted:
            continue
        number = try_parse_coordinate(raw)
        if number is None:
            if logger:
                logger.field_dropped(entity, code, raw)
            continue
        values[code] = number
    return values


def _closed_flag(fields: Sequence[GroupPair]) -> bool:
    for code, raw in fields:
        if code != "70":
            continue
        number = try_parse_coordinate(raw)
        if number is not None and number.is_integer():
            return bool(int(number) & 1)
    return False


def _vertex_list(entity: str, fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[Point]:
    vertices: List[Point] = []
    pending_x: Optional[float] = None
    for code, raw in fields:
        if code == "10":
            pending_x = try_parse_coordinate(raw)
            if pending_x is None and logger:
                logger.field_dropped(entity, code, raw)
            continue
        if code == "20" and pending_x is not None:
            y = try_parse_coordinate(raw)
            if y is None:
                if logger:
                    logger.field_dropped(entity, code, raw)
            else:
                vertices.append((pending_x, y))
        pending_x = None
    return vertices


def _polyline_commands(
    entity: str,
    vertices: Sequence[Point],
    closed: bool,
    logger: Optional[ImportLogger],
) -> List[DrawingCommand]:
    if len(vertices) < 2:
        if logger:
            logger.entity_dropped(entity, f"{len(vertices)} usable vertex/vertices")
        return []
    points = list(vertices)
    if closed and points[0] != points[-1]:
        points.append(points[0])
    commands: List[DrawingCommand] = [MoveTo(points[0])]
    commands.extend(LineTo(pt) for pt in points[1:])
    return commands


def _missing(values: Dict[str, float], required: Sequence[str]) -> List[str]:
    return [code for code in required if code not in values]


def _line_entity(fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[DrawingCommand]:
    required = ("10", "20", "11", "21")
    values = _scalar_fields("LINE", fields, required, logger)
    missing = _missing(values, required)
    if missing:
        if logger:
            logger.entity_dropped("LINE", f"missing {','.join(missing)}")
        return []
    start = (values["10"], values["20"])
    end = (values["11"], values["21"])
    if start == end:
        if logger:
            logger.entity_dropped("LINE", "zero length")
        return []
    return [MoveTo(start), LineTo(end)]


def _circle_entity(fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[DrawingCommand]:
    required = ("10", "20", "40")
    values = _scalar_fields("CIRCLE", fields, required, logger)
    missing = _missing(values, required)
    if missing or values["40"] <= 0:
        if logger:
            logger.entity_dropped("CIRCLE", f"missing {','.join(missing)}" if missing else "radius <= 0")
        return []
    return [Circle((values["10"], values["20"]), values["40"])]


def _arc_entity(fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[DrawingCommand]:
    required = ("10", "20", "40", "50", "51")
    values = _scalar_fields("ARC", fields, required, logger)
    missing = _missing(values, required)
    if missing or values["40"] <= 0:
        if logger:
            logger.entity_dropped("ARC", f"missing {','.join(missing)}" if missing else "radius <= 0")
        return []
    cx, cy, radius = values["10"], values["20"], values["40"]
    start = math.radians(values["50"])
    # DXF arcs run counter-clockwise from the start angle to the end angle.
    sweep = (math.radians(values["51"]) - start) % math.tau
    if math.isclose(sweep, 0.0, abs_tol=1e-12):
        sweep = math.tau
    points = []
    for step in range(ARC_SEGMENTS + 1):
        angle = start + sweep * step / ARC_SEGMENTS
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return [MoveTo(points[0])] + [LineTo(pt) for pt in points[1:]]


def _lwpolyline_entity(fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[DrawingCommand]:
    vertices = _vertex_list("LWPOLYLINE", fields, logger)
    return _polyline_commands("LWPOLYLINE", vertices, _closed_flag(fields), logger)


def _spline_entity(fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[DrawingCommand]:
    vertices = _vertex_list("SPLINE", fields, logger)
    return _polyline_commands("SPLINE", vertices, _closed_flag(fields), logger)


def _ellipse_entity(fields: Sequence[GroupPair], logger: Optional[ImportLogger]) -> List[DrawingCommand]:
    values = _scalar_fields("ELLIPSE", fields, ("10", "20", "11", "21", "40"), logger)
    missing = _missing(values, ("10", "20"))
    if missing:
        if logger:
            logger.entity_dropped("ELLIPSE", f"missing {','.join(missing)}")
        return []
    if "11" in values and "21" in values:
        major = math.hypot(values["11"], values["21"])
        ratio = values.get("40", 1.0)
        if not 0 < ratio <= 1:
            ratio = 1.0
        radius = major * (1.0 + ratio) / 2.0
    else:
        radius = values.get("40", 0.0)
    if radius <= 0:
        if logger:
            logger.entity_dropped("ELLIPSE", "no usable radius")
        return []
    return [Circle((values["10"], values["20"]), radius)]


def _polyline_vertices(
    pairs: Sequence[GroupPair],
    idx: int,
    logger: Optional[ImportLogger],
) -> Tuple[List[Point], int]:
    """Collect the VERTEX entities that follow an old-style POLYLINE header."""

    vertices: List[Point] = []
    while idx < len(pairs) and pairs[idx] == ("0", "VERTEX"):
        fields, idx = _collect_fields(pairs, idx + 1, SHORT_ENTITY_WINDOW)
        values = _scalar_fields("VERTEX", fields, ("10", "20"), logger)
        if "10" in values and "20" in values:
            vertices.append((values["10"], values["20"]))
        elif logger:
            logger.entity_dropped("VERTEX", "missing 10/20")
    return vertices, idx


EntityExtractor = Callable[[Sequence[GroupPair], Optional[ImportLogger]], List[DrawingCommand]]

_EXTRACTORS: Dict[EntityKind, EntityExtractor] = {
    EntityKind.LINE: _line_entity,
    EntityKind.CIRCLE: _circle_entity,
    EntityKind.ARC: _arc_entity,
    EntityKind.LWPOLYLINE: _lwpolyline_entity,
    EntityKind.SPLINE: _spline_entity,
    EntityKind.ELLIPSE: _ellipse_entity,
}

_KINDS_BY_NAME = {kind.value: kind for kind in EntityKind}


def parse_dxf_structured(text: str, *, logger: Optional[ImportLogger] = None) -> List[DrawingCommand]:
    pairs = _read_pairs(text)
    idx = _find_entities_section(pairs)
    if idx is None:
        if logger:
            logger.note("structured: no ENTITIES section")
        return []

    commands: List[DrawingCommand] = []
    while idx < len(pairs):
        code, value = pairs[idx]
        if code != "0":
            idx += 1
            continue
        name = value.upper()
        if name in ("ENDSEC", "EOF"):
            break
        kind = _KINDS_BY_NAME.get(name)
        if kind is None:
            idx += 1
            continue
        fields, idx = _collect_fields(pairs, idx + 1, SCAN_WINDOWS[kind])
        if kind is EntityKind.POLYLINE:
            vertices, idx = _polyline_vertices(pairs, idx, logger)
            if not vertices:
                vertices = _vertex_list("POLYLINE", fields, logger)
            commands.extend(_polyline_commands("POLYLINE", vertices, _closed_flag(fields), logger))
        else:
            commands.extend(_EXTRACTORS[kind](fields, logger))
    return normalize_commands(commands)


# -------- line-scan passes --------


def _pair_at(lines: Sequence[str], idx: int) -> Optional[Point]:
    if idx + 3 >= len(lines):
        return None
    if lines[idx] not in _X_CODES or lines[idx + 2] not in _Y_CODES:
        return None
    x = try_parse_coordinate(lines[idx + 1])
    y = try_parse_coordinate(lines[idx + 3])
    if x is None or y is None:
        return None
    return x, y


def _lookahead_circles(lines: Sequence[str]) -> List[Circle]:
    circles: List[Circle] = []
    for idx, line in enumerate(lines):
        if line.upper() != "CIRCLE":
            continue
        found: Dict[str, float] = {}
        limit = min(idx + CIRCLE_LOOKAHEAD, len(lines) - 1)
        for pos in range(idx + 1, limit):
            if _is_entity_start(lines, pos):
                break
            if lines[pos] in ("10", "20", "40"):
                number = try_parse_coordinate(lines[pos + 1])
                if number is not None:
                    found.setdefault(lines[pos], number)
        if len(found) == 3 and found["40"] > 0:
            circles.append(Circle((found["10"], found["20"]), found["40"]))
    return circles


def parse_dxf_grouped(text: str, *, logger: Optional[ImportLogger] = None) -> List[DrawingCommand]:
    lines = _content_lines(text)
    groups: List[List[Point]] = []
    current: List[Point] = []
    group_kind: Optional[str] = None

    idx = 0
    while idx < len(lines) - 1:
        if _is_entity_start(lines, idx):
            name = lines[idx + 1].upper()
            idx += 2
            if name == "VERTEX" and group_kind in ("POLYLINE", "VERTEX"):
                if group_kind == "POLYLINE":
                    # the POLYLINE header point is an elevation placeholder
                    current.clear()
                group_kind = "VERTEX"
                continue
            if current:
                groups.append(current)
                current = []
            group_kind = name if name in GROUPED_KINDS else None
            continue
        if group_kind is not None:
            point = _pair_at(lines, idx)
            if point is not None:
                current.append(point)
                idx += 4
                continue
        idx += 1
    if current:
        groups.append(current)

    commands: List[DrawingCommand] = []
    for group in groups:
        if len(group) < 2:
            continue
        commands.append(MoveTo(group[0]))
        commands.extend(LineTo(pt) for pt in group[1:])
    circles = _lookahead_circles(lines)
    commands.extend(circles)
    if logger:
        logger.note(f"grouped: {len(groups)} group(s), {len(circles)} circle(s)")
    return normalize_commands(commands)


def extract_all_coordinates(text: str) -> List[Point]:
    lines = _content_lines(text)
    points: List[Point] = []
    idx = 0
    while idx < len(lines):
        point = _pair_at(lines, idx)
        if point is not None:
            points.append(point)
            idx += 4
        else:
            idx += 1
    return points


def parse_dxf_raw(text: str, *, logger: Optional[ImportLogger] = None) -> List[DrawingCommand]:
    points = extract_all_coordinates(text)
    if logger:
        logger.note(f"raw: {len(points)} coordinate pair(s)")
    if len(points) < 2:
        return []
    return normalize_commands([MoveTo(points[0])] + [LineTo(pt) for pt in points[1:]])


def parse_dxf_detailed(text: str, *, logger: Optional[ImportLogger] = None) -> DxfParseResult:
    if logger:
        logger.census(entity_census(text))
    tiers = (
        (DxfTier.STRUCTURED, parse_dxf_structured),
        (DxfTier.GROUPED, parse_dxf_grouped),
        (DxfTier.RAW, parse_dxf_raw),
    )
    for tier, parser in tiers:
        commands = parser(text, logger=logger)
        if logger:
            logger.tier(tier.value, len(commands))
        if commands:
            return DxfParseResult(commands, tier)
    if logger:
        logger.note("no drawable data found")
    return DxfParseResult([], None)


def parse_dxf(text: str, *, logger: Optional[ImportLogger] = None) -> List[DrawingCommand]:
    return parse_dxf_detailed(text, logger=logger).commands
