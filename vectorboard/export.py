"""
DXF and SVG writers for board strokes.

Both writers fit the drawing with ``bounds.build_transform``: DXF output lands
in a unit square that is then multiplied by ``unit_scale`` (1000 turns board
metres into millimetres), SVG output is centred on the canvas with Y flipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from .bounds import Bounds, Transform, build_transform, compute_bounds
from .entities import RGBA, Point, Stroke, TextEntry

DEFAULT_UNIT_SCALE = 1000.0
NEAR_WHITE = 0.9


@dataclass(frozen=True)
class DxfExportOptions:
    unit_scale: float = DEFAULT_UNIT_SCALE
    layer: str = "0"
    bounds: Optional[Bounds] = None
    acad_version: str = "AC1015"


@dataclass(frozen=True)
class SvgExportOptions:
    unit_scale: float = DEFAULT_UNIT_SCALE
    background: str = "white"
    bounds: Optional[Bounds] = None


def is_near_white(color: RGBA) -> bool:
    return color[0] > NEAR_WHITE and color[1] > NEAR_WHITE and color[2] > NEAR_WHITE


def dxf_color_index(color: RGBA) -> int:
    """Closest AutoCAD colour index among the seven basic colours."""

    r, g, b = color[0], color[1], color[2]
    if is_near_white(color):
        return 7
    if r > 0.7 and g < 0.3 and b < 0.3:
        return 1
    if r > 0.7 and g > 0.7 and b < 0.3:
        return 2
    if r < 0.3 and g > 0.7 and b < 0.3:
        return 3
    if r < 0.3 and g > 0.7 and b > 0.7:
        return 4
    if r < 0.3 and g < 0.3 and b > 0.7:
        return 5
    if r > 0.7 and g < 0.3 and b > 0.7:
        return 6
    return 7


def svg_color(color: RGBA) -> str:
    if is_near_white(color):
        return "#000000"
    channels = [min(max(int(round(c * 255)), 0), 255) for c in color[:3]]
    return "#{:02x}{:02x}{:02x}".format(*channels)


def _drawable(strokes: Iterable[Stroke]) -> List[Stroke]:
    return [stroke for stroke in strokes if stroke.is_valid()]


def _fit(items: Sequence, manual: Optional[Bounds], width: float, height: float) -> Optional[Transform]:
    if manual is None:
        if not items:
            return None
        manual = compute_bounds(items)
    return build_transform(manual, width, height)


def export_dxf(strokes: Iterable[Stroke], options: DxfExportOptions = DxfExportOptions()) -> str:
    """
    Emit a minimal AC1015 DXF with one LWPOLYLINE per stroke; strokes with
    fewer than two points are left out.
    """

    def emit(code: str, value: str) -> str:
        return f"{code}\n{value}\n"

    drawable = _drawable(strokes)
    transform = _fit(drawable, options.bounds, 1.0, 1.0)

    chunks: list[str] = []
    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "HEADER"))
    chunks.append(emit("9", "$ACADVER"))
    chunks.append(emit("1", options.acad_version))
    chunks.append(emit("0", "ENDSEC"))

    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "TABLES"))
    chunks.append(emit("0", "TABLE"))
    chunks.append(emit("2", "LTYPE"))
    chunks.append(emit("70", "1"))
    chunks.append(emit("0", "LTYPE"))
    chunks.append(emit("2", "CONTINUOUS"))
    chunks.append(emit("70", "0"))
    chunks.append(emit("3", "Solid line"))
    chunks.append(emit("72", "65"))
    chunks.append(emit("73", "0"))
    chunks.append(emit("40", "0.0"))
    chunks.append(emit("0", "ENDTAB"))
    chunks.append(emit("0", "TABLE"))
    chunks.append(emit("2", "LAYER"))
    chunks.append(emit("70", "1"))
    chunks.append(emit("0", "LAYER"))
    chunks.append(emit("2", options.layer))
    chunks.append(emit("70", "0"))
    chunks.append(emit("62", "7"))
    chunks.append(emit("6", "CONTINUOUS"))
    chunks.append(emit("0", "ENDTAB"))
    chunks.append(emit("0", "ENDSEC"))

    chunks.append(emit("0", "SECTION"))
    chunks.append(emit("2", "ENTITIES"))
    for stroke in drawable:
        points = stroke.points
        if stroke.closed and len(points) > 2 and points[0] == points[-1]:
            points = points[:-1]
        chunks.append(emit("0", "LWPOLYLINE"))
        chunks.append(emit("8", options.layer))
        chunks.append(emit("62", str(dxf_color_index(stroke.color))))
        chunks.append(emit("90", str(len(points))))
        chunks.append(emit("70", "1" if stroke.closed else "0"))
        for point in points:
            x, y = transform.apply(point)
            chunks.append(emit("10", f"{x * options.unit_scale:.6f}"))
            chunks.append(emit("20", f"{y * options.unit_scale:.6f}"))
    chunks.append(emit("0", "ENDSEC"))
    chunks.append(emit("0", "EOF"))
    return "".join(chunks)


def _svg_point(transform: Transform, point: Point, canvas_height: float) -> Point:
    x, y = transform.apply(point)
    return x, canvas_height - y


def export_svg(
    strokes: Iterable[Stroke],
    canvas_width: float,
    canvas_height: float,
    options: SvgExportOptions = SvgExportOptions(),
    texts: Sequence[TextEntry] = (),
) -> str:
    drawable = _drawable(strokes)
    # text alone still gets placed when there is nothing else to fit
    fit_items = drawable or [entry.position for entry in texts]
    transform = _fit(fit_items, options.bounds, canvas_width, canvas_height)

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{canvas_width:g}" height="{canvas_height:g}" '
            f'viewBox="0 0 {canvas_width:g} {canvas_height:g}">'
        ),
        f'  <rect width="100%" height="100%" fill={quoteattr(options.background)}/>',
    ]
    for stroke in drawable:
        mapped = [_svg_point(transform, pt, canvas_height) for pt in stroke.loop_points()]
        parts = [f"M {mapped[0][0]:.2f},{mapped[0][1]:.2f}"]
        parts.extend(f"L {x:.2f},{y:.2f}" for x, y in mapped[1:])
        lines.append(
            f'  <path d="{" ".join(parts)}" fill="none" stroke="{svg_color(stroke.color)}" '
            f'stroke-width="{stroke.width * options.unit_scale:.2f}" '
            'stroke-linecap="round" stroke-linejoin="round"/>'
        )
    if transform is not None:
        for entry in texts:
            x, y = _svg_point(transform, entry.position, canvas_height)
            lines.append(
                f'  <text x="{x:.2f}" y="{y:.2f}" font-size="{entry.font_size}" '
                f'fill="#000000">{escape(entry.content)}</text>'
            )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
