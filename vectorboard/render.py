"""
Rasterise board strokes or parsed drawings to PNG with Pillow, mostly for
eyeballing what an import produced.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

from PIL import Image, ImageDraw

from .bounds import Transform, build_transform, compute_bounds
from .commands import Circle, DrawingCommand
from .entities import RGBA, Point, Stroke
from .export import is_near_white
from .segmentation import Polyline, segment_paths


def _pixel_color(color: RGBA) -> Tuple[int, int, int, int]:
    if is_near_white(color):
        return 0, 0, 0, 255
    r, g, b, a = (min(max(int(round(c * 255)), 0), 255) for c in color)
    return r, g, b, a


def _pixel_transform(items: Sequence, size_px: int, padding_ratio: float) -> Transform:
    if not items:
        raise RuntimeError("No renderable geometry was supplied.")
    bounds = compute_bounds(items, padding=padding_ratio)
    return build_transform(bounds, size_px, size_px, fill=1.0)


def _to_pixel(transform: Transform, point: Point, size_px: int) -> Point:
    x, y = transform.apply(point)
    return x, size_px - y


def _new_canvas(size_px: int) -> Tuple[Image.Image, ImageDraw.ImageDraw]:
    image = Image.new("RGBA", (size_px, size_px), (255, 255, 255, 0))
    return image, ImageDraw.Draw(image)


def _save(image: Image.Image, destination: Path) -> None:
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)


def render_png(
    strokes: Sequence[Stroke],
    destination: Path,
    size_px: int,
    *,
    padding_ratio: float = 0.05,
) -> None:
    drawable = [stroke for stroke in strokes if stroke.is_valid() and stroke.visible]
    transform = _pixel_transform(drawable, size_px, padding_ratio)
    image, draw = _new_canvas(size_px)
    line_px = max(1, int(size_px / 256))

    for stroke in drawable:
        points = [_to_pixel(transform, pt, size_px) for pt in stroke.loop_points()]
        draw.line(points, fill=_pixel_color(stroke.color), width=line_px)
    _save(image, destination)


def render_commands_png(
    commands: Sequence[DrawingCommand],
    destination: Path,
    size_px: int,
    *,
    padding_ratio: float = 0.05,
) -> None:
    paths = segment_paths(commands)
    transform = _pixel_transform(list(commands), size_px, padding_ratio)
    image, draw = _new_canvas(size_px)
    line_px = max(1, int(size_px / 256))

    for path in paths:
        if isinstance(path, Circle):
            cx, cy = _to_pixel(transform, path.center, size_px)
            radius_px = path.radius * transform.scale
            draw.ellipse([cx - radius_px, cy - radius_px, cx + radius_px, cy + radius_px], outline="black", width=line_px)
        elif isinstance(path, Polyline) and len(path.points) >= 2:
            draw.line([_to_pixel(transform, pt, size_px) for pt in path.points], fill="black", width=line_px)
    _save(image, destination)
