import pytest
from PIL import Image

from vectorboard.commands import Circle, LineTo, MoveTo
from vectorboard.entities import RED, WHITE, Stroke
from vectorboard.render import render_commands_png, render_png


def test_render_strokes(tmp_path):
    destination = tmp_path / "previews" / "board.png"
    strokes = [
        Stroke([(0.0, 0.0), (1.0, 1.0)], color=WHITE),
        Stroke([(0.0, 1.0), (1.0, 0.0)], color=RED),
    ]
    render_png(strokes, destination, 64)
    with Image.open(destination) as image:
        assert image.size == (64, 64)
        assert image.mode == "RGBA"
        # the two diagonals cross in the middle of the canvas
        centre = [image.getpixel((x, y))[3] for x in range(30, 35) for y in range(30, 35)]
        assert max(centre) == 255


def test_render_commands_draws_circles(tmp_path):
    destination = tmp_path / "drawing.png"
    render_commands_png([MoveTo((0.0, 0.0)), LineTo((4.0, 0.0)), Circle((2.0, 2.0), 1.0)], destination, 128)
    with Image.open(destination) as image:
        assert image.size == (128, 128)
        assert image.getbbox() is not None


def test_render_without_geometry_fails(tmp_path):
    with pytest.raises(RuntimeError):
        render_png([], tmp_path / "empty.png", 32)
