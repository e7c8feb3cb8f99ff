import math

import pytest

from vectorboard.entities import Board, Stroke
from vectorboard.tools import DrawingTool, ToolMode, ToolSettings, ToolState, ToolStateError


def _board():
    return Board(width=2.0, height=2.0)


def test_freehand_skips_points_closer_than_minimum():
    tool = DrawingTool(ToolMode.FREEHAND, _board())
    tool.begin((0.0, 0.0))
    tool.extend((0.005, 0.0))
    tool.extend((0.05, 0.0))
    tool.extend((0.055, 0.0))
    tool.extend((0.2, 0.1))
    stroke = tool.commit()
    assert stroke.points == [(0.0, 0.0), (0.05, 0.0), (0.2, 0.1)]
    assert stroke.kind == "freehand"
    assert tool.state is ToolState.IDLE


def test_single_point_freehand_is_discarded():
    tool = DrawingTool(ToolMode.FREEHAND, _board())
    tool.begin((0.0, 0.0))
    assert tool.commit() is None


def test_line_tool():
    tool = DrawingTool(ToolMode.LINE, _board())
    tool.begin((0.0, 0.0))
    tool.extend((0.3, 0.0))
    tool.extend((0.5, 0.5))
    stroke = tool.commit()
    assert stroke.points == [(0.0, 0.0), (0.5, 0.5)]


def test_points_are_clamped_to_board():
    board = _board()
    assert not board.contains((-5.0, 0.0))
    assert not board.contains((0.5, 3.0))

    tool = DrawingTool(ToolMode.LINE, board)
    tool.begin((-5.0, 0.0))
    tool.extend((0.5, 3.0))
    stroke = tool.commit()
    assert stroke.points == [(-1.0, 0.0), (0.5, 1.0)]
    assert all(board.contains(point) for point in stroke.points)


def test_rectangle_is_closed_from_top_left():
    tool = DrawingTool(ToolMode.RECTANGLE, _board())
    tool.begin((0.5, -0.5))
    tool.extend((-0.5, 0.5))
    stroke = tool.commit()
    assert stroke.closed
    assert stroke.points == [(-0.5, 0.5), (0.5, 0.5), (0.5, -0.5), (-0.5, -0.5), (-0.5, 0.5)]


def test_circle_radius_limits():
    settings = ToolSettings(min_radius=0.05, max_radius=0.5, circle_segments=16)
    tool = DrawingTool(ToolMode.CIRCLE, _board(), settings)
    tool.begin((0.0, 0.0))
    tool.extend((0.01, 0.0))
    assert tool.commit() is None

    tool.begin((0.0, 0.0))
    tool.extend((0.9, 0.0))
    stroke = tool.commit()
    assert stroke.kind == "circle"
    assert len(stroke.points) == 17
    assert max(math.hypot(x, y) for x, y in stroke.points) == pytest.approx(0.5)


def test_polygon_has_configured_sides():
    tool = DrawingTool(ToolMode.POLYGON, _board(), ToolSettings(polygon_sides=5))
    tool.begin((0.0, 0.0))
    tool.extend((0.0, 0.2))
    assert len(tool.preview()) == 6
    stroke = tool.commit()
    assert stroke.closed
    assert stroke.points[0] == (pytest.approx(0.0, abs=1e-12), pytest.approx(0.2))
    assert stroke.points[0] == stroke.points[-1]


def test_cancel_discards_in_progress_stroke():
    tool = DrawingTool(ToolMode.FREEHAND, _board())
    tool.begin((0.0, 0.0))
    tool.extend((0.5, 0.5))
    tool.cancel()
    assert tool.state is ToolState.IDLE
    assert tool.preview() == []


def test_illegal_transitions_raise():
    tool = DrawingTool(ToolMode.LINE, _board())
    with pytest.raises(ToolStateError):
        tool.extend((0.0, 0.0))
    with pytest.raises(ToolStateError):
        tool.commit()
    tool.begin((0.0, 0.0))
    with pytest.raises(ToolStateError):
        tool.begin((0.1, 0.1))
    with pytest.raises(ToolStateError):
        tool.begin_drag(Stroke([(0.0, 0.0), (1.0, 0.0)]), (0.0, 0.0))


def test_drag_moves_stroke_and_keeps_centre_on_board():
    stroke = Stroke([(0.0, 0.0), (0.2, 0.2)])
    tool = DrawingTool(ToolMode.FREEHAND, _board())
    tool.begin_drag(stroke, (0.1, 0.1))
    assert tool.state is ToolState.EDITING
    tool.drag_to((0.5, 0.1))
    assert stroke.center() == (pytest.approx(0.5), pytest.approx(0.1))
    tool.drag_to((9.0, 9.0))
    assert stroke.center() == (pytest.approx(1.0), pytest.approx(1.0))
    assert tool.end_edit() is stroke
    assert tool.state is ToolState.IDLE


def test_resize_clamps_radius():
    tool = DrawingTool(ToolMode.CIRCLE, _board(), ToolSettings(circle_segments=32))
    tool.begin((0.0, 0.0))
    tool.extend((0.2, 0.0))
    stroke = tool.commit()

    radius = tool.begin_resize(stroke)
    assert radius == pytest.approx(0.2)
    assert tool.resize_by(0.1) == pytest.approx(0.3)
    assert tool.resize_by(5.0) == pytest.approx(0.5)
    assert tool.resize_by(-5.0) == pytest.approx(0.05)
    assert max(math.hypot(x, y) for x, y in stroke.points) == pytest.approx(0.05)
    with pytest.raises(ToolStateError):
        tool.drag_to((0.0, 0.0))
    tool.end_edit()
