import pytest

from vectorboard.bounds import compute_bounds
from vectorboard.commands import Circle, LineTo, MoveTo
from vectorboard.document import Document
from vectorboard.entities import Board, Stroke
from vectorboard.history import VisibilityStack


def _stroke(y=0.0):
    return Stroke([(0.0, y), (0.5, y)])


def test_commit_undo_redo():
    document = Document(Board(2.0, 2.0))
    a, b = _stroke(0.0), _stroke(0.5)
    assert document.commit(a)
    assert document.commit(b)
    document.undo()
    assert document.exportable_strokes() == [a]
    document.redo()
    assert document.exportable_strokes() == [a, b]


def test_commit_rejects_degenerate_strokes():
    document = Document()
    assert not document.commit(None)
    assert not document.commit(Stroke([(0.0, 0.0)]))
    assert document.strokes == []
    assert not document.history.can_undo


def test_commit_after_undo_drops_redo():
    document = Document()
    document.commit(_stroke(0.0))
    document.undo()
    document.commit(_stroke(0.2))
    assert document.redo() is None


def test_injected_history_is_used():
    history = VisibilityStack()
    document = Document(history=history)
    document.commit(_stroke())
    assert history.undo_count == 1


def test_clear_removes_everything():
    document = Document()
    document.commit(_stroke())
    document.add_text("label")
    document.import_commands([MoveTo((0.0, 0.0)), LineTo((1.0, 1.0))])
    document.clear()
    assert document.exportable_strokes() == []
    assert document.texts == []
    assert not document.history.can_undo


def test_import_fits_drawing_on_board():
    document = Document(Board(width=2.0, height=2.0, origin=(1.0, 1.0)))
    strokes = document.import_commands(
        [MoveTo((100.0, 100.0)), LineTo((300.0, 100.0)), LineTo((300.0, 200.0)), Circle((200.0, 150.0), 10.0)]
    )
    assert len(strokes) == 2
    bounds = compute_bounds(strokes, padding=0.0)
    # 80 % of the board width, centred on the board origin
    assert bounds.width == pytest.approx(1.6)
    assert bounds.center == (pytest.approx(1.0), pytest.approx(1.0))
    assert strokes[1].kind == "imported"
    assert len(strokes[1].points) == 33


def test_import_scale_is_clamped():
    document = Document(Board(1.0, 1.0))
    strokes = document.import_commands([MoveTo((0.0, 0.0)), LineTo((1e-4, 0.0))])
    assert strokes[0].points[1][0] - strokes[0].points[0][0] == pytest.approx(1e-3)


def test_import_replaces_previous_import():
    document = Document()
    document.import_commands([MoveTo((0.0, 0.0)), LineTo((1.0, 0.0))])
    second = document.import_commands([Circle((0.0, 0.0), 1.0)])
    assert document.imported == second
    assert document.import_commands([]) == []
    assert document.imported == second


def test_text_is_clamped_to_board():
    document = Document(Board(2.0, 2.0))
    entry = document.add_text("hi", (5.0, 0.0), box=(0.4, 0.2))
    assert entry.position == (pytest.approx(0.8), 0.0)
    document.move_text(entry, (-3.0, -3.0))
    assert entry.position == (pytest.approx(-0.8), pytest.approx(-0.9))


def test_exports_include_visible_strokes_only():
    document = Document()
    document.commit(_stroke(0.0))
    document.commit(_stroke(0.3))
    document.undo()
    dxf_text = document.export_dxf()
    assert dxf_text.count("LWPOLYLINE") == 1
    document.add_text("note", (0.1, 0.1))
    svg_text = document.export_svg(400, 400)
    assert svg_text.count("<path ") == 1
    assert ">note</text>" in svg_text
