from vectorboard.commands import Circle, LineTo, MoveTo
from vectorboard.file_io import NO_DATA_MESSAGE, list_drawings, load_drawing, parse_drawing, write_export
from vectorboard.logging import ImportLogger

LINE_DXF = "0\nSECTION\n2\nENTITIES\n0\nLINE\n10\n0.0\n20\n0.0\n11\n10.0\n21\n0.0\n0\nENDSEC\n0\nEOF\n"


def test_load_dxf(tmp_path):
    path = tmp_path / "line.DXF"
    path.write_text(LINE_DXF)
    result = load_drawing(path)
    assert result.ok
    assert result.path == path
    assert result.tier == "structured"
    assert result.commands == [MoveTo((0.0, 0.0)), LineTo((10.0, 0.0))]


def test_load_svg_ignores_undecodable_bytes(tmp_path):
    path = tmp_path / "circle.svg"
    path.write_bytes(b'<svg><!-- \xff\xfe --><circle cx="1" cy="2" r="3"/></svg>')
    result = load_drawing(path)
    assert result.commands == [Circle((1.0, -2.0), 3.0)]


def test_unsupported_and_missing_files(tmp_path):
    result = load_drawing(tmp_path / "notes.txt")
    assert not result.ok
    assert "Unsupported" in result.message

    result = load_drawing(tmp_path / "missing.dxf")
    assert not result.ok
    assert "Could not read" in result.message


def test_empty_drawing_reports_no_data():
    result = parse_drawing("nothing to see", ".dxf")
    assert not result.ok
    assert result.message == NO_DATA_MESSAGE


def test_logger_collects_tier_attempts():
    logger = ImportLogger()
    parse_drawing("10\n1\n20\n2\n10\n3\n20\n4\n", ".dxf", logger)
    tiers = [line for line in logger.lines if line.startswith("tier ")]
    assert tiers == [
        "tier structured: 0 command(s)",
        "tier grouped: 0 command(s)",
        "tier raw: 2 command(s)",
    ]


def test_logger_flush_writes_file(tmp_path):
    destination = tmp_path / "logs" / "import.log"
    logger = ImportLogger(destination, source="broken.dxf")
    parse_drawing("0\nSECTION\n2\nENTITIES\n0\nCIRCLE\n10\nx\n20\n0\n40\n1\n0\nENDSEC\n", ".dxf", logger)
    logger.flush()
    text = destination.read_text()
    assert text.startswith("source=broken.dxf")
    assert "drop field entity=CIRCLE" in text
    assert text.rstrip().endswith("dropped fields=1 entities=1")


def test_write_export(tmp_path):
    destination = tmp_path / "out" / "board.svg"
    result = write_export("<svg/>", destination)
    assert result.ok
    assert destination.read_text() == "<svg/>"


def test_write_export_reports_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    result = write_export("data", blocker / "board.dxf")
    assert not result.ok
    assert "Could not write" in result.message


def test_list_drawings(tmp_path):
    for name in ("b.svg", "A.dxf", "c.txt", "d.SVG"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub.dxf").mkdir()
    assert [path.name for path in list_drawings(tmp_path)] == ["A.dxf", "b.svg", "d.SVG"]
    assert list_drawings(tmp_path / "nope") == []


def test_pen_move_only_svg_reports_no_data(tmp_path):
    path = tmp_path / "dot.svg"
    path.write_text('<svg xmlns="http://www.w3.org/2000/svg"><path d="M 10 10"/></svg>')
    result = load_drawing(path)
    assert not result.ok
    assert result.commands == []
    assert result.message == NO_DATA_MESSAGE
