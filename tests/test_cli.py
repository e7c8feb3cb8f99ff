import pytest

import board_convert
import render_board_png
from vectorboard.dxf import parse_dxf
from vectorboard.svg import parse_svg

SQUARE_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><rect x="10" y="10" width="50" height="50"/></svg>'
LINE_DXF = "0\nSECTION\n2\nENTITIES\n0\nLINE\n10\n0.0\n20\n0.0\n11\n10.0\n21\n0.0\n0\nENDSEC\n0\nEOF\n"


def test_svg_to_dxf(tmp_path, capsys):
    source = tmp_path / "square.svg"
    source.write_text(SQUARE_SVG)
    assert board_convert.main([str(source)]) == 0

    output = tmp_path / "square.dxf"
    commands = parse_dxf(output.read_text())
    assert len(commands) == 8
    out = capsys.readouterr().out
    assert "[+] Parsed 8 drawing commands" in out
    assert "[+] DXF written to" in out


def test_dxf_to_svg_with_log_and_png(tmp_path):
    source = tmp_path / "line.dxf"
    source.write_text(LINE_DXF)
    output = tmp_path / "out" / "line.svg"
    log = tmp_path / "import.log"
    png = tmp_path / "line.png"
    code = board_convert.main([str(source), "-o", str(output), "--canvas-size", "500", "--log", str(log), "--png", str(png)])
    assert code == 0
    assert len(parse_svg(output.read_text())) == 2
    assert "tier structured: 2 command(s)" in log.read_text()
    assert png.exists()


def test_convert_reports_empty_input(tmp_path, capsys):
    source = tmp_path / "empty.dxf"
    source.write_text("nothing\n")
    assert board_convert.main([str(source)]) == 1
    assert "[warn]" in capsys.readouterr().out


def test_convert_rejects_unknown_output(tmp_path):
    source = tmp_path / "line.dxf"
    source.write_text(LINE_DXF)
    with pytest.raises(SystemExit):
        board_convert.main([str(source), "-o", str(tmp_path / "line.pdf")])


def test_render_script(tmp_path, capsys):
    source = tmp_path / "line.dxf"
    source.write_text(LINE_DXF)
    preview = tmp_path / "thumb.png"
    assert render_board_png.main([str(source), "--preview", str(preview), "--preview-size", "32"]) == 0
    assert preview.exists()
    assert "[+] Preview PNG written to" in capsys.readouterr().out


def test_render_script_requires_an_output(tmp_path):
    with pytest.raises(SystemExit):
        render_board_png.main([str(tmp_path / "line.dxf")])


def test_convert_warns_on_pen_move_only_svg(tmp_path, capsys):
    source = tmp_path / "dot.svg"
    source.write_text('<svg xmlns="http://www.w3.org/2000/svg"><path d="M 10 10"/></svg>')
    png = tmp_path / "dot.png"
    assert board_convert.main([str(source), "--png", str(png)]) == 1
    assert "[warn]" in capsys.readouterr().out
    assert not png.exists()
    assert not (tmp_path / "dot.dxf").exists()


def test_convert_warns_when_nothing_is_placed(tmp_path, capsys, monkeypatch):
    source = tmp_path / "line.dxf"
    source.write_text(LINE_DXF)
    monkeypatch.setattr(board_convert.Document, "import_commands", lambda self, commands: [])
    assert board_convert.main([str(source), "--png", str(tmp_path / "line.png")]) == 1
    assert "[warn]" in capsys.readouterr().out
    assert not (tmp_path / "line.svg").exists()


def test_render_script_warns_on_empty_drawing(tmp_path, capsys):
    source = tmp_path / "dot.svg"
    source.write_text('<svg xmlns="http://www.w3.org/2000/svg"><path d="M 10 10"/></svg>')
    preview = tmp_path / "dot.png"
    assert render_board_png.main([str(source), "--preview", str(preview)]) == 1
    assert "[warn]" in capsys.readouterr().out
    assert not preview.exists()
