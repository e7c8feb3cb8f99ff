#!/usr/bin/env python3
"""
Convert DXF/SVG drawings through the whiteboard pipeline.

The input is imported exactly as the board would import it (three-tier DXF
parsing, SVG shapes and paths, fitted onto the board) and written back out as
DXF or SVG.  Example:

    python board_convert.py sketch.dxf -o sketch.svg --canvas-size 1000 \
        --log sketch_import.log --png sketch.png
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from vectorboard import (
    DEFAULT_UNIT_SCALE,
    Document,
    DxfExportOptions,
    ImportLogger,
    SvgExportOptions,
    load_drawing,
    write_export,
)

_DEFAULT_TARGET = {".dxf": ".svg", ".svg": ".dxf"}


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import a DXF/SVG drawing and export it as DXF or SVG.")
    parser.add_argument("input", type=Path, help="Source .dxf or .svg file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Destination .dxf/.svg (defaults to the input name with the other format)",
    )
    parser.add_argument(
        "--unit-scale",
        type=float,
        default=DEFAULT_UNIT_SCALE,
        help="Multiplier applied to normalised coordinates and stroke widths",
    )
    parser.add_argument("--canvas-size", type=float, default=1000.0, help="SVG canvas size in pixels (square)")
    parser.add_argument("--log", type=Path, help="Write import diagnostics (tiers, dropped fields) to this path")
    parser.add_argument("--png", type=Path, help="Also render the imported drawing to this PNG")
    parser.add_argument("--png-size", type=int, default=512, help="PNG size in pixels (square)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logger = ImportLogger(args.log, source=str(args.input)) if args.log else None

    result = load_drawing(args.input, logger=logger)
    if logger:
        logger.flush()
    if not result.ok:
        print(f"[warn] {args.input}: {result.message}")
        return 1
    tier = f" via {result.tier} parsing" if result.tier else ""
    print(f"[+] Parsed {len(result.commands)} drawing commands from {args.input}{tier}")

    document = Document()
    strokes = document.import_commands(result.commands)
    if not strokes:
        print(f"[warn] {args.input}: nothing to place on the board")
        return 1
    print(f"[+] Placed {len(strokes)} strokes on the board")

    output_path = args.output or args.input.with_suffix(_DEFAULT_TARGET[args.input.suffix.lower()])
    suffix = output_path.suffix.lower()
    if suffix == ".dxf":
        text = document.export_dxf(DxfExportOptions(unit_scale=args.unit_scale))
    elif suffix == ".svg":
        text = document.export_svg(args.canvas_size, args.canvas_size, SvgExportOptions(unit_scale=args.unit_scale))
    else:
        raise SystemExit(f"Unsupported output type: {output_path.suffix or '(none)'}")

    exported = write_export(text, output_path)
    if not exported.ok:
        print(f"[!] {exported.message}")
        return 1
    print(f"[+] {suffix[1:].upper()} written to {output_path}")

    if args.png:
        from vectorboard.render import render_png

        render_png(strokes, args.png, args.png_size)
        print(f"[+] PNG preview written to {args.png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
