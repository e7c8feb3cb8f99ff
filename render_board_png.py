#!/usr/bin/env python3
"""
Render a DXF/SVG drawing to PNG previews without a CAD package.

The drawing goes through the same parsers the board uses, so the preview shows
exactly what an import would put on the board.  Example:

    python render_board_png.py plan.dxf \
        --preview plan_thumb.png --preview-size 256 \
        --hires plan_full.png --hires-size 2048
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Sequence

from vectorboard import DrawingCommand, load_drawing
from vectorboard.render import render_commands_png


def load_commands(path: Path) -> List[DrawingCommand]:
    """Import a drawing the way the board does; unreadable or empty input raises."""

    result = load_drawing(path)
    if not result.ok:
        raise RuntimeError(f"{path}: {result.message}")
    return result.commands


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a DXF/SVG drawing to PNG.")
    parser.add_argument("input", type=Path, help="Source .dxf or .svg file")
    parser.add_argument("--preview", type=Path, help="Path for the low-res preview PNG")
    parser.add_argument("--preview-size", type=int, default=256, help="Preview size in pixels (square)")
    parser.add_argument("--hires", type=Path, help="Path for the high-res PNG")
    parser.add_argument("--hires-size", type=int, default=2048, help="High-res size in pixels (square)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.preview and not args.hires:
        raise SystemExit("Specify --preview and/or --hires to render a PNG.")

    try:
        commands = load_commands(args.input)
    except RuntimeError as exc:
        print(f"[warn] {exc}")
        return 1
    if args.preview:
        render_commands_png(commands, args.preview, args.preview_size)
        print(f"[+] Preview PNG written to {args.preview}")
    if args.hires:
        render_commands_png(commands, args.hires, args.hires_size)
        print(f"[+] High-res PNG written to {args.hires}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
