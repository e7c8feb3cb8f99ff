from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .commands import DrawingCommand
from .dxf import parse_dxf_detailed
from .logging import ImportLogger
from .svg import parse_svg

SUPPORTED_SUFFIXES = (".dxf", ".svg")
NO_DATA_MESSAGE = "No drawable data found"


@dataclass
class ImportResult:
    path: Optional[Path]
    commands: List[DrawingCommand] = field(default_factory=list)
    tier: Optional[str] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return bool(self.commands)


@dataclass
class ExportResult:
    path: Path
    ok: bool
    message: str = ""


def parse_drawing(text: str, suffix: str, logger: Optional[ImportLogger] = None) -> ImportResult:
    suffix = suffix.lower()
    if suffix == ".dxf":
        parsed = parse_dxf_detailed(text, logger=logger)
        commands = parsed.commands
        tier = parsed.tier.value if parsed.tier else None
    elif suffix == ".svg":
        commands = parse_svg(text, logger=logger)
        tier = "svg" if commands else None
    else:
        return ImportResult(None, message=f"Unsupported file type: {suffix or '(none)'}")
    message = f"{len(commands)} command(s)" if commands else NO_DATA_MESSAGE
    return ImportResult(None, commands, tier, message)


def load_drawing(path: Path, logger: Optional[ImportLogger] = None) -> ImportResult:
    """Read and parse a DXF/SVG file; failures come back as a result, never raised."""

    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        return ImportResult(path, message=f"Unsupported file type: {path.suffix or '(none)'}")
    try:
        text = path.read_bytes().decode("utf-8", errors="ignore")
    except OSError as exc:
        return ImportResult(path, message=f"Could not read {path.name}: {exc.strerror or exc}")
    result = parse_drawing(text, path.suffix, logger)
    result.path = path
    return result


def write_export(text: str, destination: Path) -> ExportResult:
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        return ExportResult(destination, False, f"Could not write {destination.name}: {exc.strerror or exc}")
    return ExportResult(destination, True, f"Saved {destination.name}")


def list_drawings(folder: Path) -> List[Path]:
    folder = Path(folder)
    if not folder.is_dir():
        return []
    files = [path for path in folder.iterdir() if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES]
    return sorted(files, key=lambda path: path.name.lower())
