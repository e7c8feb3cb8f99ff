"""
Whiteboard drawing core: stroke model, DXF/SVG import and export, undo history.
"""

from .bounds import BOARD_FILL, BOARD_SCALE_RANGE, BOUNDS_PADDING, MIN_EXTENT, Bounds, Transform, build_transform, command_bounds, compute_bounds
from .commands import Circle, DrawingCommand, LineTo, MoveTo, commands_from_points, commands_from_strokes, normalize_commands
from .document import Document
from .dxf import DxfParseResult, DxfTier, EntityKind, entity_census, parse_dxf, parse_dxf_detailed
from .entities import Board, CircleShape, Stroke, TextEntry
from .export import DEFAULT_UNIT_SCALE, DxfExportOptions, SvgExportOptions, dxf_color_index, export_dxf, export_svg, svg_color
from .file_io import ExportResult, ImportResult, list_drawings, load_drawing, parse_drawing, write_export
from .history import StrokeVisibilityAction, UndoStack, VisibilityStack
from .logging import ImportLogger
from .numeric import COORD_ABS_MAX, CoordinateError, parse_coordinate, try_parse_coordinate
from .segmentation import Polyline, paths_to_strokes, segment_paths
from .svg import parse_svg
from .tools import DrawingTool, ToolMode, ToolSettings, ToolState, ToolStateError

__all__ = [
    "BOARD_FILL",
    "BOARD_SCALE_RANGE",
    "BOUNDS_PADDING",
    "MIN_EXTENT",
    "Bounds",
    "Transform",
    "build_transform",
    "command_bounds",
    "compute_bounds",
    "Circle",
    "DrawingCommand",
    "LineTo",
    "MoveTo",
    "commands_from_points",
    "commands_from_strokes",
    "normalize_commands",
    "Document",
    "DxfParseResult",
    "DxfTier",
    "EntityKind",
    "entity_census",
    "parse_dxf",
    "parse_dxf_detailed",
    "Board",
    "CircleShape",
    "Stroke",
    "TextEntry",
    "DEFAULT_UNIT_SCALE",
    "DxfExportOptions",
    "SvgExportOptions",
    "dxf_color_index",
    "export_dxf",
    "export_svg",
    "svg_color",
    "ExportResult",
    "ImportResult",
    "list_drawings",
    "load_drawing",
    "parse_drawing",
    "write_export",
    "StrokeVisibilityAction",
    "UndoStack",
    "VisibilityStack",
    "ImportLogger",
    "COORD_ABS_MAX",
    "CoordinateError",
    "parse_coordinate",
    "try_parse_coordinate",
    "Polyline",
    "paths_to_strokes",
    "segment_paths",
    "parse_svg",
    "DrawingTool",
    "ToolMode",
    "ToolSettings",
    "ToolState",
    "ToolStateError",
]
