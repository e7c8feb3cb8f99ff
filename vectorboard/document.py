from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .bounds import BOARD_FILL, BOARD_SCALE_RANGE, Bounds, build_transform, command_bounds
from .commands import Circle, DrawingCommand, LineTo, MoveTo, normalize_commands
from .entities import DEFAULT_CIRCLE_SEGMENTS, DEFAULT_STROKE_WIDTH, RGBA, WHITE, Board, Point, Stroke, TextEntry
from .export import DxfExportOptions, SvgExportOptions, export_dxf, export_svg
from .history import StrokeVisibilityAction, VisibilityStack
from .segmentation import paths_to_strokes, segment_paths


class Document:
    """
    Everything on one board: drawn strokes, the current imported drawing and
    text labels.  Drawn strokes go through the injected history so they can be
    hidden and re-shown; imports replace each other and are not undoable.
    """

    def __init__(self, board: Optional[Board] = None, history: Optional[VisibilityStack] = None) -> None:
        self.board = board or Board()
        self.history = history if history is not None else VisibilityStack()
        self.strokes: List[Stroke] = []
        self.imported: List[Stroke] = []
        self.texts: List[TextEntry] = []

    def board_bounds(self) -> Bounds:
        ox, oy = self.board.origin
        half_w = self.board.width / 2.0
        half_h = self.board.height / 2.0
        return Bounds((ox - half_w, oy - half_h), (ox + half_w, oy + half_h))

    def exportable_strokes(self) -> List[Stroke]:
        return [stroke for stroke in self.strokes + self.imported if stroke.visible and stroke.is_valid()]

    def commit(self, stroke: Optional[Stroke]) -> bool:
        if stroke is None or not stroke.is_valid():
            return False
        stroke.visible = True
        self.strokes.append(stroke)
        self.history.register(stroke)
        return True

    def undo(self) -> Optional[StrokeVisibilityAction]:
        return self.history.undo()

    def redo(self) -> Optional[StrokeVisibilityAction]:
        return self.history.redo()

    def clear(self) -> None:
        self.history.clear_all()
        self.strokes.clear()
        self.imported.clear()
        self.texts.clear()

    def _text_margin(self, box: Tuple[float, float]) -> Tuple[float, float]:
        return box[0] / 2.0, box[1] / 2.0

    def add_text(
        self,
        content: str,
        position: Point = (0.0, 0.0),
        font_size: int = 12,
        box: Tuple[float, float] = (0.0, 0.0),
    ) -> TextEntry:
        entry = TextEntry(content, self.board.clamp(position, self._text_margin(box)), font_size, box)
        self.texts.append(entry)
        return entry

    def move_text(self, entry: TextEntry, position: Point) -> Point:
        entry.position = self.board.clamp(position, self._text_margin(entry.box))
        return entry.position

    def import_commands(
        self,
        commands: Sequence[DrawingCommand],
        *,
        color: RGBA = WHITE,
        width: float = DEFAULT_STROKE_WIDTH,
        circle_segments: int = DEFAULT_CIRCLE_SEGMENTS,
    ) -> List[Stroke]:
        """
        Fit an imported drawing onto the board (80 % of the board, centred on
        its origin) and make it the current import.  An empty command list
        leaves the previous import in place.
        """

        commands = normalize_commands(commands)
        if not commands:
            return []
        transform = build_transform(
            command_bounds(commands),
            self.board.width,
            self.board.height,
            fill=BOARD_FILL,
            scale_range=BOARD_SCALE_RANGE,
            target_center=self.board.origin,
        )
        placed: List[DrawingCommand] = []
        for command in commands:
            if isinstance(command, Circle):
                placed.append(Circle(transform.apply(command.center), command.radius * transform.scale))
            elif isinstance(command, MoveTo):
                placed.append(MoveTo(transform.apply(command.position)))
            else:
                placed.append(LineTo(transform.apply(command.position)))
        self.imported = paths_to_strokes(
            segment_paths(placed),
            color=color,
            width=width,
            circle_segments=circle_segments,
        )
        return self.imported

    def export_dxf(self, options: DxfExportOptions = DxfExportOptions()) -> str:
        return export_dxf(self.exportable_strokes(), options)

    def export_svg(
        self,
        canvas_width: float = 1000.0,
        canvas_height: float = 1000.0,
        options: SvgExportOptions = SvgExportOptions(),
    ) -> str:
        return export_svg(self.exportable_strokes(), canvas_width, canvas_height, options, texts=self.texts)
