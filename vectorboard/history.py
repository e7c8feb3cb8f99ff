"""
Linear undo/redo history.

``UndoStack`` is generic over anything with ``apply``/``revert``.  The
whiteboard itself only ever undoes stroke creation, which is a visibility
toggle: ``VisibilityStack`` registers strokes that are already on the board
and hides/re-shows them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from .entities import Point, Stroke

Listener = Callable[[str, "Action"], None]


class Action(Protocol):
    def apply(self) -> None:
        ...

    def revert(self) -> None:
        ...


class UndoStack:
    """Two LIFO stacks; every new action wipes the redo side."""

    def __init__(self) -> None:
        self._undo: List[Action] = []
        self._redo: List[Action] = []
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self, event: str, action: Action) -> None:
        for listener in list(self._listeners):
            listener(event, action)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_count(self) -> int:
        return len(self._undo)

    @property
    def redo_count(self) -> int:
        return len(self._redo)

    def _push(self, action: Action) -> None:
        self._undo.append(action)
        self._redo.clear()
        self._notify("execute", action)

    def execute(self, action: Action) -> None:
        action.apply()
        self._push(action)

    def undo(self) -> Optional[Action]:
        if not self._undo:
            return None
        action = self._undo.pop()
        action.revert()
        self._redo.append(action)
        self._notify("undo", action)
        return action

    def redo(self) -> Optional[Action]:
        if not self._redo:
            return None
        action = self._redo.pop()
        action.apply()
        self._undo.append(action)
        self._notify("redo", action)
        return action

    def clear_all(self) -> None:
        while self._undo:
            action = self._undo.pop()
            action.revert()
            self._notify("clear", action)
        self._redo.clear()


@dataclass
class StrokeVisibilityAction:
    stroke: Stroke
    snapshot: List[Point] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.snapshot:
            self.snapshot = list(self.stroke.points)

    def apply(self) -> None:
        self.stroke.points[:] = self.snapshot
        self.stroke.visible = True

    def revert(self) -> None:
        self.stroke.visible = False


class VisibilityStack(UndoStack):
    def register(self, stroke: Stroke) -> StrokeVisibilityAction:
        """Record a stroke that is already visible; nothing is re-applied."""

        action = StrokeVisibilityAction(stroke)
        self._push(action)
        return action

    def clear_all(self) -> None:
        # hide the redo side as well
        for action in self._redo:
            action.revert()
            self._notify("clear", action)
        self._redo.clear()
        super().clear_all()
