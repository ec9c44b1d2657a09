"""
Turns pointer and keyboard events into grid edits.

A stroke goes Idle -> Active -> Idle:
    the first mutating event of a stroke takes the only history checkpoint,
    moving while active applies the tool directly to the live grid,
    releasing schedules the save.

Side effects (redraw, save scheduling, brush changes) are returned as data,
the caller decides how to perform them.
"""

from dataclasses import dataclass, field
from typing import Self, TypeAlias

from pygame.locals import *

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.history_manager import HistoryManager
from nitropix.classes.tools_manager import ToolsManager, is_tool_draggable, is_tool_mutating
from nitropix.classes.tool_engine import ToolResult, apply_tool
from nitropix.utils import get_tile_at
from nitropix.type_utils import XY, RGBColor, RGBAColor, ToolName, HistoryMoveType
from nitropix.consts import OPAQUE_ALPHA


@dataclass(frozen=True, slots=True)
class PointerDown:
    """Dataclass for a pointer press at a screen position."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class PointerMove:
    """Dataclass for a pointer movement to a screen position."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class PointerUp:
    """Dataclass for a pointer release."""


@dataclass(frozen=True, slots=True)
class HistoryMove:
    """Dataclass for an undo or redo request."""

    move_type: HistoryMoveType


@dataclass(frozen=True, slots=True)
class Redraw:
    """Dataclass for a request to redraw the grid."""


@dataclass(frozen=True, slots=True)
class ScheduleSave:
    """Dataclass for a request to (re)start the debounced save of a grid."""

    grid: PixelGrid


@dataclass(frozen=True, slots=True)
class CancelSave:
    """Dataclass for a request to cancel the pending debounced save."""


@dataclass(frozen=True, slots=True)
class BrushColorChanged:
    """Dataclass for a notification that the eye dropper picked a color."""

    color: RGBColor


Event: TypeAlias = PointerDown | PointerMove | PointerUp | HistoryMove
Effect: TypeAlias = Redraw | ScheduleSave | CancelSave | BrushColorChanged


@dataclass(slots=True)
class StrokeState:
    """
    Dataclass for storing the state of the current stroke.

    Args:
        active flag, checkpoint taken flag
    """

    is_active: bool = False
    did_checkpoint: bool = False


@dataclass(slots=True)
class EditorSession:
    """
    Dataclass for storing everything edited in a session.

    Args:
        grid (can be None), history, tools, stroke state, canvas origin
    """

    grid: PixelGrid | None = None
    history: HistoryManager = field(default_factory=HistoryManager)
    tools: ToolsManager = field(default_factory=ToolsManager)
    stroke: StrokeState = field(default_factory=StrokeState)
    canvas_origin: XY = (0, 0)
    hovered_tile: XY | None = None

    def set_grid(self: Self, grid: PixelGrid) -> None:
        """
        Replaces the grid after a load, the history and stroke are reset.

        Args:
            grid
        """

        self.grid = grid
        self.history.clear()
        self.stroke = StrokeState()
        self.hovered_tile = None

    def get_tile_at(self: Self, x: int, y: int) -> XY | None:
        """
        Gets the grid tile under a screen position.

        Args:
            x coordinate, y coordinate
        Returns:
            column and row (None if outside the grid or no grid is loaded)
        """

        if self.grid is None:
            return None

        return get_tile_at(
            x, y, self.canvas_origin, self.tools.zoom,
            self.grid.cols, self.grid.rows
        )


def get_history_move(k: int, is_ctrl_on: bool, is_shift_on: bool) -> HistoryMoveType | None:
    """
    Gets the history move of a key chord, CTRL+Z undoes, CTRL+Y and CTRL+SHIFT+Z redo.

    Args:
        key, control flag, shift flag
    Returns:
        history move (can be None)
    """

    if not is_ctrl_on:
        return None
    if k == K_z:
        return "redo" if is_shift_on else "undo"
    if k == K_y:
        return "redo"

    return None


class StrokeController:
    """Class to apply events to a session."""

    __slots__ = (
        "session",
    )

    def __init__(self: Self, session: EditorSession) -> None:
        """
        Initializes the session.

        Args:
            session
        """

        self.session: EditorSession = session

    def _pick(self: Self, col: int, row: int) -> tuple[Effect, ...]:
        """
        Handles the eye dropper, it never checkpoints or saves.

        Args:
            column, row
        Returns:
            effects
        """

        assert self.session.grid is not None
        result: ToolResult = apply_tool(self.session.grid, self.session.tools, col, row)
        if result.picked_color is None:
            return ()

        self.session.tools.brush_color = result.picked_color
        return (BrushColorChanged(result.picked_color), Redraw())

    def _fill(self: Self, col: int, row: int) -> tuple[Effect, ...]:
        """
        Handles the single shot bucket, it checkpoints right before filling.

        Args:
            column, row
        Returns:
            effects
        """

        grid: PixelGrid | None = self.session.grid
        assert grid is not None

        # Filling with the same color is ignored without touching the history
        fill_color: RGBAColor = (*self.session.tools.brush_color, OPAQUE_ALPHA)
        if grid.get_at(col, row) == fill_color:
            return ()

        self.session.history.checkpoint(grid)
        apply_tool(grid, self.session.tools, col, row)
        return (Redraw(), ScheduleSave(grid))

    def _stroke(self: Self, col: int, row: int) -> tuple[Effect, ...]:
        """
        Handles a mutating event of the pen or eraser.

        Args:
            column, row
        Returns:
            effects
        """

        effects: tuple[Effect, ...] = ()
        stroke: StrokeState = self.session.stroke
        assert self.session.grid is not None

        if not stroke.did_checkpoint:
            self.session.history.checkpoint(self.session.grid)
            stroke.is_active = stroke.did_checkpoint = True
            # A new stroke restarts the debounce
            effects += (CancelSave(),)

        result: ToolResult = apply_tool(self.session.grid, self.session.tools, col, row)
        if result.did_draw:
            effects += (Redraw(),)

        return effects

    def _handle_pointer_down(self: Self, event: PointerDown) -> tuple[Effect, ...]:
        """
        Handles a pointer press.

        Args:
            event
        Returns:
            effects
        """

        tile: XY | None = self.session.get_tile_at(event.x, event.y)
        if tile is None:
            return ()

        tool_name: ToolName = self.session.tools.tool_name
        if not is_tool_mutating(tool_name):
            return self._pick(*tile)
        if tool_name == "bucket":
            return self._fill(*tile)

        return self._stroke(*tile)

    def _handle_pointer_move(self: Self, event: PointerMove) -> tuple[Effect, ...]:
        """
        Handles a pointer movement, it refreshes the hovered tile and continues the stroke.

        Args:
            event
        Returns:
            effects
        """

        effects: tuple[Effect, ...] = ()

        tile: XY | None = self.session.get_tile_at(event.x, event.y)
        if tile != self.session.hovered_tile:
            self.session.hovered_tile = tile
            effects += (Redraw(),)

        if (
            tile is not None and self.session.stroke.is_active and
            is_tool_draggable(self.session.tools.tool_name)
        ):
            effects += self._stroke(*tile)

        return effects

    def _handle_pointer_up(self: Self) -> tuple[Effect, ...]:
        """
        Handles a pointer release, it ends the stroke and schedules the save.

        Returns:
            effects
        """

        if not self.session.stroke.is_active:
            return ()

        self.session.stroke = StrokeState()
        assert self.session.grid is not None
        return (ScheduleSave(self.session.grid),)

    def _handle_history_move(self: Self, event: HistoryMove) -> tuple[Effect, ...]:
        """
        Handles undo and redo outside the stroke.

        Args:
            event
        Returns:
            effects
        """

        if self.session.grid is None:
            return ()

        new_grid: PixelGrid | None = (
            self.session.history.undo(self.session.grid) if event.move_type == "undo" else
            self.session.history.redo(self.session.grid)
        )
        if new_grid is None:
            return ()

        # A stroke can't continue on a replaced grid without its own checkpoint
        self.session.stroke = StrokeState()
        self.session.grid = new_grid
        return (Redraw(), ScheduleSave(new_grid))

    def handle_event(self: Self, event: Event) -> tuple[Effect, ...]:
        """
        Applies an event to the session.

        Args:
            event
        Returns:
            effects
        """

        if self.session.grid is None:
            return ()

        if   isinstance(event, PointerDown):
            return self._handle_pointer_down(event)
        elif isinstance(event, PointerMove):
            return self._handle_pointer_move(event)
        elif isinstance(event, PointerUp):
            return self._handle_pointer_up()
        elif isinstance(event, HistoryMove):
            return self._handle_history_move(event)

        return ()
