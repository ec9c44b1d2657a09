"""Functions shared between tests."""

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.tools_manager import ToolsManager
from nitropix.classes.stroke_controller import EditorSession, StrokeController
from nitropix.type_utils import RGBAColor, ToolName
from nitropix.consts import TRANSPARENT


def make_grid(cols: int, rows: int, rgba_color: RGBAColor = TRANSPARENT) -> PixelGrid:
    """
    Creates a grid filled with a color.

    Args:
        columns, rows, rgba color (default = TRANSPARENT)
    Returns:
        grid
    """

    grid: PixelGrid = PixelGrid.empty(cols, rows)
    grid.tiles[...] = rgba_color
    return grid


def make_controller(
        grid: PixelGrid | None, tool_name: ToolName = "pen", brush_dim: int = 1
) -> StrokeController:
    """
    Creates a controller with zoom 1 and the canvas at (0, 0), screen positions are tiles.

    Args:
        grid (can be None), tool name (default = pen), brush dimension (default = 1)
    Returns:
        controller
    """

    session: EditorSession = EditorSession(tools=ToolsManager(tool_name, brush_dim=brush_dim))
    if grid is not None:
        session.set_grid(grid)

    return StrokeController(session)


def count_color(grid: PixelGrid, rgba_color: RGBAColor) -> int:
    """
    Counts the tiles with a color.

    Args:
        grid, rgba color
    Returns:
        count
    """

    return int((grid.tiles == rgba_color).all(axis=2).sum())
