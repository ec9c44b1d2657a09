"""
Algorithms of the drawing tools.

Every tool works on a single center tile, centers outside the grid are ignored.
Tools never raise, an action that can't do anything is a no-op.
"""

from dataclasses import dataclass

import numpy as np
from numpy import uint8, uint32, int32, bool_
from numpy.typing import NDArray

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.tools_manager import ToolsManager
from nitropix.utils import get_disk_offsets
from nitropix.type_utils import XY, RGBColor, RGBAColor
from nitropix.consts import TRANSPARENT, OPAQUE_ALPHA


@dataclass(frozen=True, slots=True)
class ToolResult:
    """
    Dataclass for storing the outcome of a tool.

    Args:
        drawn flag, picked color (can be None)
    """

    did_draw: bool
    picked_color: RGBColor | None = None


_NO_OP: ToolResult = ToolResult(False)


def _pack(rgba_color: RGBAColor) -> uint32:
    """
    Packs an rgba color in a uint32 to compare it with a tiles view.

    Args:
        rgba color
    Returns:
        packed color
    """

    return np.array(rgba_color, uint8).view(uint32)[0]


def _disk(grid: PixelGrid, col: int, row: int, radius: int, rgba_color: RGBAColor) -> bool:
    """
    Sets the tiles of a filled disk to a color.

    Args:
        grid, center column, center row, radius, rgba color
    Returns:
        drawn flag
    """

    offsets: NDArray[int32] = get_disk_offsets(radius)
    xs: NDArray[int32] = offsets[:, 0] + col
    ys: NDArray[int32] = offsets[:, 1] + row
    is_in_bounds: NDArray[bool_] = (xs >= 0) & (xs < grid.cols) & (ys >= 0) & (ys < grid.rows)
    xs, ys = xs[is_in_bounds], ys[is_in_bounds]

    # Packs a color as a uint32 and compares
    tiles_view: NDArray[uint32] = grid.tiles.view(uint32)[..., 0]
    did_draw: bool = bool((tiles_view[ys, xs] != _pack(rgba_color)).any())
    if did_draw:
        grid.tiles[ys, xs] = rgba_color

    return did_draw


def pen(grid: PixelGrid, col: int, row: int, radius: int, rgb_color: RGBColor) -> bool:
    """
    Colors a filled disk.

    Args:
        grid, center column, center row, radius, rgb color
    Returns:
        drawn flag
    """

    return _disk(grid, col, row, radius, (*rgb_color, OPAQUE_ALPHA))


def eraser(grid: PixelGrid, col: int, row: int, radius: int) -> bool:
    """
    Makes a filled disk transparent.

    Args:
        grid, center column, center row, radius
    Returns:
        drawn flag
    """

    return _disk(grid, col, row, radius, TRANSPARENT)


def bucket(grid: PixelGrid, col: int, row: int, rgb_color: RGBColor) -> bool:
    """
    Fills the 4-connected area with the same color as the center using an explicit stack.

    Args:
        grid, center column, center row, rgb color
    Returns:
        drawn flag
    """

    x: int
    y: int

    fill_color: RGBAColor = (*rgb_color, OPAQUE_ALPHA)
    tiles_view: NDArray[uint32] = grid.tiles.view(uint32)[..., 0]
    target: uint32 = tiles_view[row, col]
    if target == _pack(fill_color):
        return False

    # Matching is done on the tiles before the fill, visited tiles are never pushed again
    mask: NDArray[bool_] = tiles_view == target
    visited: NDArray[bool_] = np.zeros((grid.rows, grid.cols), bool_)
    cols: int = grid.cols
    rows: int = grid.rows

    stack: list[XY] = [(col, row)]
    stack_pop, stack_append = stack.pop, stack.append
    while stack:
        x, y = stack_pop()
        if visited[y, x] or not mask[y, x]:
            continue
        visited[y, x] = True

        if x > 0:
            stack_append((x - 1, y))
        if x < cols - 1:
            stack_append((x + 1, y))
        if y > 0:
            stack_append((x, y - 1))
        if y < rows - 1:
            stack_append((x, y + 1))

    grid.tiles[visited] = fill_color
    return True


def eye_dropper(grid: PixelGrid, col: int, row: int) -> RGBColor | None:
    """
    Reads the color of a tile.

    Args:
        grid, column, row
    Returns:
        rgb color (None if transparent)
    """

    r, g, b, a = grid.get_at(col, row)
    return None if a == 0 else (r, g, b)


def apply_tool(grid: PixelGrid, tools: ToolsManager, col: int, row: int) -> ToolResult:
    """
    Applies the active tool centered on a tile.

    Args:
        grid, tools, center column, center row
    Returns:
        result
    """

    if not grid.is_in_bounds(col, row):
        return _NO_OP

    if   tools.tool_name == "pen":
        return ToolResult(pen(grid, col, row, tools.brush_radius, tools.brush_color))
    elif tools.tool_name == "eraser":
        return ToolResult(eraser(grid, col, row, tools.brush_radius))
    elif tools.tool_name == "bucket":
        return ToolResult(bucket(grid, col, row, tools.brush_color))
    elif tools.tool_name == "eye_dropper":
        return ToolResult(False, eye_dropper(grid, col, row))

    return _NO_OP
