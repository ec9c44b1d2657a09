"""Functions shared between files."""

from functools import cache

import pygame as pg
import numpy as np
from numpy import int32, bool_
from numpy.typing import NDArray

from nitropix.type_utils import XY, RGBColor, HexColor


def get_tile_at(
        x: int, y: int, origin: XY, zoom: int,
        cols: int, rows: int
) -> XY | None:
    """
    Gets the grid tile under a screen position.

    Args:
        x coordinate, y coordinate, canvas origin, zoom (screen pixels per tile),
        columns, rows
    Returns:
        column and row (None if outside the grid)
    """

    # Floor division keeps positions left/above the origin negative
    col: int = (x - origin[0]) // zoom
    row: int = (y - origin[1]) // zoom
    if not (0 <= col < cols and 0 <= row < rows):
        return None

    return col, row


@cache
def get_disk_offsets(radius: int) -> NDArray[int32]:
    """
    Gets the offsets of a filled disk, a tile is inside if dx² + dy² <= radius².

    Args:
        radius
    Returns:
        offsets with shape (N, 2) as (dx, dy)
    """

    side_range: NDArray[int32] = np.arange(-radius, radius + 1, dtype=int32)
    dxs: NDArray[int32] = np.tile(  side_range, side_range.size)
    dys: NDArray[int32] = np.repeat(side_range, side_range.size)
    is_inside: NDArray[bool_] = (dxs * dxs) + (dys * dys) <= radius * radius

    offsets: NDArray[int32] = np.stack((dxs[is_inside], dys[is_inside]), axis=1)
    offsets.flags.writeable = False  # Cached
    return offsets


def hex_to_rgb(hex_color: HexColor) -> RGBColor:
    """
    Converts a hexadecimal color to rgb.

    Args:
        hexadecimal color (with or without #)
    Returns:
        rgb color
    Raises:
        ValueError: on invalid color
    """

    color: pg.Color = pg.Color("#" + hex_color.lstrip("#"))
    return color.r, color.g, color.b


def rgb_to_hex(rgb_color: RGBColor) -> HexColor:
    """
    Converts an rgb color to hexadecimal.

    Args:
        rgb color
    Returns:
        hexadecimal color (without #)
    """

    return "{:02x}{:02x}{:02x}".format(*rgb_color)
