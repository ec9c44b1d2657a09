"""
Projection of the grid on the screen.

Draws a checkerboard behind transparent tiles, an optional grid overlay and the brush preview,
it never changes the grid.
"""

from typing import Self

import pygame as pg
import numpy as np
import cv2
from numpy import uint8, uint16, int32, intp, bool_
from numpy.typing import NDArray

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.tools_manager import ToolsManager
from nitropix.utils import get_disk_offsets
from nitropix.type_utils import XY
from nitropix.consts import (
    CHECKER_LIGHT, CHECKER_DARK, CHECKER_MIN_DIM,
    GRID_OVERLAY_MIN_ZOOM, GRID_OVERLAY_ALPHA,
)


def _get_checkerboard(w: int, h: int, checker_dim: int) -> NDArray[uint8]:
    """
    Gets a checkerboard image.

    Args:
        width, height, side of a checker
    Returns:
        rgb pixels with shape (h, w, 3)
    """

    checker_xs: NDArray[intp] = np.arange(w) // checker_dim
    checker_ys: NDArray[intp] = np.arange(h) // checker_dim
    is_dark: NDArray[bool_] = ((checker_ys[:, np.newaxis] + checker_xs[np.newaxis, :]) % 2) == 1

    return np.where(
        is_dark[..., np.newaxis],
        np.array(CHECKER_DARK, uint8), np.array(CHECKER_LIGHT, uint8)
    )


class RenderView:
    """Class to draw a grid scaled by the zoom."""

    __slots__ = (
        "is_grid_overlay_on",
    )

    def __init__(self: Self, is_grid_overlay_on: bool = True) -> None:
        """
        Initializes the info.

        Args:
            grid overlay flag (default = True)
        """

        self.is_grid_overlay_on: bool = is_grid_overlay_on

    def _draw_grid_overlay(self: Self, img_arr: NDArray[uint8], zoom: int) -> None:
        """
        Darkens the first row and column of every tile.

        Args:
            image pixels, zoom
        """

        # Lookup table for every blend combination with black at GRID_OVERLAY_ALPHA
        color_range: NDArray[uint16] = np.arange(256, dtype=uint16)
        blend_lut: NDArray[uint8] = (
            (color_range * (255 - GRID_OVERLAY_ALPHA)) // 255
        ).astype(uint8)

        # Tiles corners are on both lines, they're darkened once
        lines_mask: NDArray[bool_] = np.zeros(img_arr.shape[:2], bool_)
        lines_mask[::zoom, :] = lines_mask[:, ::zoom] = True
        img_arr[lines_mask] = blend_lut[img_arr[lines_mask]]

    def _draw_brush_preview(
            self: Self, img_arr: NDArray[uint8], grid: PixelGrid, tools: ToolsManager, tile: XY
    ) -> None:
        """
        Draws the tiles the pen would color.

        Args:
            image pixels, grid, tools, hovered tile
        """

        offsets: NDArray[int32] = get_disk_offsets(tools.brush_radius)
        xs: NDArray[int32] = offsets[:, 0] + tile[0]
        ys: NDArray[int32] = offsets[:, 1] + tile[1]
        is_in_bounds: NDArray[bool_] = (xs >= 0) & (xs < grid.cols) & (ys >= 0) & (ys < grid.rows)

        preview_mask: NDArray[bool_] = np.zeros((grid.rows, grid.cols), bool_)
        preview_mask[ys[is_in_bounds], xs[is_in_bounds]] = True
        preview_mask = preview_mask.repeat(tools.zoom, 0).repeat(tools.zoom, 1)
        img_arr[preview_mask] = tools.brush_color

    def get_arr(
            self: Self, grid: PixelGrid, tools: ToolsManager, hovered_tile: XY | None = None
    ) -> NDArray[uint8]:
        """
        Gets the pixels of the view.

        Args:
            grid, tools, hovered tile (can be None)
        Returns:
            rgb pixels with shape (rows * zoom, cols * zoom, 3)
        """

        zoom: int = tools.zoom
        w: int = grid.cols * zoom
        h: int = grid.rows * zoom
        if w == 0 or h == 0:
            return np.zeros((h, w, 3), uint8)

        scaled_tiles: NDArray[uint8] = cv2.resize(
            grid.tiles, (w, h),
            interpolation=cv2.INTER_NEAREST
        )
        empty_mask: NDArray[bool_] = (scaled_tiles[..., 3] == 0)[..., np.newaxis]
        img_arr: NDArray[uint8] = np.where(
            empty_mask,
            _get_checkerboard(w, h, max(CHECKER_MIN_DIM, zoom)), scaled_tiles[..., :3]
        ).astype(uint8)

        if self.is_grid_overlay_on and zoom >= GRID_OVERLAY_MIN_ZOOM:
            self._draw_grid_overlay(img_arr, zoom)
        if hovered_tile is not None and tools.tool_name == "pen":
            self._draw_brush_preview(img_arr, grid, tools, hovered_tile)

        return img_arr

    def get_img(
            self: Self, grid: PixelGrid, tools: ToolsManager, hovered_tile: XY | None = None
    ) -> pg.Surface:
        """
        Gets the image of the view.

        Args:
            grid, tools, hovered tile (can be None)
        Returns:
            image
        """

        img_arr: NDArray[uint8] = self.get_arr(grid, tools, hovered_tile)
        if img_arr.size == 0:
            return pg.Surface((img_arr.shape[1], img_arr.shape[0]))

        # Pygame uses arrays as (x, y)
        return pg.surfarray.make_surface(img_arr.transpose((1, 0, 2)))
