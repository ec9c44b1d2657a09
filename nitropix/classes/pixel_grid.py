"""
Pixel buffer edited by the tools and its history snapshots.

Tiles are stored row-major as RGBA with shape (rows, cols, 4),
a tile is either opaque (alpha 255) or TRANSPARENT.
"""

from dataclasses import dataclass
from zlib import compress, decompress
from typing import Self, Any

import numpy as np
from numpy import uint8, bool_
from numpy.typing import NDArray

from nitropix.type_utils import RGBAColor
from nitropix.consts import TRANSPARENT, OPAQUE_ALPHA


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    """
    Dataclass for storing an immutable copy of the grid tiles.

    Args:
        columns, rows, compressed tiles
    """

    cols: int
    rows: int
    compressed_tiles: bytes


class PixelGrid:
    """Class to store a fixed size grid of pixels."""

    __slots__ = (
        "tiles",
    )

    def __init__(self: Self, tiles: NDArray[uint8]) -> None:
        """
        Wraps the tiles, they're only copied if not contiguous.

        Args:
            tiles with shape (rows, cols, 4)
        """

        assert tiles.ndim == 3 and tiles.shape[2] == 4, tiles.shape
        # Contiguous tiles can be viewed as packed uint32 colors
        self.tiles: NDArray[uint8] = np.ascontiguousarray(tiles, uint8)

    @classmethod
    def empty(cls: type[Self], cols: int, rows: int) -> Self:
        """
        Creates a fully transparent grid.

        Args:
            columns, rows
        Returns:
            grid
        """

        return cls(np.zeros((rows, cols, 4), uint8))

    @classmethod
    def from_rgba(cls: type[Self], rgba_arr: NDArray[Any]) -> Self:
        """
        Creates a grid from rgba values, alpha is reduced to fully opaque or transparent.

        Args:
            rgba values with shape (rows, cols, 4)
        Returns:
            grid
        """

        tiles: NDArray[uint8] = np.array(rgba_arr, uint8)  # Always copies
        empty_tiles_mask: NDArray[bool_] = tiles[..., 3] == 0
        tiles[empty_tiles_mask] = TRANSPARENT
        tiles[~empty_tiles_mask, 3] = OPAQUE_ALPHA
        return cls(tiles)

    @classmethod
    def from_snapshot(cls: type[Self], snapshot: HistorySnapshot) -> Self:
        """
        Creates a grid from a history snapshot.

        Args:
            snapshot
        Returns:
            grid
        """

        # Copying makes it writable
        tiles_1d: NDArray[uint8] = np.frombuffer(decompress(snapshot.compressed_tiles), uint8).copy()
        return cls(tiles_1d.reshape((snapshot.rows, snapshot.cols, 4)))

    @property
    def cols(self: Self) -> int:
        """
        Gets the number of columns.

        Returns:
            columns
        """

        return self.tiles.shape[1]

    @property
    def rows(self: Self) -> int:
        """
        Gets the number of rows.

        Returns:
            rows
        """

        return self.tiles.shape[0]

    def is_in_bounds(self: Self, col: int, row: int) -> bool:
        """
        Checks if a tile is inside the grid.

        Args:
            column, row
        Returns:
            inside flag
        """

        return 0 <= col < self.cols and 0 <= row < self.rows

    def get_at(self: Self, col: int, row: int) -> RGBAColor:
        """
        Gets the color of a tile.

        Args:
            column, row
        Returns:
            rgba color
        """

        r, g, b, a = self.tiles[row, col].tolist()
        return r, g, b, a

    def set_at(self: Self, col: int, row: int, rgba_color: RGBAColor) -> None:
        """
        Sets the color of a tile.

        Args:
            column, row, rgba color
        """

        self.tiles[row, col] = rgba_color

    def copy(self: Self) -> "PixelGrid":
        """
        Copies the grid without sharing memory.

        Returns:
            grid
        """

        return PixelGrid(self.tiles.copy())

    def snapshot(self: Self) -> HistorySnapshot:
        """
        Creates an immutable snapshot of the tiles.

        Returns:
            snapshot
        """

        return HistorySnapshot(self.cols, self.rows, compress(self.tiles.tobytes()))

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented

        return self.tiles.shape == other.tiles.shape and np.array_equal(self.tiles, other.tiles)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self: Self) -> str:
        return f"PixelGrid(cols={self.cols}, rows={self.rows})"
