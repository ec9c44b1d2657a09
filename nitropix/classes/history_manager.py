"""
Bounded undo/redo history of grid snapshots.

Snapshots are compressed immutable copies, editing the live grid never changes them.
"""

from collections import deque
from typing import Self

from nitropix.classes.pixel_grid import PixelGrid, HistorySnapshot
from nitropix.consts import HISTORY_MAX_SIZE


class HistoryManager:
    """Class to store the undo and redo stacks."""

    __slots__ = (
        "_undo_stack", "_redo_stack",
    )

    def __init__(self: Self, max_size: int = HISTORY_MAX_SIZE) -> None:
        """
        Creates the empty stacks.

        Args:
            maximum undo stack size (default = HISTORY_MAX_SIZE)
        """

        # The oldest snapshot is dropped automatically when full
        self._undo_stack: deque[HistorySnapshot] = deque(maxlen=max(max_size, 1))
        self._redo_stack: deque[HistorySnapshot] = deque(maxlen=max(max_size, 1))

    @property
    def max_size(self: Self) -> int:
        """
        Gets the maximum size of the undo stack.

        Returns:
            maximum size
        """

        assert self._undo_stack.maxlen is not None
        return self._undo_stack.maxlen

    @property
    def num_undos(self: Self) -> int:
        """
        Gets the number of available undos.

        Returns:
            number of undos
        """

        return len(self._undo_stack)

    @property
    def num_redos(self: Self) -> int:
        """
        Gets the number of available redos.

        Returns:
            number of redos
        """

        return len(self._redo_stack)

    def set_max_size(self: Self, max_size: int) -> None:
        """
        Changes the maximum size, the newest snapshots are kept.

        Args:
            maximum size
        """

        max_size = max(max_size, 1)
        self._undo_stack = deque(self._undo_stack, maxlen=max_size)
        self._redo_stack = deque(self._redo_stack, maxlen=max_size)

    def clear(self: Self) -> None:
        """Removes every snapshot."""

        self._undo_stack.clear()
        self._redo_stack.clear()

    def checkpoint(self: Self, grid: PixelGrid) -> None:
        """
        Adds a snapshot of the grid to the undo stack and discards the redo stack.

        Args:
            grid
        """

        self._undo_stack.append(grid.snapshot())
        self._redo_stack.clear()

    def undo(self: Self, grid: PixelGrid) -> PixelGrid | None:
        """
        Goes back to the previous snapshot, the current grid can be redone.

        Args:
            current grid
        Returns:
            previous grid (None if there's nothing to undo)
        """

        if not self._undo_stack:
            return None

        self._redo_stack.append(grid.snapshot())
        return PixelGrid.from_snapshot(self._undo_stack.pop())

    def redo(self: Self, grid: PixelGrid) -> PixelGrid | None:
        """
        Goes forward to the next snapshot, the current grid can be undone.

        Args:
            current grid
        Returns:
            next grid (None if there's nothing to redo)
        """

        if not self._redo_stack:
            return None

        self._undo_stack.append(grid.snapshot())
        return PixelGrid.from_snapshot(self._redo_stack.pop())
