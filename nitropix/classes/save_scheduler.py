"""
Debounced hand-off of the grid to a save function.

Scheduling again before the delay elapses restarts the timer and replaces the pending grid,
there's at most one pending save.
Once fired, a save runs on a separate thread and can't be cancelled.
"""

from threading import Thread
from collections.abc import Callable
from sys import stderr
from traceback import format_exc
from typing import Self

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.stroke_controller import Effect, ScheduleSave, CancelSave
from nitropix.img_utils import GridSaveError
from nitropix.type_utils import SaveStatus
from nitropix.consts import SAVE_DELAY_MS


class SaveScheduler:
    """Class to save the grid once it stops changing for a while."""

    __slots__ = (
        "_save_func", "delay_ms", "_pending_grid", "_due_ticks", "_thread",
        "status", "error_str",
    )

    def __init__(
            self: Self, save_func: Callable[[PixelGrid], None], delay_ms: int = SAVE_DELAY_MS
    ) -> None:
        """
        Initializes the info.

        Args:
            save function (raises GridSaveError on failure),
            delay in milliseconds (default = SAVE_DELAY_MS, 0 saves on the next update)
        """

        self._save_func: Callable[[PixelGrid], None] = save_func
        self.delay_ms: int = max(delay_ms, 0)

        self._pending_grid: PixelGrid | None = None
        self._due_ticks: int = 0
        self._thread: Thread | None = None

        self.status: SaveStatus = "idle"
        self.error_str: str = ""

    @property
    def is_pending(self: Self) -> bool:
        """
        Checks if a save is waiting for the timer.

        Returns:
            pending flag
        """

        return self._pending_grid is not None

    def schedule(self: Self, grid: PixelGrid, ticks: int) -> None:
        """
        (Re)starts the timer, the grid replaces the previous pending one.

        Args:
            grid, current ticks
        """

        self._pending_grid = grid
        self._due_ticks = ticks + self.delay_ms

    def cancel(self: Self) -> None:
        """Cancels the pending save, a running one isn't affected."""

        self._pending_grid = None

    def handle_effects(self: Self, effects: tuple[Effect, ...], ticks: int) -> None:
        """
        Schedules or cancels the save using the controller effects.

        Args:
            effects, current ticks
        """

        effect: Effect

        for effect in effects:
            if   isinstance(effect, ScheduleSave):
                self.schedule(effect.grid, ticks)
            elif isinstance(effect, CancelSave):
                self.cancel()

    def _save(self: Self, grid: PixelGrid) -> None:
        """
        Runs the save function and records the outcome.

        Args:
            grid
        """

        try:
            self._save_func(grid)
            self.status, self.error_str = "saved", ""
        except GridSaveError as e:
            # The grid and history in memory are untouched
            self.status, self.error_str = "failed", e.error_str
            print(f"Image Save Failed\n{e.error_str}", file=stderr)
        except Exception:
            # Every failure reaches the title
            self.status, self.error_str = "failed", "Unexpected error."
            print(f"Image Save Failed\n{format_exc()}", file=stderr)

    def upt(self: Self, ticks: int, should_wait: bool = False) -> bool:
        """
        Starts the pending save if its delay elapsed.

        Args:
            current ticks, wait for the save flag (default = False)
        Returns:
            started flag
        """

        if self._pending_grid is None or ticks < self._due_ticks:
            return False
        # Saves of the same file can't overlap, it fires once the running one ends
        if self._thread is not None and self._thread.is_alive():
            return False

        # Later edits can't reach the grid that is being written
        grid: PixelGrid = self._pending_grid.copy()
        self._pending_grid = None
        self.status = "saving"

        self._thread = Thread(target=self._save, args=(grid,), daemon=True)
        self._thread.start()
        if should_wait:
            self.wait()

        return True

    def flush(self: Self) -> None:
        """Starts the pending save immediately and waits for it."""

        self.wait()
        if self._pending_grid is not None:
            self.upt(self._due_ticks, should_wait=True)

    def wait(self: Self) -> None:
        """Waits for the last started save to finish."""

        if self._thread is not None:
            self._thread.join()
