"""
Pixel editor for the image embedded in an asset.

----------INFO----------
The window shows a single grid, edited with 4 tools, the image is saved automatically.

Editing:
    Mouse and keyboard events are turned into PointerDown, PointerMove, PointerUp and HistoryMove
    events, the StrokeController applies them to the EditorSession
    and returns the side effects (redraw, schedule/cancel save, brush color change).

Saving:
    Every finished edit (re)starts the SaveScheduler timer,
    the grid is written on a separate thread once it stops changing for save_delay_ms,
    a failed save is shown in the title and the edits stay in memory.

Keyboard input:
    P, E, B, I: pen, eraser, bucket, eye dropper
    1-9, 0: brush size 1-10
    +, - (or CTRL+wheel): zoom
    G: grid overlay
    CTRL+Z: undo, CTRL+Y or CTRL+SHIFT+Z: redo
    CTRL+O: open, CTRL+E: export an edited copy
"""

import os

from tkinter import filedialog
from threading import Thread
from sys import argv, stderr
from traceback import format_exc
from typing import Self, Final, Any

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import pygame as pg
from pygame.locals import *

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.history_manager import HistoryManager
from nitropix.classes.tools_manager import ToolsManager
from nitropix.classes.stroke_controller import (
    EditorSession, StrokeController,
    Event, Effect, PointerDown, PointerMove, PointerUp, HistoryMove, Redraw,
    get_history_move,
)
from nitropix.classes.save_scheduler import SaveScheduler
from nitropix.classes.render_view import RenderView

from nitropix.img_utils import (
    GridLoadError, GridSaveError,
    ensure_png_suffix, get_export_path, try_load_grid, try_save_grid,
)
from nitropix.settings import try_get_settings, try_save_settings
from nitropix.type_utils import XY, WH, HistoryMoveType
from nitropix.consts import MIN_BRUSH_DIM, MOUSE_LEFT

_WIN_INIT_W: Final[int] = 1_000
_WIN_INIT_H: Final[int] = 800
_CANVAS_ORIGIN: Final[XY] = (16, 16)
_BG_COLOR: Final[pg.Color] = pg.Color(50, 50, 50)
_FPS_CAP: Final[int] = 60
_DEFAULT_GRID_WH: Final[WH] = (32, 32)

_OPEN_REQUEST: Final[int] = pg.event.custom_type()

_BRUSH_DIM_KEYS: Final[tuple[int, ...]] = (K_1, K_2, K_3, K_4, K_5, K_6, K_7, K_8, K_9, K_0)


def _parse_argv() -> tuple[str, list[str]]:
    """
    Gets the file string and flags from cmd args.

    Returns:
        file string, flags
    """

    file_str: str = ""
    flags: list[str] = []
    should_parse_flags: bool = True
    for arg in argv[1:]:
        if arg == "--":
            should_parse_flags = False
        elif should_parse_flags and arg.startswith("--"):
            flags.append(arg.lower())
        elif file_str == "":
            file_str = arg

    return ensure_png_suffix(file_str), flags


def _get_new_grid_wh(flags: list[str]) -> WH:
    """
    Gets the size of a new grid from the --size=WxH flag.

    Args:
        flags
    Returns:
        size
    """

    for flag in flags:
        if flag.startswith("--size="):
            try:
                w_str, h_str = flag.removeprefix("--size=").split("x")
                return max(int(w_str), 1), max(int(h_str), 1)
            except ValueError:
                print(f"Invalid size: {flag}, using {_DEFAULT_GRID_WH}.", file=stderr)

    return _DEFAULT_GRID_WH


def _ask_open_file() -> None:
    """Asks a file to open and posts it as an event."""

    file_str: str = filedialog.askopenfilename(
        defaultextension=".png", filetypes=[("Png Files", "*.png")], title="Open",
    )
    if file_str != "":
        pg.event.post(pg.Event(_OPEN_REQUEST, {"file_str": file_str}))


class _Nitropix:
    """Class to manage the editor window."""

    __slots__ = (
        "_win", "_win_surf", "_clock", "_ticks",
        "_settings", "_file_str", "_session", "_controller", "_scheduler", "_view",
        "_should_redraw", "_view_img", "_prev_title",
    )

    def __init__(self: Self) -> None:
        """Loads the settings and the grid then creates the window."""

        self._settings: dict[str, Any] = try_get_settings()
        grid: PixelGrid = self._handle_argv_grid()

        tools: ToolsManager = ToolsManager()
        tools.set_info(self._settings)
        self._session: EditorSession = EditorSession(
            history=HistoryManager(self._settings["history_max_size"]),
            tools=tools,
            canvas_origin=_CANVAS_ORIGIN,
        )
        self._session.set_grid(grid)
        self._controller: StrokeController = StrokeController(self._session)
        self._scheduler: SaveScheduler = self._create_scheduler()
        self._view: RenderView = RenderView(self._settings["is_grid_overlay_on"])

        self._win: pg.Window = pg.Window(
            "nitropix", (_WIN_INIT_W, _WIN_INIT_H),
            resizable=True, allow_high_dpi=True
        )
        self._win_surf: pg.Surface = self._win.get_surface()
        self._clock: pg.Clock = pg.Clock()
        self._ticks: int = pg.time.get_ticks()

        self._should_redraw: bool = True
        self._view_img: pg.Surface = pg.Surface((0, 0))
        self._prev_title: str = ""

    def _handle_argv_grid(self: Self) -> PixelGrid:
        """
        Loads the grid of the file in the cmd args, it creates it with --mk-file.

        Returns:
            grid
        Raises:
            SystemExit: on --help or on failure
        """

        flags: list[str]

        self._file_str, flags = _parse_argv()
        if "--help" in flags or self._file_str == "":
            print(
                f"Usage: {argv[0]} <file path> <optional flags>\n"
                f"Example: {argv[0]} sprite (.png is default)\n"

                "FLAGS:\n"
                f"\t--mk-file: create the file if missing ({argv[0]} new_file --mk-file)\n"
                f"\t--size=WxH: size of a created file ({argv[0]} new_file --mk-file --size=64x32)"
            )
            raise SystemExit

        try:
            return try_load_grid(self._file_str)
        except GridLoadError as e:
            if os.path.exists(self._file_str) or "--mk-file" not in flags:
                print(f"Image Load Failed\n{e.error_str}", file=stderr)
                raise SystemExit from e

        grid: PixelGrid = PixelGrid.empty(*_get_new_grid_wh(flags))
        try:
            try_save_grid(grid, self._file_str)
        except GridSaveError as e:
            print(f"Image Save Failed\n{e.error_str}", file=stderr)
            raise SystemExit from e

        return grid

    def _create_scheduler(self: Self) -> SaveScheduler:
        """
        Creates the save scheduler of the current file.

        Returns:
            scheduler
        """

        file_str: str = self._file_str
        return SaveScheduler(
            lambda grid: try_save_grid(grid, file_str),
            self._settings["save_delay_ms"]
        )

    def _handle_effects(self: Self, effects: tuple[Effect, ...]) -> None:
        """
        Performs the side effects of the controller.

        Args:
            effects
        """

        self._scheduler.handle_effects(effects, self._ticks)
        if any(isinstance(effect, Redraw) for effect in effects):
            self._should_redraw = True

    def _open(self: Self, file_str: str) -> None:
        """
        Replaces the grid with the one in a file, on failure the current grid is kept.

        Args:
            file string
        """

        try:
            grid: PixelGrid = try_load_grid(file_str)
        except GridLoadError as e:
            print(f"Image Load Failed\n{e.error_str}", file=stderr)
            return

        self._handle_effects(self._controller.handle_event(PointerUp()))
        self._scheduler.flush()
        self._file_str = file_str
        self._scheduler = self._create_scheduler()
        self._session.set_grid(grid)
        self._should_redraw = True

    def _export(self: Self) -> None:
        """Saves an edited copy next to the file."""

        assert self._session.grid is not None
        export_file_str: str = get_export_path(self._file_str)
        try:
            try_save_grid(self._session.grid, export_file_str)
        except GridSaveError as e:
            print(f"Image Export Failed\n{e.error_str}", file=stderr)

    def _handle_key_down(self: Self, k: int) -> Event | None:
        """
        Handles shortcuts, history chords are returned as events.

        Args:
            key
        Returns:
            event (can be None)
        """

        mods: int = pg.key.get_mods()
        is_ctrl_on: bool  = (mods & KMOD_CTRL ) != 0
        is_shift_on: bool = (mods & KMOD_SHIFT) != 0

        history_move_type: HistoryMoveType | None = get_history_move(k, is_ctrl_on, is_shift_on)
        if history_move_type is not None:
            return HistoryMove(history_move_type)

        tools: ToolsManager = self._session.tools
        if is_ctrl_on:
            if k == K_e:
                self._export()
            elif k == K_o:
                Thread(target=_ask_open_file, daemon=True).start()
        elif tools.handle_shortcut(k):
            self._should_redraw = True
        elif k in _BRUSH_DIM_KEYS:
            tools.brush_dim = _BRUSH_DIM_KEYS.index(k) + MIN_BRUSH_DIM
            self._should_redraw = True
        elif k in (K_PLUS, K_EQUALS, K_KP_PLUS, K_MINUS, K_KP_MINUS):
            tools.zoom += 1 if k in (K_PLUS, K_EQUALS, K_KP_PLUS) else -1
            self._should_redraw = True
        elif k == K_g:
            self._view.is_grid_overlay_on = not self._view.is_grid_overlay_on
            self._should_redraw = True

        return None

    def _handle_events(self: Self) -> None:
        """
        Handles the events.

        Raises:
            SystemExit: on window close
        """

        event: pg.Event

        for event in pg.event.get():
            controller_event: Event | None = None
            if event.type == WINDOWCLOSE:
                self._quit()
            elif event.type == MOUSEBUTTONDOWN and event.button == MOUSE_LEFT:
                controller_event = PointerDown(*event.pos)
            elif event.type == MOUSEMOTION:
                controller_event = PointerMove(*event.pos)
            elif event.type == MOUSEBUTTONUP and event.button == MOUSE_LEFT:
                controller_event = PointerUp()
            elif event.type == MOUSEWHEEL and (pg.key.get_mods() & KMOD_CTRL):
                self._session.tools.zoom += 1 if event.y > 0 else -1
                self._should_redraw = True
            elif event.type == KEYDOWN:
                controller_event = self._handle_key_down(event.key)
            elif event.type == WINDOWSIZECHANGED:
                self._win_surf = self._win.get_surface()
                self._should_redraw = True
            elif event.type == _OPEN_REQUEST:
                self._open(event.file_str)

            if controller_event is not None:
                self._handle_effects(self._controller.handle_event(controller_event))

    def _refresh_title(self: Self) -> None:
        """Refreshes the title with the file name and the save status."""

        status_str: str = ""
        if self._scheduler.is_pending:
            status_str = " *"
        elif self._scheduler.status == "saving":
            status_str = " (Saving...)"
        elif self._scheduler.status == "failed":
            status_str = f" (Save Failed: {self._scheduler.error_str})"

        title: str = f"nitropix - {os.path.basename(self._file_str)}{status_str}"
        if title != self._prev_title:
            self._win.title = self._prev_title = title

    def _draw(self: Self) -> None:
        """Draws the grid if it changed."""

        if self._should_redraw and self._session.grid is not None:
            self._view_img = self._view.get_img(
                self._session.grid, self._session.tools, self._session.hovered_tile
            )
            self._should_redraw = False

        self._win_surf.fill(_BG_COLOR)
        self._win_surf.blit(self._view_img, _CANVAS_ORIGIN)
        self._win.flip()

    def _quit(self: Self) -> None:
        """
        Writes the pending save and the settings.

        Raises:
            SystemExit: always
        """

        # An unfinished stroke is ended to schedule its save
        self._handle_effects(self._controller.handle_event(PointerUp()))
        self._scheduler.flush()
        self._settings.update(self._session.tools.get_info())
        self._settings["is_grid_overlay_on"] = self._view.is_grid_overlay_on
        self._settings["history_max_size"] = self._session.history.max_size
        try_save_settings(self._settings)

        pg.quit()
        raise SystemExit

    def run(self: Self) -> None:
        """App loop."""

        try:
            while True:
                self._clock.tick(_FPS_CAP)
                self._ticks = pg.time.get_ticks()

                self._handle_events()
                self._scheduler.upt(self._ticks)
                self._refresh_title()
                self._draw()
        except KeyboardInterrupt:
            self._quit()
        except Exception:
            # Edits in memory are written before crashing
            self._scheduler.flush()
            print(format_exc(), file=stderr)

        pg.quit()


if __name__ == "__main__":
    pg.init()
    _Nitropix().run()
