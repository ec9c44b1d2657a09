"""Tests for the stroke_controller file."""

from unittest import TestCase
from typing import Self

from pygame.locals import *

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.classes.stroke_controller import (
    StrokeController, Effect,
    PointerDown, PointerMove, PointerUp, HistoryMove,
    Redraw, ScheduleSave, CancelSave, BrushColorChanged,
    get_history_move,
)
from nitropix.consts import TRANSPARENT

from tests.utils import make_grid, make_controller, count_color


class TestStrokeController(TestCase):
    """Tests for the StrokeController class."""

    def test_stroke_checkpoint(self: Self) -> None:
        """Tests that a stroke with many movements takes a single checkpoint."""

        i: int

        grid: PixelGrid = PixelGrid.empty(10, 10)
        controller: StrokeController = make_controller(grid)
        controller.session.tools.brush_color = (255, 0, 0)

        effects: tuple[Effect, ...] = controller.handle_event(PointerDown(0, 0))
        self.assertTupleEqual(effects, (CancelSave(), Redraw()))
        for i in range(1, 50):
            controller.handle_event(PointerMove(i % 10, i // 10))
        self.assertEqual(controller.session.history.num_undos, 1)
        self.assertEqual(count_color(grid, (255, 0, 0, 255)), 50)

        effects = controller.handle_event(PointerUp())
        self.assertTupleEqual(effects, (ScheduleSave(grid),))
        self.assertFalse(controller.session.stroke.is_active)

        controller.handle_event(HistoryMove("undo"))
        self.assertEqual(controller.session.grid, PixelGrid.empty(10, 10))

    def test_pointer_move(self: Self) -> None:
        """Tests that moving without a stroke only updates the hovered tile."""

        grid: PixelGrid = PixelGrid.empty(4, 4)
        controller: StrokeController = make_controller(grid)

        self.assertTupleEqual(controller.handle_event(PointerMove(1, 2)), (Redraw(),))
        self.assertTupleEqual(controller.session.hovered_tile, (1, 2))
        self.assertTupleEqual(controller.handle_event(PointerMove(1, 2)), ())
        self.assertTupleEqual(controller.handle_event(PointerMove(9, 9)), (Redraw(),))
        self.assertIsNone(controller.session.hovered_tile)

        self.assertEqual(grid, PixelGrid.empty(4, 4))
        self.assertEqual(controller.session.history.num_undos, 0)

    def test_stroke_outside(self: Self) -> None:
        """Tests a stroke that starts outside and enters the grid."""

        grid: PixelGrid = PixelGrid.empty(4, 4)
        controller: StrokeController = make_controller(grid)

        self.assertTupleEqual(controller.handle_event(PointerDown(-1, 0)), ())
        self.assertTupleEqual(controller.handle_event(PointerMove(0, 0)), (Redraw(),))
        self.assertTupleEqual(controller.handle_event(PointerUp()), ())
        self.assertEqual(grid, PixelGrid.empty(4, 4))
        self.assertEqual(controller.session.history.num_undos, 0)

    def test_stroke_leaving(self: Self) -> None:
        """Tests a stroke that leaves the grid and comes back."""

        grid: PixelGrid = PixelGrid.empty(4, 4)
        controller: StrokeController = make_controller(grid, "eraser")
        grid.tiles[...] = 255

        controller.handle_event(PointerDown(0, 0))
        controller.handle_event(PointerMove(-5, 0))
        self.assertTrue(controller.session.stroke.is_active)
        controller.handle_event(PointerMove(3, 3))
        controller.handle_event(PointerUp())

        self.assertEqual(count_color(grid, TRANSPARENT), 2)
        self.assertEqual(controller.session.history.num_undos, 1)

    def test_eye_dropper(self: Self) -> None:
        """Tests that the eye dropper changes the brush without checkpoints or saves."""

        grid: PixelGrid = PixelGrid.empty(2, 1)
        grid.set_at(0, 0, (1, 2, 3, 255))
        controller: StrokeController = make_controller(grid, "eye_dropper")

        effects: tuple[Effect, ...] = controller.handle_event(PointerDown(0, 0))
        self.assertTupleEqual(effects, (BrushColorChanged((1, 2, 3)), Redraw()))
        self.assertTupleEqual(controller.session.tools.brush_color, (1, 2, 3))

        self.assertTupleEqual(controller.handle_event(PointerDown(1, 0)), ())
        self.assertTupleEqual(controller.session.tools.brush_color, (1, 2, 3))
        self.assertTupleEqual(controller.handle_event(PointerUp()), ())
        self.assertEqual(controller.session.history.num_undos, 0)

    def test_bucket(self: Self) -> None:
        """Tests that the bucket checkpoints and saves, filling with the same color is ignored."""

        grid: PixelGrid = PixelGrid.empty(3, 3)
        controller: StrokeController = make_controller(grid, "bucket")

        effects: tuple[Effect, ...] = controller.handle_event(PointerDown(1, 1))
        self.assertTupleEqual(effects, (Redraw(), ScheduleSave(grid)))
        self.assertEqual(count_color(grid, (0, 0, 0, 255)), 9)
        self.assertEqual(controller.session.history.num_undos, 1)

        self.assertTupleEqual(controller.handle_event(PointerDown(0, 0)), ())
        self.assertTupleEqual(controller.handle_event(PointerMove(2, 2)), (Redraw(),))
        self.assertTupleEqual(controller.handle_event(PointerUp()), ())
        self.assertEqual(controller.session.history.num_undos, 1)

    def test_history_move(self: Self) -> None:
        """Tests undo and redo through events."""

        grid: PixelGrid = PixelGrid.empty(2, 2)
        controller: StrokeController = make_controller(grid)

        self.assertTupleEqual(controller.handle_event(HistoryMove("undo")), ())

        controller.handle_event(PointerDown(0, 0))
        controller.handle_event(PointerUp())
        drawn_grid: PixelGrid = grid.copy()

        effects: tuple[Effect, ...] = controller.handle_event(HistoryMove("undo"))
        undone_grid: PixelGrid | None = controller.session.grid
        assert undone_grid is not None
        self.assertEqual(undone_grid, PixelGrid.empty(2, 2))
        self.assertTupleEqual(effects, (Redraw(), ScheduleSave(undone_grid)))

        controller.handle_event(HistoryMove("redo"))
        self.assertEqual(controller.session.grid, drawn_grid)
        self.assertTupleEqual(controller.handle_event(HistoryMove("redo")), ())

        controller.handle_event(HistoryMove("undo"))
        self.assertEqual(controller.session.grid, PixelGrid.empty(2, 2))

    def test_history_move_many_strokes(self: Self) -> None:
        """Tests undoing and redoing many strokes, each one is a single step."""

        i: int

        grid: PixelGrid = PixelGrid.empty(3, 3)
        controller: StrokeController = make_controller(grid)
        states: list[PixelGrid] = [grid.copy()]
        for i in range(3):
            controller.handle_event(PointerDown(i, i))
            controller.handle_event(PointerMove(i, (i + 1) % 3))
            controller.handle_event(PointerUp())
            states.append(grid.copy())

        for i in range(2, -1, -1):
            controller.handle_event(HistoryMove("undo"))
            self.assertEqual(controller.session.grid, states[i])
        for i in range(1, 4):
            controller.handle_event(HistoryMove("redo"))
            self.assertEqual(controller.session.grid, states[i])

    def test_history_move_during_stroke(self: Self) -> None:
        """Tests that undoing during a stroke ends it."""

        grid: PixelGrid = PixelGrid.empty(2, 2)
        controller: StrokeController = make_controller(grid)

        controller.handle_event(PointerDown(0, 0))
        controller.handle_event(HistoryMove("undo"))
        self.assertFalse(controller.session.stroke.is_active)

        # The movement after the undo mustn't draw without a checkpoint
        controller.handle_event(PointerMove(1, 1))
        self.assertEqual(controller.session.grid, PixelGrid.empty(2, 2))
        self.assertTupleEqual(controller.handle_event(PointerUp()), ())

    def test_no_grid(self: Self) -> None:
        """Tests that events are ignored without a grid."""

        controller: StrokeController = make_controller(None)

        self.assertTupleEqual(controller.handle_event(PointerDown(0, 0)), ())
        self.assertTupleEqual(controller.handle_event(PointerMove(0, 0)), ())
        self.assertTupleEqual(controller.handle_event(PointerUp()), ())
        self.assertTupleEqual(controller.handle_event(HistoryMove("undo")), ())
        self.assertIsNone(controller.session.get_tile_at(0, 0))

    def test_set_grid(self: Self) -> None:
        """Tests that loading a grid resets the history and the stroke."""

        controller: StrokeController = make_controller(PixelGrid.empty(2, 2))
        controller.handle_event(PointerDown(0, 0))

        controller.session.set_grid(make_grid(3, 3, (1, 1, 1, 255)))
        self.assertEqual(controller.session.history.num_undos, 0)
        self.assertFalse(controller.session.stroke.is_active)
        self.assertIsNone(controller.session.hovered_tile)

    def test_get_history_move(self: Self) -> None:
        """Tests the get_history_move function."""

        self.assertEqual(get_history_move(K_z, True, False), "undo")
        self.assertEqual(get_history_move(K_z, True, True), "redo")
        self.assertEqual(get_history_move(K_y, True, False), "redo")
        self.assertIsNone(get_history_move(K_z, False, False))
        self.assertIsNone(get_history_move(K_a, True, False))
