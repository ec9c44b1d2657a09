"""Tests for the utils file."""

from unittest import TestCase
from typing import Self

from numpy import int32
from numpy.typing import NDArray

from nitropix.utils import get_tile_at, get_disk_offsets, hex_to_rgb, rgb_to_hex


class TestUtils(TestCase):
    """Tests for the utils file."""

    def test_get_tile_at(self: Self) -> None:
        """Tests the get_tile_at function."""

        self.assertTupleEqual(get_tile_at(16, 16, (16, 16), 8, 4, 3), (0, 0))
        self.assertTupleEqual(get_tile_at(23, 23, (16, 16), 8, 4, 3), (0, 0))
        self.assertTupleEqual(get_tile_at(24, 16, (16, 16), 8, 4, 3), (1, 0))
        self.assertTupleEqual(get_tile_at(47, 39, (16, 16), 8, 4, 3), (3, 2))

        self.assertIsNone(get_tile_at(15, 16, (16, 16), 8, 4, 3))
        self.assertIsNone(get_tile_at(16, 15, (16, 16), 8, 4, 3))
        self.assertIsNone(get_tile_at(48, 16, (16, 16), 8, 4, 3))
        self.assertIsNone(get_tile_at(16, 40, (16, 16), 8, 4, 3))
        self.assertIsNone(get_tile_at(0, 0, (0, 0), 1, 0, 0))

    def test_get_disk_offsets(self: Self) -> None:
        """Tests the get_disk_offsets function."""

        offsets: NDArray[int32] = get_disk_offsets(0)
        self.assertListEqual(offsets.tolist(), [[0, 0]])

        offsets = get_disk_offsets(1)
        self.assertCountEqual(
            [tuple(offset) for offset in offsets.tolist()],
            [(0, -1), (-1, 0), (0, 0), (1, 0), (0, 1)]
        )

        offsets = get_disk_offsets(2)
        self.assertEqual(len(offsets), 13)
        self.assertTrue(((offsets[:, 0] ** 2) + (offsets[:, 1] ** 2) <= 4).all())
        self.assertFalse(offsets.flags.writeable)

    def test_hex_to_rgb(self: Self) -> None:
        """Tests the hex_to_rgb function."""

        self.assertTupleEqual(hex_to_rgb("ff0080"), (255, 0, 128))
        self.assertTupleEqual(hex_to_rgb("#FF0080"), (255, 0, 128))
        with self.assertRaises(ValueError):
            hex_to_rgb("zzzzzz")

    def test_rgb_to_hex(self: Self) -> None:
        """Tests the rgb_to_hex function."""

        self.assertEqual(rgb_to_hex((255, 0, 128)), "ff0080")
        self.assertEqual(rgb_to_hex((0, 0, 0)), "000000")
