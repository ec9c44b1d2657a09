"""Tests for the settings file."""

from unittest import TestCase
from unittest.mock import patch, Mock
from tempfile import TemporaryDirectory
from pathlib import Path
from typing import Self, Any

from nitropix.settings import DEFAULT_SETTINGS, parse_settings, try_get_settings, try_save_settings


class TestSettings(TestCase):
    """Tests for the settings file."""

    def test_parse_settings(self: Self) -> None:
        """Tests the parse_settings function."""

        settings: dict[str, Any]
        invalid_keys: list[str]

        settings, invalid_keys = parse_settings([1, 2])
        self.assertDictEqual(settings, DEFAULT_SETTINGS)
        self.assertListEqual(invalid_keys, ["root"])

        settings, invalid_keys = parse_settings({"zoom": 4, "tool_name": "bucket", "a": 1})
        self.assertDictEqual(settings, {**DEFAULT_SETTINGS, "zoom": 4, "tool_name": "bucket"})
        self.assertListEqual(invalid_keys, [])

        settings, invalid_keys = parse_settings({
            "history_max_size": True, "save_delay_ms": -1, "zoom": 99, "brush_dim": 0,
            "tool_name": "brush", "brush_color": "zzzzzz", "is_grid_overlay_on": 1,
        })
        self.assertDictEqual(settings, DEFAULT_SETTINGS)
        self.assertCountEqual(invalid_keys, DEFAULT_SETTINGS.keys())

    @patch("builtins.print", autospec=True)
    def test_try_get_settings(self: Self, mock_print: Mock) -> None:
        """Tests the try_get_settings function, mocks print."""

        dir_str: str

        with TemporaryDirectory() as dir_str:
            settings_path: Path = Path(dir_str, "settings.json")
            self.assertDictEqual(try_get_settings(settings_path), DEFAULT_SETTINGS)
            mock_print.assert_not_called()

            settings_path.write_text("{", "utf-8")
            self.assertDictEqual(try_get_settings(settings_path), DEFAULT_SETTINGS)
            mock_print.assert_called_once()

            settings_path.write_text('{"zoom": 0}', "utf-8")
            self.assertDictEqual(try_get_settings(settings_path), DEFAULT_SETTINGS)
            self.assertEqual(mock_print.call_count, 2)

    @patch("builtins.print", autospec=True)
    def test_try_save_settings(self: Self, mock_print: Mock) -> None:
        """Tests the try_save_settings function, mocks print."""

        dir_str: str

        settings: dict[str, Any] = {**DEFAULT_SETTINGS, "brush_color": "ff0080", "zoom": 2}
        with TemporaryDirectory() as dir_str:
            settings_path: Path = Path(dir_str, "data", "settings.json")
            self.assertFalse(try_save_settings(settings, settings_path))
            self.assertDictEqual(try_get_settings(settings_path), settings)
            self.assertFalse(settings_path.with_name("settings.json.tmp").exists())

        mock_print.assert_not_called()

    @patch("nitropix.settings.try_create_dir", autospec=True)
    @patch("builtins.print", autospec=True)
    def test_try_save_settings_dir_failure(
            self: Self, mock_print: Mock, mock_try_create_dir: Mock
    ) -> None:
        """Tests the try_save_settings function on directory failure, mocks print and try_create_dir."""

        dir_str: str

        mock_try_create_dir.return_value = "Directory data: Permission denied."
        with TemporaryDirectory() as dir_str:
            settings_path: Path = Path(dir_str, "data", "settings.json")
            self.assertTrue(try_save_settings(DEFAULT_SETTINGS, settings_path))
            self.assertFalse(settings_path.exists())

        mock_try_create_dir.assert_called_once_with(settings_path.parent)
        mock_print.assert_called_once()
