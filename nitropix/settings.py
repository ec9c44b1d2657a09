"""
Settings stored in a json file.

Missing or invalid values are replaced by the defaults, the file is rewritten on exit.
"""

import json

from pathlib import Path
from json import JSONDecodeError
from sys import stderr
from typing import Final, Any

from nitropix.file_utils import (
    FileError, try_read_file, try_write_file, try_replace_file, try_create_dir
)
from nitropix.utils import hex_to_rgb
from nitropix.consts import (
    HEX_BLACK, TOOL_NAMES,
    MIN_ZOOM, MAX_ZOOM, MIN_BRUSH_DIM, MAX_BRUSH_DIM,
    HISTORY_MAX_SIZE, SAVE_DELAY_MS,
)

SETTINGS_PATH: Final[Path] = Path("assets", "data", "settings.json")

DEFAULT_SETTINGS: Final[dict[str, Any]] = {
    "history_max_size": HISTORY_MAX_SIZE,
    "save_delay_ms": SAVE_DELAY_MS,
    "zoom": 8,
    "brush_dim": MIN_BRUSH_DIM,
    "tool_name": "pen",
    "brush_color": HEX_BLACK,
    "is_grid_overlay_on": True,
}


def _is_valid(key: str, value: Any) -> bool:
    """
    Checks if a setting has the right type and range.

    Args:
        key, value
    Returns:
        valid flag
    """

    if key == "is_grid_overlay_on":
        return isinstance(value, bool)
    if key == "tool_name":
        return value in TOOL_NAMES
    if key == "brush_color":
        if not isinstance(value, str):
            return False
        try:
            hex_to_rgb(value)
        except ValueError:
            return False
        return True

    if not isinstance(value, int) or isinstance(value, bool):
        return False
    if key == "history_max_size":
        return value >= 1
    if key == "save_delay_ms":
        return value >= 0
    if key == "zoom":
        return MIN_ZOOM <= value <= MAX_ZOOM
    if key == "brush_dim":
        return MIN_BRUSH_DIM <= value <= MAX_BRUSH_DIM

    return False


def parse_settings(data: Any) -> tuple[dict[str, Any], list[str]]:
    """
    Merges the loaded data over the defaults.

    Args:
        data
    Returns:
        settings, invalid keys
    """

    settings: dict[str, Any] = DEFAULT_SETTINGS.copy()
    if not isinstance(data, dict):
        return settings, ["root"]

    invalid_keys: list[str] = []
    for key in DEFAULT_SETTINGS:
        if key not in data:
            continue

        if _is_valid(key, data[key]):
            settings[key] = data[key]
        else:
            invalid_keys.append(key)

    return settings, invalid_keys


def try_get_settings(settings_path: Path = SETTINGS_PATH) -> dict[str, Any]:
    """
    Gets the settings from the settings file, errors are printed.

    Args:
        settings path (default = SETTINGS_PATH)
    Returns:
        settings
    """

    invalid_keys: list[str]

    data: Any = {}
    try:
        data = json.loads(try_read_file(settings_path))
    except FileNotFoundError:
        pass
    except (PermissionError, JSONDecodeError, UnicodeDecodeError, FileError) as e:
        error_str: str = {
            PermissionError: "Permission denied.",
            JSONDecodeError: "Invalid json.",
            UnicodeDecodeError: "Invalid encoding.",
            FileError: e.error_str if isinstance(e, FileError) else "",
        }[type(e)]

        print(f"Settings Load Failed\n{settings_path.name}: {error_str}", file=stderr)

    settings, invalid_keys = parse_settings(data)
    if invalid_keys != []:
        print(
            f"Settings Load Failed\n{settings_path.name}: invalid {', '.join(invalid_keys)}.",
            file=stderr
        )

    return settings


def try_save_settings(settings: dict[str, Any], settings_path: Path = SETTINGS_PATH) -> bool:
    """
    Writes the settings to the settings file, errors are printed.

    Args:
        settings, settings path (default = SETTINGS_PATH)
    Returns:
        failed flag
    """

    settings_json: str = json.dumps(settings, ensure_ascii=False, indent=4)
    settings_bytes: bytes = settings_json.encode("utf-8", errors="ignore")
    temp_settings_path: Path = settings_path.with_name(settings_path.name + ".tmp")

    dir_error_str: str | None = try_create_dir(settings_path.parent)
    if dir_error_str is not None:
        print(f"Settings Save Failed\n{dir_error_str}", file=stderr)
        return True

    try:
        with temp_settings_path.open("ab") as f:
            try_write_file(f, settings_bytes)
        try_replace_file(temp_settings_path, settings_path)
    except (PermissionError, FileError) as e:
        error_str: str = e.error_str if isinstance(e, FileError) else "Permission denied."
        print(f"Settings Save Failed\n{settings_path.name}: {error_str}", file=stderr)
        return True
    except OSError as e:
        print(f"Settings Save Failed\n{settings_path.name}: {e.strerror or e}", file=stderr)
        return True

    return False
