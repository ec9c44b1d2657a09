"""
Class to manage the drawing tools and their parameters.

Tools must have:
- name
- shortcut key
- drag flag (if it keeps drawing while the pointer moves)
- mutating flag (if it changes the tiles)
"""

from typing import Self, Final, Any

from pygame.locals import *

from nitropix.utils import hex_to_rgb, rgb_to_hex
from nitropix.type_utils import RGBColor, HexColor, ToolName
from nitropix.consts import (
    BLACK, TOOL_NAMES,
    MIN_ZOOM, MAX_ZOOM, MIN_BRUSH_DIM, MAX_BRUSH_DIM,
)


_TOOLS_INFO: Final[dict[ToolName, dict[str, Any]]] = {
    "pen": {
        "shortcut_k": K_p,
        "is_draggable": True,
        "is_mutating": True,
    },

    "eraser": {
        "shortcut_k": K_e,
        "is_draggable": True,
        "is_mutating": True,
    },

    "bucket": {
        "shortcut_k": K_b,
        "is_draggable": False,
        "is_mutating": True,
    },

    "eye_dropper": {
        "shortcut_k": K_i,
        "is_draggable": False,
        "is_mutating": False,
    },
}


def is_tool_draggable(tool_name: ToolName) -> bool:
    """
    Checks if a tool keeps drawing while the pointer moves.

    Args:
        tool name
    Returns:
        draggable flag
    """

    return _TOOLS_INFO[tool_name]["is_draggable"]


def is_tool_mutating(tool_name: ToolName) -> bool:
    """
    Checks if a tool changes the tiles.

    Args:
        tool name
    Returns:
        mutating flag
    """

    return _TOOLS_INFO[tool_name]["is_mutating"]


class ToolsManager:
    """Class to store the active tool, the brush and the zoom."""

    __slots__ = (
        "tool_name", "brush_color", "_brush_dim", "_zoom",
    )

    def __init__(
            self: Self, tool_name: ToolName = "pen", brush_color: RGBColor = BLACK,
            brush_dim: int = MIN_BRUSH_DIM, zoom: int = MIN_ZOOM
    ) -> None:
        """
        Initializes the info, out of range values are clamped.

        Args:
            tool name (default = pen), brush color (default = black),
            brush dimension (default = 1), zoom (default = 1)
        """

        self.tool_name: ToolName = tool_name
        self.brush_color: RGBColor = brush_color
        self._brush_dim: int = MIN_BRUSH_DIM
        self._zoom: int = MIN_ZOOM

        self.brush_dim = brush_dim
        self.zoom = zoom

    @property
    def brush_dim(self: Self) -> int:
        """
        Gets the brush dimension.

        Returns:
            brush dimension
        """

        return self._brush_dim

    @brush_dim.setter
    def brush_dim(self: Self, value: int) -> None:
        """
        Sets the brush dimension, clamped between MIN_BRUSH_DIM and MAX_BRUSH_DIM.

        Args:
            brush dimension
        """

        self._brush_dim = min(max(value, MIN_BRUSH_DIM), MAX_BRUSH_DIM)

    @property
    def brush_radius(self: Self) -> int:
        """
        Gets the radius of the brush disk.

        Returns:
            radius
        """

        return self._brush_dim // 2

    @property
    def zoom(self: Self) -> int:
        """
        Gets the number of screen pixels per tile.

        Returns:
            zoom
        """

        return self._zoom

    @zoom.setter
    def zoom(self: Self, value: int) -> None:
        """
        Sets the zoom, clamped between MIN_ZOOM and MAX_ZOOM.

        Args:
            zoom
        """

        self._zoom = min(max(value, MIN_ZOOM), MAX_ZOOM)

    def set_tool(self: Self, tool_name: str) -> bool:
        """
        Sets the active tool if the name is valid.

        Args:
            tool name
        Returns:
            changed flag
        """

        if tool_name not in TOOL_NAMES or tool_name == self.tool_name:
            return False

        self.tool_name = tool_name  # type: ignore[assignment]
        return True

    def handle_shortcut(self: Self, k: int) -> bool:
        """
        Selects the tool with a shortcut key.

        Args:
            key
        Returns:
            changed flag
        """

        tool_name: ToolName
        info: dict[str, Any]

        for tool_name, info in _TOOLS_INFO.items():
            if info["shortcut_k"] == k:
                return self.set_tool(tool_name)

        return False

    def set_info(self: Self, settings: dict[str, Any]) -> None:
        """
        Sets all the parameters from the settings.

        Args:
            settings
        """

        self.set_tool(settings["tool_name"])
        self.brush_color = hex_to_rgb(settings["brush_color"])
        self.brush_dim = settings["brush_dim"]
        self.zoom = settings["zoom"]

    def get_info(self: Self) -> dict[str, Any]:
        """
        Gets all the parameters for the settings.

        Returns:
            settings section
        """

        hex_color: HexColor = rgb_to_hex(self.brush_color)
        return {
            "tool_name": self.tool_name,
            "brush_color": hex_color,
            "brush_dim": self._brush_dim,
            "zoom": self._zoom,
        }
