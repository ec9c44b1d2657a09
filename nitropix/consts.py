"""Constants shared between files."""

from typing import Literal, Final

from nitropix.type_utils import RGBColor, RGBAColor, HexColor, ToolName


BLACK: Final[RGBColor] = (0  , 0  , 0)
HEX_BLACK: Final[HexColor] = "000000"

# The only non opaque value a cell can hold
TRANSPARENT: Final[RGBAColor] = (0, 0, 0, 0)
OPAQUE_ALPHA: Final[int] = 255

CHECKER_LIGHT: Final[RGBColor] = (255, 255, 255)
CHECKER_DARK: Final[RGBColor]  = (224, 224, 224)
CHECKER_MIN_DIM: Final[int] = 8
GRID_OVERLAY_MIN_ZOOM: Final[int] = 3
GRID_OVERLAY_ALPHA: Final[int] = 26  # ~10% of 255

TOOL_NAMES: Final[tuple[ToolName, ...]] = ("pen", "eraser", "bucket", "eye_dropper")

MIN_ZOOM: Final[int] = 1
MAX_ZOOM: Final[int] = 10
MIN_BRUSH_DIM: Final[int] = 1
MAX_BRUSH_DIM: Final[int] = 10

HISTORY_MAX_SIZE: Final[int] = 50
SAVE_DELAY_MS: Final[int] = 1_000

FILE_ATTEMPT_START_I: Final[int] = 4
FILE_ATTEMPT_STOP_I: Final[int]  = 9

MOUSE_LEFT: Final[Literal[1]] = 1
