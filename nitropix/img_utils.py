"""
Load and save capabilities of the grid.

Images are decoded and encoded as lossless png, a pixel with alpha 0 is transparent.
"""

from pathlib import Path
from io import BytesIO
from typing import Self, Final

import numpy as np
from numpy import uint8
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from nitropix.classes.pixel_grid import PixelGrid
from nitropix.file_utils import (
    FileError, try_read_file, try_write_file, try_replace_file, try_remove_file, try_create_dir
)

_EXPORT_SUFFIX: Final[str] = "_edited"


class GridLoadError(Exception):
    """Exception raised when an image can't be turned into a grid."""

    __slots__ = (
        "error_str",
    )

    def __init__(self: Self, error_str: str) -> None:
        """
        Initializes the exception.

        Args:
            error string
        """

        super().__init__(error_str)
        self.error_str: str = error_str


class GridSaveError(Exception):
    """Exception raised when a grid can't be written to an image."""

    __slots__ = (
        "error_str",
    )

    def __init__(self: Self, error_str: str) -> None:
        """
        Initializes the exception.

        Args:
            error string
        """

        super().__init__(error_str)
        self.error_str: str = error_str


def ensure_png_suffix(file_str: str) -> str:
    """
    Changes the suffix of a file string to .png.

    Args:
        file string
    Returns:
        file string
    """

    return str(Path(file_str).with_suffix(".png")) if file_str != "" else file_str


def get_export_path(file_str: str) -> str:
    """
    Gets the path of an edited copy, placed next to the file.

    Args:
        file string
    Returns:
        file string
    """

    file_path: Path = Path(file_str)
    return str(file_path.with_name(file_path.stem + _EXPORT_SUFFIX + ".png"))


def decode_grid(img_bytes: bytes) -> PixelGrid:
    """
    Decodes an image into a grid.

    Args:
        image bytes
    Returns:
        grid
    Raises:
        GridLoadError: on undecodable image
    """

    try:
        with Image.open(BytesIO(img_bytes)) as img:
            rgba_arr: NDArray[uint8] = np.asarray(img.convert("RGBA"))
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise GridLoadError("Undecodable image.") from e
    except Image.DecompressionBombError as e:
        raise GridLoadError("Image too big.") from e

    return PixelGrid.from_rgba(rgba_arr)


def encode_grid(grid: PixelGrid) -> bytes:
    """
    Encodes a grid into png bytes.

    Args:
        grid
    Returns:
        image bytes
    """

    dummy_file: BytesIO = BytesIO()
    Image.fromarray(grid.tiles).save(dummy_file, "png")
    return dummy_file.getvalue()


def try_load_grid(file_str: str) -> PixelGrid:
    """
    Loads a grid from an image file.

    Args:
        file string
    Returns:
        grid
    Raises:
        GridLoadError: on failure
    """

    file_path: Path = Path(file_str)
    try:
        img_bytes: bytes = try_read_file(file_path)
    except (FileNotFoundError, PermissionError, FileError) as e:
        error_str: str = {
            FileNotFoundError: "File missing.",
            PermissionError: "Permission denied.",
            FileError: e.error_str if isinstance(e, FileError) else "",
        }[type(e)]

        raise GridLoadError(f"{file_path.name}: {error_str}") from e

    try:
        return decode_grid(img_bytes)
    except GridLoadError as e:
        raise GridLoadError(f"{file_path.name}: {e.error_str}") from e


def try_save_grid(grid: PixelGrid, file_str: str) -> None:
    """
    Saves a grid to an image file through a temporary file.

    Args:
        grid, file string
    Raises:
        GridSaveError: on failure
    """

    file_path: Path = Path(file_str)
    temp_file_path: Path = Path(file_str + ".tmp")
    img_bytes: bytes = encode_grid(grid)

    dir_error_str: str | None = try_create_dir(file_path.parent)
    if dir_error_str is not None:
        raise GridSaveError(dir_error_str)

    try:
        # If you open in write mode it will empty the file before it's ready
        with temp_file_path.open("ab") as f:
            try_write_file(f, img_bytes)
        try_replace_file(temp_file_path, file_path)
    except (FileNotFoundError, PermissionError, FileError) as e:
        error_str: str = {
            FileNotFoundError: "Directory missing.",
            PermissionError: "Permission denied.",
            FileError: e.error_str if isinstance(e, FileError) else "",
        }[type(e)]

        try_remove_file(temp_file_path)
        raise GridSaveError(f"{file_path.name}: {error_str}") from e
    except OSError as e:
        try_remove_file(temp_file_path)
        raise GridSaveError(f"{file_path.name}: {e.strerror or e}") from e
