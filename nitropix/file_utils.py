"""Functions shared between files to read and write files with retries."""

import os
from pathlib import Path
from collections.abc import Callable
from errno import *
from typing import BinaryIO, Self, TypeVar, Final

import pygame as pg

from nitropix.consts import FILE_ATTEMPT_START_I, FILE_ATTEMPT_STOP_I


_T = TypeVar("_T")

OS_ERROR_TRANSIENT_CODES: Final[tuple[int, ...]] = (EINTR, EIO, EBUSY, ENFILE, EMFILE, EDEADLK)


class FileError(Exception):
    """Exception raised when a general file operation fails, like writing."""

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


def handle_file_os_error(e: OSError) -> tuple[str, bool]:
    """
    Handles an OSError from a file operation, deciding if it should be retried or not.

    Args:
        error
    Returns:
        message, retry flag
    """

    error_str: str = e.strerror + "." if e.strerror is not None else ""
    if e.errno == EINVAL:
        error_str = "Reserved path."

    return error_str, e.errno in OS_ERROR_TRANSIENT_CODES


def try_os_call(func: Callable[[], _T]) -> _T:
    """
    Calls a function doing a file operation, transient failures are retried with back-off.

    Args:
        function
    Returns:
        function result
    Raises:
        FileNotFoundError, PermissionError, FileExistsError: as they are
        FileError: on any other failure
    """

    attempt_i: int
    error_str: str
    should_retry: bool

    for attempt_i in range(FILE_ATTEMPT_START_I, FILE_ATTEMPT_STOP_I + 1):
        try:
            return func()
        except (FileNotFoundError, PermissionError, FileExistsError):
            raise
        except OSError as e:
            error_str, should_retry = handle_file_os_error(e)
            if should_retry and attempt_i != FILE_ATTEMPT_STOP_I:
                pg.time.wait(2 ** attempt_i)
                continue

            raise FileError(error_str) from e

    raise FileError("Repeated failure.")


def try_read_file(file_path: Path) -> bytes:
    """
    Reads a whole file with retries.

    Args:
        path
    Returns:
        content
    Raises:
        FileNotFoundError, PermissionError, FileError: on failure
    """

    def _read() -> bytes:
        """
        Opens the file and reads it.

        Returns:
            content
        """

        f: BinaryIO
        with file_path.open("rb") as f:
            return f.read()

    return try_os_call(_read)


def try_write_file(f: BinaryIO, content: bytes) -> None:
    """
    Writes to a file and makes sure it reaches the disk.

    Args:
        file, content
    Raises:
        FileError: on failure
    """

    def _write() -> None:
        """Empties the file, writes the content and flushes it."""

        f.truncate(0)
        num_written_bytes: int = f.write(content)
        if num_written_bytes != len(content):
            raise FileError("Failed to write full file.")
        f.flush()

    try_os_call(_write)
    try_os_call(lambda: os.fsync(f.fileno()))


def try_replace_file(src_path: Path, dst_path: Path) -> None:
    """
    Atomically replaces a file with another one.

    Args:
        source path, destination path
    Raises:
        FileNotFoundError, PermissionError, FileError: on failure
    """

    try_os_call(lambda: os.replace(src_path, dst_path))


def try_remove_file(file_path: Path) -> None:
    """
    Removes a file if it exists, failures are ignored.

    Args:
        path
    """

    try:
        try_os_call(lambda: file_path.unlink(missing_ok=True))
    except (PermissionError, FileError):
        pass


def try_create_dir(dir_path: Path) -> str | None:
    """
    Creates a directory and its parents with retries.

    Args:
        path
    Returns:
        error string (can be None)
    """

    try:
        try_os_call(lambda: dir_path.mkdir(parents=True, exist_ok=True))
    except (FileNotFoundError, PermissionError, FileExistsError) as e:
        base_error_str: str = {
            FileNotFoundError: "Parent missing.",
            PermissionError: "Permission denied.",
            FileExistsError: "File with the same name exists.",
        }[type(e)]
        return f"Directory {dir_path.name}: {base_error_str}"
    except FileError as e:
        return f"Directory {dir_path.name}: {e.error_str}"

    return None
