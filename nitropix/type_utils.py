"""Types shared between files."""

from typing import Literal, TypeAlias

XY: TypeAlias = tuple[int, int]
WH: TypeAlias = tuple[int, int]
RGBColor: TypeAlias = tuple[int, int, int]
RGBAColor: TypeAlias = tuple[int, int, int, int]
HexColor: TypeAlias = str

ToolName: TypeAlias = Literal["pen", "eraser", "bucket", "eye_dropper"]
HistoryMoveType: TypeAlias = Literal["undo", "redo"]
SaveStatus: TypeAlias = Literal["idle", "saving", "saved", "failed"]
