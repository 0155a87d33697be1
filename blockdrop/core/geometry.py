"""Hit-test geometry -- pure functions, no GTK dependency.

Maps a pointer position over the hovered block onto a cell of a zone
matrix. All coordinates are pixels relative to the block's top-left
corner.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from blockdrop.core.zones import Matrix, matrix_size


class Vector(NamedTuple):
    """A pixel position, or a pixel scale (width, height per matrix cell)."""

    x: float
    y: float


class MatrixIndex(NamedTuple):
    """A (row, cell) position inside a zone matrix."""

    row: int
    cell: int


class Room(NamedTuple):
    """Pixel size of the block currently under the pointer."""

    width: float
    height: float


class DegenerateRoomError(ValueError):
    """The hovered block has no usable area."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity.

    Python's round() rounds halves to even, which would shift zone
    boundaries by one pixel on exact halves. Infinities pass through
    unchanged so far-off pointers still compare correctly.
    """
    if math.isinf(value):
        return value
    return math.floor(value + 0.5)


def room_scale(room: Room, matrix: Matrix) -> Vector:
    """Compute the average width and height of a matrix cell inside a room.

    Raises DegenerateRoomError when either side of the room is not a
    positive finite number, since the scale would otherwise be zero or NaN.
    """
    width, height = room
    if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
        raise DegenerateRoomError(f"Room must have positive size, got {width}x{height}")
    rows, cells = matrix_size(matrix)
    return Vector(x=width / cells, y=height / rows)


def locate_cell(mouse: Vector, scale: Vector, rows: int, cells: int) -> MatrixIndex:
    """Return the matrix cell under the pointer, clamped into the matrix.

    Positions outside the room are not an error: they land on the nearest
    edge cell, infinite ones included. Raises ValueError for NaN.
    """
    if math.isnan(mouse.x) or math.isnan(mouse.y):
        raise ValueError(f"Pointer position must be a number, got {tuple(mouse)}")
    return MatrixIndex(
        row=_clamped_index(mouse.y / scale.y, rows),
        cell=_clamped_index(mouse.x / scale.x, cells),
    )


def _clamped_index(offset: float, count: int) -> int:
    if offset < 0:
        return 0
    if offset >= count:
        return count - 1
    return math.floor(offset)


def relative_mouse_position(mouse: Vector, position: MatrixIndex, scale: Vector) -> Vector:
    """Return the pointer offset inside its matrix cell, rounded to whole pixels."""
    return Vector(
        x=round_half_up(mouse.x - position.cell * scale.x),
        y=round_half_up(mouse.y - position.row * scale.y),
    )
