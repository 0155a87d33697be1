"""Zone classes and the built-in hit-test matrices -- pure data, no GTK dependency.

A zone matrix partitions the rectangle of a hovered block into a grid.
Every grid cell carries a zone class that tells the interpreters which
drop operation the pointer is asking for. Row 0 is the top edge, cell 0
is the left edge.

Zone classes:
  NO        no drop zone
  C1..C4    corners, counted clockwise from the top left; the pointer
            position inside the cell picks one of the two adjacent edges
  AH/BH     above/below here (same level)
  LH/RH     left/right of here (same level)
  AA/BA     above/below self or some ancestor (level from pointer offset)
  LA/RA     left/right of self or some ancestor (level from pointer offset)
  IL/IR     inline left/right of the hovered cell
"""

from __future__ import annotations

import enum
from typing import Iterable, Mapping, Sequence

Matrix = Sequence[Sequence[int]]


class ZoneClass(enum.IntEnum):
    """Symbolic zone codes. Values match the historical integer codes."""

    NO = 0

    C1 = 10
    C2 = 11
    C3 = 12
    C4 = 13

    AH = 200
    AA = 201

    BH = 210
    BA = 211

    LH = 220
    LA = 221

    RH = 230
    RA = 231

    IL = 300
    IR = 301


class MatrixConfigError(ValueError):
    """A zone matrix is malformed or references a code nobody handles."""


_z = ZoneClass
NO, C1, C2, C3, C4 = _z.NO, _z.C1, _z.C2, _z.C3, _z.C4
AH, AA, BH, BA = _z.AH, _z.AA, _z.BH, _z.BA
LH, LA, RH, RA = _z.LH, _z.LA, _z.RH, _z.RA
IL, IR = _z.IL, _z.IR

DEFAULT_MATRIX = "10x10"

# Coarse matrix for small targets. Inline zones sit in the inner corners.
MATRIX_6X6: tuple[tuple[int, ...], ...] = (
    (C1, AA, AA, AA, AA, C2),
    (LA, IL, AH, AH, IR, RA),
    (LA, LH, NO, NO, RH, RA),
    (LA, LH, NO, NO, RH, RA),
    (LA, C4, BH, BH, C3, RA),
    (C4, BA, BA, BA, BA, C3),
)

# Fine matrix for cells that accept inline neighbours. The upper inner
# quadrants are inline zones; the lower half funnels into above/below.
MATRIX_10X10: tuple[tuple[int, ...], ...] = (
    (C1, AA, AA, AA, AA, AA, AA, AA, AA, C2),
    (LA, IL, IL, IL, AH, AH, IR, IR, IR, RA),
    (LA, IL, IL, IL, AH, AH, IR, IR, IR, RA),
    (LA, IL, IL, IL, AH, AH, IR, IR, IR, RA),
    (LA, LH, LH, LH, C1, C2, RH, RH, RH, RA),
    (LA, LH, LH, LH, C4, C3, RH, RH, RH, RA),
    (LA, LH, LH, C4, BH, BH, C3, IR, RH, RA),
    (LA, LH, C4, BH, BH, BH, BH, C3, RH, RA),
    (LA, C4, BH, BH, BH, BH, BH, BH, C3, RA),
    (C4, BA, BA, BA, BA, BA, BA, BA, BA, C3),
)

# Same granularity without inline zones: the diagonals split the inner
# area into four triangles, one per direction.
MATRIX_10X10_NO_INLINE: tuple[tuple[int, ...], ...] = (
    (C1, AA, AA, AA, AA, AA, AA, AA, AA, C2),
    (LA, C1, AH, AH, AH, AH, AH, AH, C2, RA),
    (LA, LH, C1, AH, AH, AH, AH, C2, RH, RA),
    (LA, LH, LH, C1, AH, AH, C2, RH, RH, RA),
    (LA, LH, LH, LH, C1, C2, RH, RH, RH, RA),
    (LA, LH, LH, LH, C4, C3, RH, RH, RH, RA),
    (LA, LH, LH, C4, BH, BH, C3, RH, RH, RA),
    (LA, LH, C4, BH, BH, BH, BH, C3, RH, RA),
    (LA, C4, BH, BH, BH, BH, BH, BH, C3, RA),
    (C4, BA, BA, BA, BA, BA, BA, BA, BA, C3),
)

DEFAULT_MATRICES: Mapping[str, Matrix] = {
    "6x6": MATRIX_6X6,
    "10x10": MATRIX_10X10,
    "10x10-no-inline": MATRIX_10X10_NO_INLINE,
}


def matrix_size(matrix: Matrix) -> tuple[int, int]:
    """Return (rows, cells) of a matrix. Row length is taken from row 0."""
    return len(matrix), len(matrix[0])


def freeze_matrix(rows: Iterable[Iterable[int]]) -> tuple[tuple[int, ...], ...]:
    """Copy a matrix into nested tuples so later edits to the source can't leak in."""
    return tuple(tuple(int(code) for code in row) for row in rows)


def matrix_codes(matrix: Matrix) -> set[int]:
    """All zone codes used anywhere in the matrix."""
    return {code for row in matrix for code in row}


def validate_matrix(
    name: str,
    matrix: Matrix,
    known_codes: Iterable[int] | None = None,
) -> None:
    """Reject empty, ragged, or (optionally) unhandled matrices.

    Raises MatrixConfigError naming the matrix and the first offending
    row/cell. When known_codes is given, every code in the matrix must be
    one of them.
    """
    if not matrix:
        raise MatrixConfigError(f"Matrix {name!r} has no rows")
    width = len(matrix[0])
    if width == 0:
        raise MatrixConfigError(f"Matrix {name!r} has an empty first row")
    for r, row in enumerate(matrix):
        if len(row) != width:
            raise MatrixConfigError(
                f"Matrix {name!r} is not rectangular: row {r} has "
                f"{len(row)} cells, expected {width}"
            )

    if known_codes is None:
        return
    known = set(known_codes)
    for r, row in enumerate(matrix):
        for c, code in enumerate(row):
            if code not in known:
                raise MatrixConfigError(
                    f"Matrix {name!r} uses code {code} at row {r}, cell {c} "
                    "with no registered interpreter"
                )
