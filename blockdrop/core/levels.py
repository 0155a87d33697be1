"""Drop level math -- pure functions, no GTK dependency.

A drop level says how many ancestor boundaries a drop crosses: level 0
places the dragged block right next to the hovered one, higher levels
place it next to the hovered block's parent, grandparent and so on.

Inside an ancestor zone (AA/BA/LA/RA) the pointer offset across the
matrix cell picks the level. The cell is split into nested bands, each
half as wide as the previous one, separated by 2px margins:

    |<------ spare/2 ------>|  |<- spare/4 ->|  |<spare/8>|  ...
    level 0                  2  level 1       2  level 2

so the nearest level gets the widest band and deeper levels get
progressively thinner ones, like nested margins on screen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blockdrop.core.geometry import MatrixIndex, Vector, relative_mouse_position, round_half_up
from blockdrop.platform.model import is_row

if TYPE_CHECKING:
    from blockdrop.platform.model import Node

# Pixel gap between two neighbouring level bands.
BAND_MARGIN = 2


def compute_level(size: float, levels: int, position: float) -> int:
    """Convert an offset inside a cell into a level index in [0, levels].

    Args:
        size: Extent of the cell along the measured axis, in pixels.
        levels: Deepest selectable level (the hovered node's limit).
        position: Pointer offset from the cell's leading edge.

    Returns:
        The level whose band contains ``position``. Offsets past the last
        band select the deepest level.
    """
    if levels <= 0:
        return 0

    if size <= (levels + 1) * BAND_MARGIN:
        # Too small for margins: split the cell linearly.
        at = round_half_up(position / (size / levels))
        return min(max(at, 0), levels)

    spare = size - (levels + 1) * BAND_MARGIN
    steps = [0.0]
    current = spare
    for i in range(levels + 1):
        steps.append(steps[i] + current / 2)
        current /= 2
        lower = steps[i] + i * BAND_MARGIN
        upper = steps[i + 1] + (i + 1) * BAND_MARGIN
        if lower <= position < upper:
            return i

    return levels


def _axis_level(at: int, hover: Node, level: int, inv: bool) -> int:
    if is_row(hover):
        # Rows can't nest inline; always opt for the outermost level.
        return level

    # Level 0 next to an inline cell would be directly beside it, which
    # is not a valid drop.
    if hover.inline and at == 0:
        at = 1

    return level - at if inv else at


def horizontal_level(
    mouse: Vector,
    position: MatrixIndex,
    scale: Vector,
    hover: Node,
    level: int,
    inv: bool = False,
) -> int:
    """Compute the drop level from the pointer's x offset inside its cell.

    ``inv`` returns ``level - at``; used for the left edge, where the band
    scan runs from the far side of the cell.
    """
    x = relative_mouse_position(mouse, position, scale).x
    at = compute_level(size=scale.x, levels=level, position=x)
    return _axis_level(at, hover, level, inv)


def vertical_level(
    mouse: Vector,
    position: MatrixIndex,
    scale: Vector,
    hover: Node,
    level: int,
    inv: bool = False,
) -> int:
    """Compute the drop level from the pointer's y offset inside its cell.

    ``inv`` is used for the top edge.
    """
    y = relative_mouse_position(mouse, position, scale).y
    at = compute_level(size=scale.y, levels=level, position=y)
    return _axis_level(at, hover, level, inv)


def drop_level(hover: Node) -> int:
    """Level for same-level drops: 1 next to inline cells, otherwise 0."""
    return 1 if not is_row(hover) and hover.inline else 0
