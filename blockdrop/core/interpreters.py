"""Zone interpreters -- turn a classified zone into exactly one drop action.

Each zone class maps to a decision function taking the dragged node, the
hovered node, the action dispatcher and the hover context. A function
either calls one action or returns without calling anything (rows over
inline zones).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping

from blockdrop.core.geometry import MatrixIndex, Room, Vector, relative_mouse_position
from blockdrop.core.levels import drop_level, horizontal_level, vertical_level
from blockdrop.core.zones import ZoneClass
from blockdrop.platform.model import InlineSide, is_row

if TYPE_CHECKING:
    from blockdrop.core.actions import Actions
    from blockdrop.platform.model import Node

# Level used next to inline cells when inline merging is not possible.
# Tied to the granularity of the 10x10 ancestor bands.
INLINE_FALLBACK_LEVEL = 2


@dataclass(frozen=True)
class HoverContext:
    """Geometry of a single hover event, recomputed on every call."""

    room: Room
    mouse: Vector
    position: MatrixIndex
    size: tuple[int, int]  # (rows, cells)
    scale: Vector
    inline_fallback_level: int = INLINE_FALLBACK_LEVEL

    @property
    def relative(self) -> Vector:
        """Pointer offset inside the hovered matrix cell."""
        return relative_mouse_position(self.mouse, self.position, self.scale)


Interpreter = Callable[["Node", "Node", "Actions", HoverContext], None]


def no_zone(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    actions.clear()


# Corners: the cell's diagonal decides between the two adjacent edges.


def corner_top_left(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    mouse = ctx.relative
    level = drop_level(hover)
    if mouse.x < mouse.y:
        actions.left_of(drag, hover, level)
    else:
        actions.above(drag, hover, level)


def corner_top_right(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    mouse = ctx.relative
    level = drop_level(hover)
    if mouse.x > mouse.y:
        actions.right_of(drag, hover, level)
    else:
        actions.above(drag, hover, level)


def corner_bottom_right(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    mouse = ctx.relative
    level = drop_level(hover)
    if mouse.x > mouse.y:
        actions.right_of(drag, hover, level)
    else:
        actions.below(drag, hover, level)


def corner_bottom_left(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    mouse = ctx.relative
    level = drop_level(hover)
    if mouse.x < mouse.y:
        actions.left_of(drag, hover, level)
    else:
        actions.below(drag, hover, level)


# Here: same level, no pointer math.


def above_here(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    actions.above(drag, hover, drop_level(hover))


def below_here(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    actions.below(drag, hover, drop_level(hover))


def left_here(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    actions.left_of(drag, hover, drop_level(hover))


def right_here(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    actions.right_of(drag, hover, drop_level(hover))


# Ancestors: the pointer offset picks the level. Top and left count
# inverted, bottom and right don't.


def above_ancestor(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    level = vertical_level(
        ctx.mouse, ctx.position, ctx.scale, hover, hover.levels.above, inv=True
    )
    actions.above(drag, hover, level)


def below_ancestor(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    level = vertical_level(ctx.mouse, ctx.position, ctx.scale, hover, hover.levels.below)
    actions.below(drag, hover, level)


def left_ancestor(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    level = horizontal_level(
        ctx.mouse, ctx.position, ctx.scale, hover, hover.levels.left, inv=True
    )
    actions.left_of(drag, hover, level)


def right_ancestor(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    level = horizontal_level(ctx.mouse, ctx.position, ctx.scale, hover, hover.levels.right)
    actions.right_of(drag, hover, level)


# Inline


def can_inline(drag: Node, hover: Node, side: InlineSide) -> bool:
    """True when ``drag`` may be floated inline on ``side`` of ``hover``.

    Disqualified when the hovered cell is itself inline, the dragged
    plugin is not inlineable, the hovered cell already has another inline
    neighbour, or the dragged cell is that neighbour but sits on ``side``
    already.
    """
    if hover.inline or not drag.is_inlineable:
        return False
    neighbour = hover.has_inline_neighbour
    if neighbour and neighbour != drag.id:
        return False
    if neighbour and neighbour == drag.id and drag.inline == side:
        return False
    return True


def inline_left(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    if is_row(drag) or is_row(hover):
        return
    if not can_inline(drag, hover, InlineSide.LEFT):
        actions.left_of(drag, hover, ctx.inline_fallback_level)
        return
    actions.inline_left(drag, hover)


def inline_right(drag: Node, hover: Node, actions: Actions, ctx: HoverContext) -> None:
    if is_row(drag) or is_row(hover):
        return
    if not can_inline(drag, hover, InlineSide.RIGHT):
        actions.right_of(drag, hover, ctx.inline_fallback_level)
        return
    actions.inline_right(drag, hover)


DEFAULT_INTERPRETERS: Mapping[int, Interpreter] = {
    ZoneClass.NO: no_zone,
    ZoneClass.C1: corner_top_left,
    ZoneClass.C2: corner_top_right,
    ZoneClass.C3: corner_bottom_right,
    ZoneClass.C4: corner_bottom_left,
    ZoneClass.AH: above_here,
    ZoneClass.AA: above_ancestor,
    ZoneClass.BH: below_here,
    ZoneClass.BA: below_ancestor,
    ZoneClass.LH: left_here,
    ZoneClass.LA: left_ancestor,
    ZoneClass.RH: right_here,
    ZoneClass.RA: right_ancestor,
    ZoneClass.IL: inline_left,
    ZoneClass.IR: inline_right,
}
