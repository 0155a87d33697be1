"""Tests for zone interpreters, driven through the default 10x10 matrix."""

from unittest.mock import MagicMock

import pytest

from blockdrop.core.actions import ActionLog, Dispatch
from blockdrop.core.geometry import MatrixIndex, Room, Vector
from blockdrop.core.hover import HoverEngine
from blockdrop.core.interpreters import (
    INLINE_FALLBACK_LEVEL,
    HoverContext,
    can_inline,
    inline_left,
    no_zone,
)
from blockdrop.platform.model import InlineSide, Levels, Node, Plugin

ROOM = Room(100, 100)
INLINEABLE = Plugin(name="image", is_inlineable=True)


def _hover(mouse, drag=None, hover=None, matrix=None, engine=None):
    """Run one hover on a fresh engine and return the recorded dispatches."""
    engine = engine or HoverEngine()
    actions = ActionLog()
    drag = drag or Node.cell("drag")
    hover = hover or Node.cell("hover", levels=Levels(above=3, below=3, left=2, right=2))
    engine.hover(drag, hover, actions, room=ROOM, mouse=Vector(*mouse), matrix=matrix)
    return actions.calls


class TestNoZone:
    def test_clears_in_centre(self):
        # Given / When
        calls = _hover((45, 45), matrix="6x6")
        # Then
        assert calls == [Dispatch("clear")]

    def test_direct_call_only_clears(self):
        # Given
        actions = MagicMock()
        # When
        no_zone(Node.cell("a"), Node.cell("b"), actions, MagicMock())
        # Then
        actions.clear.assert_called_once_with()
        actions.above.assert_not_called()


class TestCorners:
    @pytest.mark.parametrize(
        "mouse, action",
        [
            ((2, 8), "left_of"),
            ((8, 2), "above"),
            ((5, 5), "above"),
            ((98, 2), "right_of"),
            ((92, 8), "above"),
            ((98, 92), "right_of"),
            ((92, 98), "below"),
            ((2, 98), "left_of"),
            ((8, 92), "below"),
        ],
    )
    def test_diagonal_split(self, mouse, action):
        # Given / When
        calls = _hover(mouse)
        # Then
        assert calls == [Dispatch(action, "drag", "hover", 0)]

    def test_inline_hover_uses_level_one(self):
        # Given
        hover = Node.cell("hover", inline="right")
        # When
        calls = _hover((2, 8), hover=hover)
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", 1)]

    def test_inner_corner(self):
        # Given: cell (4, 4) of the 10x10 matrix is C1 too
        # When
        calls = _hover((42, 47))
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", 0)]


class TestHere:
    @pytest.mark.parametrize(
        "mouse, action",
        [((45, 15), "above"), ((45, 85), "below"), ((25, 45), "left_of"), ((75, 45), "right_of")],
    )
    def test_same_level(self, mouse, action):
        # Given / When
        calls = _hover(mouse)
        # Then
        assert calls == [Dispatch(action, "drag", "hover", 0)]

    def test_inline_hover_uses_level_one(self):
        # Given
        hover = Node.cell("hover", inline="left")
        # When
        calls = _hover((45, 85), hover=hover)
        # Then
        assert calls == [Dispatch("below", "drag", "hover", 1)]


class TestAncestors:
    @pytest.mark.parametrize("y, level", [(1, 3), (4, 2), (9, 0)])
    def test_above_is_inverted(self, y, level):
        # Given / When
        calls = _hover((45, y))
        # Then
        assert calls == [Dispatch("above", "drag", "hover", level)]

    @pytest.mark.parametrize("y, level", [(91, 0), (94, 1), (99, 3)])
    def test_below_counts_outwards(self, y, level):
        # Given / When
        calls = _hover((45, y))
        # Then
        assert calls == [Dispatch("below", "drag", "hover", level)]

    @pytest.mark.parametrize("x, level", [(1, 2), (5, 1), (8, 0)])
    def test_left_is_inverted(self, x, level):
        # Given: left limit 2: bands [0,4) [4,7) [7,9.5)
        # When
        calls = _hover((x, 45))
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", level)]

    @pytest.mark.parametrize("x, level", [(91, 0), (95, 1), (98, 2)])
    def test_right_counts_outwards(self, x, level):
        # Given / When
        calls = _hover((x, 45))
        # Then
        assert calls == [Dispatch("right_of", "drag", "hover", level)]

    @pytest.mark.parametrize("y", [1, 5, 9])
    def test_row_hover_always_max_level(self, y):
        # Given
        row = Node.row("hover", levels=Levels(above=3))
        # When
        calls = _hover((45, y), hover=row)
        # Then
        assert calls == [Dispatch("above", "drag", "hover", 3)]


class TestInline:
    def test_inlineable_drag_goes_inline_left(self):
        # Given
        drag = Node.cell("drag", plugin=INLINEABLE)
        # When
        calls = _hover((25, 25), drag=drag)
        # Then
        assert calls == [Dispatch("inline_left", "drag", "hover")]

    def test_inlineable_drag_goes_inline_right(self):
        # Given
        drag = Node.cell("drag", plugin=INLINEABLE)
        # When
        calls = _hover((75, 25), drag=drag)
        # Then
        assert calls == [Dispatch("inline_right", "drag", "hover")]

    def test_inline_hover_without_neighbour_falls_back(self):
        # Given: dragged plugin can't inline, hovered cell is inline left
        hover = Node.cell("hover", inline="left")
        # When
        calls = _hover((25, 25), hover=hover)
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", INLINE_FALLBACK_LEVEL)]

    def test_inline_hover_falls_back_even_for_inlineable_drag(self):
        # Given
        drag = Node.cell("drag", plugin=INLINEABLE)
        hover = Node.cell("hover", inline="right")
        # When
        calls = _hover((75, 25), drag=drag, hover=hover)
        # Then
        assert calls == [Dispatch("right_of", "drag", "hover", 2)]

    def test_non_inlineable_drag_falls_back(self):
        # Given / When
        calls = _hover((75, 25))
        # Then
        assert calls == [Dispatch("right_of", "drag", "hover", 2)]

    def test_other_inline_neighbour_falls_back(self):
        # Given
        drag = Node.cell("drag", plugin=INLINEABLE)
        hover = Node.cell("hover", has_inline_neighbour="someone-else")
        # When
        calls = _hover((25, 25), drag=drag, hover=hover)
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", 2)]

    def test_same_neighbour_same_side_falls_back(self):
        # Given: drag already floats left of hover
        drag = Node.cell("drag", plugin=INLINEABLE, inline="left")
        hover = Node.cell("hover", has_inline_neighbour="drag")
        # When
        calls = _hover((25, 25), drag=drag, hover=hover)
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", 2)]

    def test_same_neighbour_moving_to_other_side_goes_inline(self):
        # Given: drag floats left, pointer is in the inline-right zone
        drag = Node.cell("drag", plugin=INLINEABLE, inline="left")
        hover = Node.cell("hover", has_inline_neighbour="drag")
        # When
        calls = _hover((75, 25), drag=drag, hover=hover)
        # Then
        assert calls == [Dispatch("inline_right", "drag", "hover")]

    @pytest.mark.parametrize("mouse", [(25, 25), (75, 25)])
    def test_row_drag_does_nothing(self, mouse):
        # Given
        drag = Node.row("drag")
        # When
        calls = _hover(mouse, drag=drag)
        # Then
        assert calls == []

    def test_row_hover_does_nothing(self):
        # Given
        hover = Node.row("hover")
        # When
        calls = _hover((25, 25), hover=hover)
        # Then
        assert calls == []

    def test_row_hover_from_plain_strings_does_nothing(self):
        # Given
        hover = Node(id="hover", kind="row")
        # When
        calls = _hover((25, 25), hover=hover)
        # Then
        assert calls == []

    def test_same_neighbour_same_side_from_plain_strings_falls_back(self):
        # Given
        drag = Node(id="drag", inline="left", plugin=INLINEABLE)
        hover = Node.cell("hover", has_inline_neighbour="drag")
        # When
        calls = _hover((25, 25), drag=drag, hover=hover)
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", 2)]

    def test_fallback_level_is_configurable(self):
        # Given
        engine = HoverEngine(inline_fallback_level=4)
        # When
        calls = _hover((25, 25), engine=engine)
        # Then
        assert calls == [Dispatch("left_of", "drag", "hover", 4)]

    def test_direct_call_uses_context_fallback(self):
        # Given
        actions = MagicMock()
        ctx = HoverContext(
            room=ROOM,
            mouse=Vector(25, 25),
            position=MatrixIndex(2, 2),
            size=(10, 10),
            scale=Vector(10, 10),
        )
        drag, hover = Node.cell("d"), Node.cell("h")
        # When
        inline_left(drag, hover, actions, ctx)
        # Then
        actions.left_of.assert_called_once_with(drag, hover, 2)
        actions.inline_left.assert_not_called()


class TestCanInline:
    def test_plain_pair(self):
        # Given
        drag = Node.cell("d", plugin=INLINEABLE)
        # When / Then
        assert can_inline(drag, Node.cell("h"), InlineSide.LEFT) is True

    def test_same_neighbour_other_side(self):
        # Given
        drag = Node.cell("d", plugin=INLINEABLE, inline="right")
        hover = Node.cell("h", has_inline_neighbour="d")
        # When / Then
        assert can_inline(drag, hover, InlineSide.LEFT) is True
        assert can_inline(drag, hover, InlineSide.RIGHT) is False
