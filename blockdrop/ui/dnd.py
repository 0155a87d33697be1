"""Drag-and-drop wiring: feeds GTK drag-motion events into the hover engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from blockdrop.log import get_logger

log = get_logger(name="dnd")

import gi

gi.require_version("Gtk", "3.0")
from gi.repository import Gdk, Gtk  # noqa: E402

from blockdrop.core.geometry import DegenerateRoomError, Room, Vector

if TYPE_CHECKING:
    from blockdrop.core.actions import Actions
    from blockdrop.core.hover import HoverEngine
    from blockdrop.platform.model import Node

NodeResolver = Callable[[], "tuple[Node | None, Node | None]"]


class DropTargetHandler:
    """Turns drag-over events on a block widget into drop-zone actions.

    The widget is the rendered block being hovered; its allocation is the
    hit-test room. ``resolve_nodes`` returns the (dragged, hovered) node
    pair for the current drag, or None for either when unknown. The
    handler never edits the document; ``actions`` decides what a hover
    means for the editor.
    """

    def __init__(
        self,
        widget: Gtk.Widget,
        engine: HoverEngine,
        actions: Actions,
        resolve_nodes: NodeResolver,
        matrix: str | None = None,
    ) -> None:
        self._widget = widget
        self._engine = engine
        self._actions = actions
        self._resolve_nodes = resolve_nodes
        self.matrix = matrix

        widget.connect("drag-motion", self._on_drag_motion)
        widget.connect("drag-leave", self._on_drag_leave)

    def _on_drag_motion(
        self, widget: Gtk.Widget, context: Gdk.DragContext,
        x: int, y: int, time: int,
    ) -> bool:
        """Classify the pointer position and accept the drag as a move."""
        drag, hover = self._resolve_nodes()
        if drag is None or hover is None:
            Gdk.drag_status(context, 0, time)
            return False

        alloc = widget.get_allocation()
        try:
            self._engine.hover(
                drag,
                hover,
                self._actions,
                room=Room(alloc.width, alloc.height),
                mouse=Vector(x, y),
                matrix=self.matrix,
            )
        except DegenerateRoomError:
            # Widget not realized yet
            log.debug("drag-motion on unallocated widget %dx%d", alloc.width, alloc.height)
            Gdk.drag_status(context, 0, time)
            return False

        Gdk.drag_status(context, Gdk.DragAction.MOVE, time)
        return True

    def _on_drag_leave(self, widget: Gtk.Widget, context: Gdk.DragContext, time: int) -> None:
        """Drop the indicator and forget the last hover."""
        self._actions.clear()
        self._engine.reset()
