"""Read-only descriptors of the block tree -- rows contain cells, cells contain rows."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class NodeKind(str, enum.Enum):
    """Discriminator between the two block types of the document tree."""

    ROW = "row"
    CELL = "cell"


class InlineSide(str, enum.Enum):
    """Side a cell floats to when rendered inline next to a sibling."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Levels:
    """Maximum nesting level reachable in each drop direction."""

    above: int = 0
    below: int = 0
    left: int = 0
    right: int = 0

    def __post_init__(self) -> None:
        for name in ("above", "below", "left", "right"):
            if getattr(self, name) < 0:
                raise ValueError(f"Level limit {name!r} must be non-negative")


@dataclass(frozen=True)
class Plugin:
    """Capabilities of the plugin rendering a cell's content."""

    name: str = ""
    is_inlineable: bool = False


@dataclass
class Node:
    """A row or cell as seen by the hover engine.

    Only cells carry inline attributes. ``has_inline_neighbour`` holds the
    id of the inline sibling rendered next to this cell, if any.
    """

    id: str
    kind: NodeKind = NodeKind.CELL
    levels: Levels = field(default_factory=Levels)
    inline: InlineSide | None = None
    has_inline_neighbour: str | None = None
    plugin: Plugin = field(default_factory=Plugin)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Accept plain "row"/"cell" and "left"/"right" strings
        self.kind = NodeKind(self.kind)
        if self.inline:
            self.inline = InlineSide(self.inline)
        if self.kind is NodeKind.ROW and (self.inline or self.has_inline_neighbour):
            raise ValueError(f"Row {self.id!r} cannot carry inline attributes")

    @classmethod
    def row(cls, id: str, levels: Levels | None = None, cells: list[Node] | None = None) -> Node:
        """Build a row descriptor."""
        return cls(
            id=id,
            kind=NodeKind.ROW,
            levels=levels or Levels(),
            children=list(cells or []),
        )

    @classmethod
    def cell(
        cls,
        id: str,
        levels: Levels | None = None,
        inline: InlineSide | str | None = None,
        has_inline_neighbour: str | None = None,
        plugin: Plugin | None = None,
        rows: list[Node] | None = None,
    ) -> Node:
        """Build a cell descriptor. ``inline`` accepts "left"/"right" strings."""
        return cls(
            id=id,
            kind=NodeKind.CELL,
            levels=levels or Levels(),
            inline=InlineSide(inline) if inline else None,
            has_inline_neighbour=has_inline_neighbour,
            plugin=plugin or Plugin(),
            children=list(rows or []),
        )

    @property
    def is_inlineable(self) -> bool:
        """True when this cell's plugin may be placed inline."""
        return self.plugin.is_inlineable


def is_row(node: Node) -> bool:
    """True for row descriptors."""
    return node.kind is NodeKind.ROW
