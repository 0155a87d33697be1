"""Action dispatch interface between the hover engine and the document editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from blockdrop.platform.model import Node


class Actions(Protocol):
    """Drop operations the editor exposes. The engine calls at most one per hover."""

    def clear(self) -> None: ...

    def above(self, drag: Node, hover: Node, level: int) -> None: ...

    def below(self, drag: Node, hover: Node, level: int) -> None: ...

    def left_of(self, drag: Node, hover: Node, level: int) -> None: ...

    def right_of(self, drag: Node, hover: Node, level: int) -> None: ...

    def inline_left(self, drag: Node, hover: Node) -> None: ...

    def inline_right(self, drag: Node, hover: Node) -> None: ...


@dataclass(frozen=True)
class Dispatch:
    """One recorded action call."""

    action: str
    drag_id: str | None = None
    hover_id: str | None = None
    level: int | None = None


@dataclass(eq=False)
class ActionLog:
    """Actions implementation that only records what it was asked to do.

    Meant for tests: every call is kept, so the list grows with each
    dispatched pointer move of a drag session.
    """

    calls: list[Dispatch] = field(default_factory=list)

    @property
    def last(self) -> Dispatch | None:
        return self.calls[-1] if self.calls else None

    def clear(self) -> None:
        self.calls.append(Dispatch("clear"))

    def above(self, drag: Node, hover: Node, level: int) -> None:
        self.calls.append(Dispatch("above", drag.id, hover.id, level))

    def below(self, drag: Node, hover: Node, level: int) -> None:
        self.calls.append(Dispatch("below", drag.id, hover.id, level))

    def left_of(self, drag: Node, hover: Node, level: int) -> None:
        self.calls.append(Dispatch("left_of", drag.id, hover.id, level))

    def right_of(self, drag: Node, hover: Node, level: int) -> None:
        self.calls.append(Dispatch("right_of", drag.id, hover.id, level))

    def inline_left(self, drag: Node, hover: Node) -> None:
        self.calls.append(Dispatch("inline_left", drag.id, hover.id))

    def inline_right(self, drag: Node, hover: Node) -> None:
        self.calls.append(Dispatch("inline_right", drag.id, hover.id))
