"""Hover engine -- resolves a pointer position over a block into a drop action.

Pipeline for every drag-over event:
  room + matrix  -> cell scale
  mouse + scale  -> matrix cell (clamped)
  matrix cell    -> zone class -> interpreter
  interpreter    -> one call on the Actions dispatcher

Drag-over events arrive at pointer-move frequency while the resulting
action usually stays the same, so the engine remembers the last input per
matrix name and skips the dispatch when nothing changed.

The engine is not thread-safe: it expects to be driven from the UI main
loop only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from blockdrop.core.geometry import (
    DegenerateRoomError,
    MatrixIndex,
    Room,
    Vector,
    locate_cell,
    room_scale,
)
from blockdrop.core.interpreters import (
    DEFAULT_INTERPRETERS,
    INLINE_FALLBACK_LEVEL,
    HoverContext,
    Interpreter,
)
from blockdrop.core.zones import (
    DEFAULT_MATRICES,
    DEFAULT_MATRIX,
    Matrix,
    MatrixConfigError,
    freeze_matrix,
    matrix_size,
    validate_matrix,
)
from blockdrop.log import get_logger

if TYPE_CHECKING:
    from blockdrop.core.actions import Actions
    from blockdrop.core.config import HoverConfig
    from blockdrop.platform.model import Node

log = get_logger(name="hover")

__all__ = [
    "DegenerateRoomError",
    "HoverEngine",
    "HoverSnapshot",
    "MatrixConfigError",
]


@dataclass(frozen=True)
class HoverSnapshot:
    """Comparable record of everything that determines a dispatch."""

    drag_id: str
    hover_id: str
    actions: object
    room: Room
    mouse: Vector
    position: MatrixIndex
    size: tuple[int, int]
    scale: Vector


class HoverEngine:
    """Classifies drag-over positions using named zone matrices.

    Args:
        matrices: Replaces the built-in matrix table when given.
        interpreters: Replaces the built-in interpreter table when given.
        default_matrix: Matrix used when hover() is called without one.
        inline_fallback_level: Level for inline zones that can't inline.
        strict: Reject matrices using codes without an interpreter. With
            strict=False such cells are logged and ignored at hover time.
    """

    def __init__(
        self,
        matrices: Mapping[str, Matrix] | None = None,
        interpreters: Mapping[int, Interpreter] | None = None,
        default_matrix: str = DEFAULT_MATRIX,
        inline_fallback_level: int = INLINE_FALLBACK_LEVEL,
        strict: bool = True,
    ) -> None:
        self.interpreters: dict[int, Interpreter] = dict(
            interpreters if interpreters is not None else DEFAULT_INTERPRETERS
        )
        source = matrices if matrices is not None else DEFAULT_MATRICES
        known = self.interpreters.keys() if strict else None

        self.matrices: dict[str, tuple[tuple[int, ...], ...]] = {}
        for name, matrix in source.items():
            validate_matrix(name, matrix, known_codes=known)
            self.matrices[name] = freeze_matrix(matrix)

        if default_matrix not in self.matrices:
            raise MatrixConfigError(f"Default matrix {default_matrix!r} is not registered")
        self.default_matrix = default_matrix
        self.inline_fallback_level = inline_fallback_level

        # One memo slot per matrix name
        self._last: dict[str, HoverSnapshot | None] = dict.fromkeys(self.matrices)

    @classmethod
    def from_config(cls, config: HoverConfig) -> HoverEngine:
        """Build an engine from persisted settings (built-ins plus extra matrices)."""
        matrices: dict[str, Matrix] = dict(DEFAULT_MATRICES)
        matrices.update(config.matrices)
        return cls(
            matrices=matrices,
            default_matrix=config.default_matrix,
            inline_fallback_level=config.inline_fallback_level,
        )

    def reset(self) -> None:
        """Forget the last hover of every matrix so the next one always dispatches."""
        for name in self._last:
            self._last[name] = None

    def hover(
        self,
        drag: Node,
        hover: Node,
        actions: Actions,
        room: Room | tuple[float, float],
        mouse: Vector | tuple[float, float],
        matrix: str | None = None,
    ) -> bool:
        """Dispatch the drop action for ``drag`` at ``mouse`` over ``hover``.

        Returns True when an interpreter ran, False on a memo hit or when
        the zone code has no interpreter.
        """
        name = matrix or self.default_matrix
        try:
            grid = self.matrices[name]
        except KeyError:
            raise KeyError(
                f"Unknown matrix {name!r}, available: {', '.join(sorted(self.matrices))}"
            ) from None

        room = Room(*room)
        mouse = Vector(*mouse)
        rows, cells = matrix_size(grid)
        scale = room_scale(room, grid)
        position = locate_cell(mouse, scale, rows, cells)

        code = grid[position.row][position.cell]
        interpreter = self.interpreters.get(code)
        if interpreter is None:
            log.error(
                "Matrix callback not found: code=%s matrix=%s room=%s mouse=%s "
                "scale=%s cell=(%d, %d) rows=%d cells=%d",
                code,
                name,
                tuple(room),
                tuple(mouse),
                tuple(scale),
                position.row,
                position.cell,
                rows,
                cells,
            )
            return False

        snapshot = HoverSnapshot(
            drag_id=drag.id,
            hover_id=hover.id,
            actions=actions,
            room=room,
            mouse=mouse,
            position=position,
            size=(rows, cells),
            scale=scale,
        )
        if snapshot == self._last.get(name):
            log.debug(
                "hover: memo hit drag=%s hover=%s matrix=%s cell=(%d, %d)",
                drag.id,
                hover.id,
                name,
                position.row,
                position.cell,
            )
            return False
        self._last[name] = snapshot

        log.debug(
            "hover: drag=%s hover=%s matrix=%s cell=(%d, %d) zone=%s",
            drag.id,
            hover.id,
            name,
            position.row,
            position.cell,
            code,
        )
        interpreter(
            drag,
            hover,
            actions,
            HoverContext(
                room=room,
                mouse=mouse,
                position=position,
                size=(rows, cells),
                scale=scale,
                inline_fallback_level=self.inline_fallback_level,
            ),
        )
        return True
