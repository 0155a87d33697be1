"""Configuration loading, saving, and defaults for the hover engine."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from blockdrop.core.interpreters import INLINE_FALLBACK_LEVEL
from blockdrop.core.zones import DEFAULT_MATRICES, DEFAULT_MATRIX
from blockdrop.log import get_logger

log = get_logger(name="config")

DEFAULT_CONFIG_DIR = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "blockdrop"
)
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "hover.json"


@dataclass
class HoverConfig:
    """Hover engine settings with sensible defaults."""

    # Matrix used when a hover doesn't name one
    default_matrix: str = DEFAULT_MATRIX
    # Level for inline zones when the drop can't become inline
    inline_fallback_level: int = INLINE_FALLBACK_LEVEL
    # Extra named matrices of integer zone codes, merged over the built-ins
    matrices: dict[str, list[list[int]]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._path: Path = DEFAULT_CONFIG_FILE

    def matrix_names(self) -> set[str]:
        """Names usable as default_matrix: built-ins plus configured ones."""
        return set(DEFAULT_MATRICES) | set(self.matrices)

    @classmethod
    def load(cls, path: Path | str | None = None) -> HoverConfig:
        """Load config from JSON file, falling back to defaults for missing keys."""
        path = Path(path) if path else DEFAULT_CONFIG_FILE
        if not path.exists():
            config = cls()
            config._path = path
            config.save(path)
            return config

        with open(path) as f:
            data: dict[str, Any] = json.load(f)

        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        config = cls(**filtered)
        config._path = path
        # Validate matrix name (fallback to default if unknown)
        if config.default_matrix not in config.matrix_names():
            log.warning("Unknown default matrix %r, using %s", config.default_matrix, DEFAULT_MATRIX)
            config.default_matrix = DEFAULT_MATRIX
        return config

    def save(self, path: Path | str | None = None) -> None:
        """Save config to JSON file."""
        path = Path(path) if path else self._path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)
            f.write("\n")
