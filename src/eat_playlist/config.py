"""Session configuration."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 32.0
DEFAULT_TICK_RATE_MS = 400


@dataclass(frozen=True)
class SessionConfig:
    """Configuration for one game session.

    Supports JSON serialization for reproducibility.
    """

    rows: int = 20
    columns: int = 12
    cell_size: float = DEFAULT_CELL_SIZE
    tick_rate_ms: int = DEFAULT_TICK_RATE_MS
    seed: int | None = None
    playlist: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError("rows and columns must be positive.")
        if not math.isfinite(self.cell_size) or self.cell_size <= 0:
            raise ValueError("cell_size must be positive.")
        if self.tick_rate_ms <= 0:
            raise ValueError("tick_rate_ms must be positive.")

    @classmethod
    def from_viewport(
        cls,
        width: float,
        height: float,
        cell_size: float = DEFAULT_CELL_SIZE,
        **kwargs,
    ) -> SessionConfig:
        """Fit whole cells of *cell_size* into a viewport."""
        if not math.isfinite(cell_size) or cell_size <= 0:
            raise ValueError("cell_size must be positive.")
        fit_rows, fit_columns = height / cell_size, width / cell_size
        if not (math.isfinite(fit_rows) and math.isfinite(fit_columns)):
            raise ValueError("Viewport dimensions must be finite.")
        return cls(
            rows=math.floor(fit_rows),
            columns=math.floor(fit_columns),
            cell_size=cell_size,
            **kwargs,
        )

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks."""
        return self.tick_rate_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["playlist"] = list(self.playlist)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> SessionConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "playlist" in raw:
            raw["playlist"] = tuple(raw["playlist"])
        return cls(**raw)
