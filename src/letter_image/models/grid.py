from __future__ import annotations

from typing import Tuple

from pydantic import Field, model_validator

from .common import FrozenModel

class Placement(FrozenModel):
    """Where a source image lands on the target surface, in surface pixels."""
    x: float
    y: float
    width: float
    height: float

class GridCell(FrozenModel):
    letter: str = Field(max_length=1)
    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)
    # 0-255 in raw mode, 0-1 when normalized or inverted
    alpha: float

    @property
    def opacity(self) -> float:
        """Opacity as a CSS rgba() consumer would see it."""
        return min(1.0, max(0.0, self.alpha))

class Grid(FrozenModel):
    columns: int = Field(gt=0)
    rows: int = Field(gt=0)
    cells: Tuple[GridCell, ...]

    @model_validator(mode="after")
    def _check_size(self) -> "Grid":
        expected = self.columns * self.rows
        if len(self.cells) != expected:
            raise ValueError(f"grid needs {expected} cells, got {len(self.cells)}")
        return self

    def __len__(self) -> int:
        return len(self.cells)

    def row(self, index: int) -> Tuple[GridCell, ...]:
        start = index * self.columns
        return self.cells[start:start + self.columns]

    def iter_rows(self):
        for index in range(self.rows):
            yield self.row(index)

    @property
    def text(self) -> str:
        return "".join(cell.letter for cell in self.cells)
