from __future__ import annotations

import logging
from typing import List

from ..config import AlphaMode, AlphaSource
from ..models.grid import Grid, GridCell
from .cycler import LetterCycler
from .surface import Pixel, TargetSurface

log = logging.getLogger(__name__)

WHITE = (255, 255, 255)


def clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return min(hi, max(lo, v))


def invlerp(a: float, b: float, v: float) -> float:
    """Where `v` sits between `a` and `b`, clamped to 0-1."""
    return clamp((v - a) / (b - a))


def darkness(pixel: Pixel) -> float:
    r, g, b = pixel[0], pixel[1], pixel[2]
    return (invlerp(0, 255, r) + invlerp(0, 255, g) + invlerp(0, 255, b)) / 3


class GridSampler:
    """
    Turns the drawn surface into a Grid: one pixel per cell, one letter per cell.

    alpha_source picks where the alpha comes from (the pixel's alpha channel or
    its averaged brightness) and alpha_mode picks how it is reported. Both are
    single choices, so no two alpha treatments ever stack.
    """

    def __init__(
        self,
        cycler: LetterCycler,
        *,
        monochrome: bool = False,
        alpha_source: AlphaSource = "alpha",
        alpha_mode: AlphaMode = "raw",
    ) -> None:
        if alpha_source not in ("alpha", "darkness"):
            raise ValueError(f"unknown alpha_source {alpha_source!r}")
        if alpha_mode not in ("raw", "normalized", "inverted"):
            raise ValueError(f"unknown alpha_mode {alpha_mode!r}")
        self.cycler = cycler
        self.monochrome = monochrome
        self.alpha_source = alpha_source
        self.alpha_mode = alpha_mode

    def alpha_for(self, pixel: Pixel) -> float:
        if self.alpha_source == "darkness":
            # already on a 0-1 scale
            value = darkness(pixel)
            normalized = value
        else:
            value = pixel[3]
            normalized = pixel[3] / 255

        if self.alpha_mode == "normalized":
            return normalized
        if self.alpha_mode == "inverted":
            return 1 - normalized
        return value

    def cell_for(self, pixel: Pixel) -> GridCell:
        red, green, blue = WHITE if self.monochrome else pixel[:3]
        return GridCell(
            letter=self.cycler.next(),
            red=red,
            green=green,
            blue=blue,
            alpha=self.alpha_for(pixel),
        )

    def build_grid(self, surface: TargetSurface, columns: int = 100, rows: int = 77) -> Grid:
        x_step = surface.width / columns
        y_step = surface.height / rows

        cells: List[GridCell] = []
        for y in range(rows):
            for x in range(columns):
                pixel = surface.pixel(int(x * x_step), int(y * y_step))
                cells.append(self.cell_for(pixel))

        log.debug("sampled %dx%d grid, cursor now %d", columns, rows, self.cycler.cursor)
        return Grid(columns=columns, rows=rows, cells=tuple(cells))
