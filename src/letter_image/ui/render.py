from __future__ import annotations

from rich.style import Style
from rich.text import Text
from textual.color import Color

from ..models.grid import Grid, GridCell

BACKGROUND = Color(0, 0, 0)


def cell_colour(cell: GridCell, background: Color = BACKGROUND) -> Color:
    # rgba() semantics: anything above 1 is fully opaque
    return background.blend(Color(cell.red, cell.green, cell.blue), cell.opacity)


def grid_to_text(grid: Grid, background: Color = BACKGROUND) -> Text:
    text = Text(no_wrap=True, end="")
    for index, row in enumerate(grid.iter_rows()):
        if index:
            text.append("\n")
        for cell in row:
            # the empty letter still takes up its column
            text.append(cell.letter or " ", Style(color=cell_colour(cell, background).rich_color))
    return text


def grid_to_plain(grid: Grid) -> str:
    return "\n".join("".join(cell.letter or " " for cell in row) for row in grid.iter_rows())
