from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ...models.grid import Grid
from ...services.sink import MessageKind
from ..render import grid_to_text


class GlyphView(Static):
    """Terminal sink for the pipeline. Fades are opacity animations lasting `fade_time`."""

    DEFAULT_CSS = """
    GlyphView {
        width: auto;
        height: auto;
        padding: 1 2;
        opacity: 0;
    }
    GlyphView.loading { color: $text-muted; }
    GlyphView.error { color: $error; }
    """

    def __init__(self, fade_time: float = 1.2, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.fade_time = fade_time
        self.shown = False

    def set_visible(self, visible: bool) -> None:
        self.shown = visible
        opacity = 1.0 if visible else 0.0
        if self.fade_time <= 0:
            self.styles.opacity = opacity
        else:
            self.styles.animate("opacity", opacity, duration=self.fade_time)

    def clear(self) -> None:
        self.remove_class("loading", "error")
        self.update("")

    def show_message(self, kind: MessageKind, text: str) -> None:
        self.remove_class("loading", "error")
        self.add_class(kind.value)
        self.update(Text(text, style="bold"))

    def show_grid(self, grid: Grid) -> None:
        self.update(grid_to_text(grid))
