from __future__ import annotations

from typing import Optional

from textual.app import App

from .config import Settings
from .ui.screens.glyph_screen import GlyphScreen


class LetterImageApp(App):
    CSS_PATH = None
    TITLE = "letter-image"

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.settings = settings

    def open_glyphs(self, selector: Optional[str] = None):
        self.push_screen(GlyphScreen(self.settings, selector))
