from __future__ import annotations

import asyncio
import contextlib
import logging
import math
from typing import Awaitable, Optional, Set

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Input

from ...config import Settings
from ...services.loader import DEFAULT_SELECTOR, selector_or_default
from ...services.pipeline import PipelineOrchestrator, RunOutcome
from ..widgets.glyph_view import GlyphView

log = logging.getLogger(__name__)


class GlyphScreen(Screen):
    BINDINGS = [
        ("ctrl+n", "next_image", "Next image"),
        ("ctrl+b", "previous_image", "Previous image"),
        ("ctrl+o", "open_file", "Open file"),
        ("ctrl+q", "app.quit", "Quit"),
    ]

    DEFAULT_CSS = """
    #controls { height: auto; }
    #selector { width: 20; }
    #file { width: 1fr; }
    """

    def __init__(self, settings: Settings, selector: Optional[str] = None) -> None:
        super().__init__()
        self.settings = settings
        self.selector = selector
        self.pipeline: Optional[PipelineOrchestrator] = None
        self._tasks: Set[asyncio.Task] = set()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="controls"):
            yield Input(value=self.selector or "", placeholder="#1", id="selector")
            yield Input(placeholder="Path to an image file", id="file")
        with VerticalScroll():
            yield GlyphView(fade_time=self.settings.fade_time, id="output")
        yield Footer()

    @property
    def glyph_view(self) -> GlyphView:
        return self.query_one("#output", GlyphView)

    async def on_mount(self) -> None:
        self.pipeline = PipelineOrchestrator(self.glyph_view, self.settings)
        self.signal_changed(self.selector)

    async def on_unmount(self) -> None:
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await task

    def _spawn(self, run: Awaitable[RunOutcome]) -> None:
        task = asyncio.ensure_future(run)
        self._tasks.add(task)
        task.add_done_callback(self._run_done)

    def _run_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("pipeline run crashed", exc_info=task.exception())

    def signal_changed(self, signal: Optional[str]) -> None:
        """A new routing signal: start a run for it, whatever is already in flight."""
        self.selector = signal
        self.sub_title = f"#{selector_or_default(signal)}"
        log.debug("routing signal %r, %d runs in flight", signal, len(self._tasks))
        self._spawn(self.pipeline.kick_off(selector=signal))

    def _step(self, delta: int) -> None:
        current = selector_or_default(self.selector)
        if not isinstance(current, int):
            # fractional selectors step from their whole part
            current = int(current) if math.isfinite(current) else DEFAULT_SELECTOR
        n = max(1, current + delta)
        self.query_one("#selector", Input).value = f"#{n}"
        self.signal_changed(str(n))

    @on(Input.Submitted, "#selector")
    def on_selector_submitted(self, event: Input.Submitted) -> None:
        self.signal_changed(event.value)

    @on(Input.Submitted, "#file")
    def on_file_submitted(self, event: Input.Submitted) -> None:
        path = event.value.strip() or None
        self.sub_title = path or ""
        self._spawn(self.pipeline.input_change(path))

    def action_next_image(self) -> None:
        self._step(1)

    def action_previous_image(self) -> None:
        self._step(-1)

    def action_open_file(self) -> None:
        self.query_one("#file", Input).focus()
