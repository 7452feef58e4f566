"""
Pipeline orchestration.

One run goes: loading screen -> acquire image -> place and sample -> present,
with every content change bracketed by a fade out and a fade in. Any pipeline
failure ends on the same fixed error screen.

Runs are not serialised. A new routing signal while a run is waiting on a
decode or a fade starts a second run next to the first. With
``cancel_stale_runs`` on (the default) every run carries a generation token
and quietly drops out at its next suspension point once a newer run exists;
with it off both runs carry on and the last one to reach the sink wins.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from ..config import ERROR_MESSAGE, FILE_LOADING_MESSAGE, LOADING_MESSAGE, Settings
from ..errors import LetterImageError, NoFileProvided, RunSuperseded
from ..models.grid import Grid
from .cycler import LetterCycler
from .loader import ImageLoader, Source, selector_or_default
from .sampler import GridSampler
from .sink import GlyphSink, MessageKind
from .surface import TargetSurface
from .transition import Sleep, TransitionController

log = logging.getLogger(__name__)


class RunOutcome(str, Enum):
    PRESENTED = "presented"
    FAILED = "failed"
    SUPERSEDED = "superseded"


def describe(source: Source) -> str:
    if isinstance(source, bytes):
        return f"<{len(source)} byte upload>"
    return str(source)


class PipelineOrchestrator:
    def __init__(
        self,
        sink: GlyphSink,
        settings: Optional[Settings] = None,
        *,
        loader: Optional[ImageLoader] = None,
        cycler: Optional[LetterCycler] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.settings = settings or Settings()
        self.sink = sink
        self.cycler = cycler or LetterCycler(self.settings.prose)
        self.surface = TargetSurface(self.settings.surface_width, self.settings.surface_height)
        self.sampler = GridSampler(
            self.cycler,
            monochrome=self.settings.monochrome,
            alpha_source=self.settings.alpha_source,
            alpha_mode=self.settings.alpha_mode,
        )
        self.transition = TransitionController(sink, fade_time=self.settings.fade_time, sleep=sleep)
        self.loader = loader or ImageLoader(
            base=self.settings.base,
            template=self.settings.image_template,
            timeout=self.settings.http_timeout,
        )
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def _begin(self) -> int:
        self._generation += 1
        return self._generation

    def _ensure_current(self, token: int) -> None:
        if self.settings.cancel_stale_runs and token != self._generation:
            raise RunSuperseded(f"run {token} superseded by run {self._generation}")

    async def kick_off(self, source: Optional[Source] = None, *, selector: Optional[str] = None) -> RunOutcome:
        """Run the whole pipeline for `source`, or for the image picked by `selector`."""
        token = self._begin()
        try:
            await self.loading()
            self._ensure_current(token)

            if source is None:
                source = self.loader.resolve(selector_or_default(selector))
            log.debug("run %d: acquiring %s", token, describe(source))
            image = await self.loader.load(source)
            self._ensure_current(token)

            grid = self.build_grid(image)

            await self.clear_grid()
            self._ensure_current(token)
            self.sink.show_grid(grid)
            await self.transition.fade_in()
        except RunSuperseded as e:
            log.info("%s, abandoning", e)
            return RunOutcome.SUPERSEDED
        except LetterImageError as e:
            log.warning("run %d failed: %s", token, e)
            return await self._fail(token)

        log.info("run %d: presented %s", token, describe(source))
        return RunOutcome.PRESENTED

    async def input_change(self, path: Optional[Union[str, Path]]) -> RunOutcome:
        """File picker entry point: read the chosen file, then run the pipeline on its bytes."""
        token = self._begin()
        try:
            await self.loading(FILE_LOADING_MESSAGE)
            self._ensure_current(token)
            if not path:
                raise NoFileProvided("no file was selected")
            data = await self.loader.read(path)
            self._ensure_current(token)
        except RunSuperseded as e:
            log.info("%s, abandoning", e)
            return RunOutcome.SUPERSEDED
        except LetterImageError as e:
            log.warning("run %d failed: %s", token, e)
            return await self._fail(token)

        return await self.kick_off(data)

    def build_grid(self, image: Image.Image) -> Grid:
        self.surface.draw_fitted(image)
        return self.sampler.build_grid(self.surface, self.settings.columns, self.settings.rows)

    async def clear_grid(self) -> None:
        await self.transition.fade_out()
        self.sink.clear()

    async def loading(self, message: str = LOADING_MESSAGE) -> None:
        await self.clear_grid()
        self.sink.show_message(MessageKind.LOADING, message)
        await self.transition.fade_in()

    async def handle_error(self) -> None:
        await self.clear_grid()
        self.sink.show_message(MessageKind.ERROR, ERROR_MESSAGE)
        await self.transition.fade_in()

    async def _fail(self, token: int) -> RunOutcome:
        try:
            self._ensure_current(token)
        except RunSuperseded as e:
            log.info("%s, not showing its error", e)
            return RunOutcome.SUPERSEDED
        await self.handle_error()
        return RunOutcome.FAILED
