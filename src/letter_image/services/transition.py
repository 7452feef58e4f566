from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from .sink import GlyphSink

log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class Visibility(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class TransitionController:
    """
    Hidden/Visible switch in front of the sink.

    A fade waits out `fade_time` so that nothing touches the sink's content
    until the animation has finished. Fading to the state already shown is a
    no-op and does not wait.
    """

    def __init__(self, sink: GlyphSink, fade_time: float = 1.2, sleep: Sleep = asyncio.sleep) -> None:
        self.sink = sink
        self.fade_time = fade_time
        self._sleep = sleep
        self.state = Visibility.HIDDEN

    @property
    def visible(self) -> bool:
        return self.state is Visibility.VISIBLE

    async def fade_in(self) -> None:
        if self.visible:
            return
        await self._switch(Visibility.VISIBLE)

    async def fade_out(self) -> None:
        if not self.visible:
            return
        await self._switch(Visibility.HIDDEN)

    async def _switch(self, state: Visibility) -> None:
        self.state = state
        self.sink.set_visible(state is Visibility.VISIBLE)
        log.debug("fading %s over %.2fs", state.value, self.fade_time)
        await self._sleep(self.fade_time)
