from __future__ import annotations

import asyncio
import logging
import math
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import httpx
from PIL import Image, UnidentifiedImageError

from ..errors import FileReadFailed, ImageDecodeFailed, SelectorInvalid

log = logging.getLogger(__name__)

Source = Union[str, Path, bytes]

Selector = Union[int, float]

DEFAULT_SELECTOR = 1


def parse_selector(signal: Optional[str]) -> Selector:
    """
    Read the image number out of a routing signal such as "#3" or "3".

    An empty signal means the default image, and so do zero and NaN. Whole
    numbers come back as ints ("#3.0" is image 3). Fractions come back as
    floats and end up in the image path as-is, so they fail to load.
    """
    text = (signal or "").strip().lstrip("#").strip()
    if not text:
        return DEFAULT_SELECTOR
    try:
        if "_" in text:
            raise ValueError(text)
        value = float(text)
    except ValueError as e:
        raise SelectorInvalid(f"not an image number: {signal!r}") from e
    if math.isnan(value) or value == 0:
        return DEFAULT_SELECTOR
    if value.is_integer():
        return int(value)
    return value


def selector_or_default(signal: Optional[str]) -> Selector:
    try:
        return parse_selector(signal)
    except SelectorInvalid as e:
        log.warning("%s, falling back to image %d", e, DEFAULT_SELECTOR)
        return DEFAULT_SELECTOR


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def decode_image(data: bytes) -> Image.Image:
    try:
        img = Image.open(BytesIO(data))
        img.load()
        return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeFailed(f"could not decode image ({len(data)} bytes): {e}") from e


class ImageLoader:
    """Finds, reads and decodes source images, from disk or over HTTP."""

    def __init__(
        self,
        base: str = ".",
        template: str = "images/image-{n}.jpg",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base = base
        self.template = template
        self.timeout = timeout
        self._transport = transport

    def resolve(self, selector: Selector) -> str:
        try:
            location = self.template.format(n=selector)
        except (KeyError, IndexError, ValueError) as e:
            raise FileReadFailed(f"bad image template {self.template!r}: {e!r}") from e
        if is_url(self.base):
            return str(httpx.URL(self.base.rstrip("/") + "/").join(location))
        return str(Path(self.base) / location)

    async def read(self, location: Union[str, Path]) -> bytes:
        location = str(location)
        if is_url(location):
            return await self._fetch(location)
        try:
            return await asyncio.to_thread(Path(location).read_bytes)
        except OSError as e:
            raise FileReadFailed(f"could not read {location}: {e}") from e

    async def _fetch(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                r = await client.get(url)
                r.raise_for_status()
                return r.content
        except httpx.HTTPError as e:
            raise FileReadFailed(f"could not fetch {url}: {e}") from e

    async def decode(self, data: bytes) -> Image.Image:
        return await asyncio.to_thread(decode_image, data)

    async def load(self, source: Source) -> Image.Image:
        if isinstance(source, bytes):
            data = source
        else:
            data = await self.read(source)
        img = await self.decode(data)
        log.debug("decoded %dx%d image", img.width, img.height)
        return img
