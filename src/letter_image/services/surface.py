from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image

from ..errors import ImageDecodeFailed
from ..models.grid import Placement
from .scaler import compute_placement

log = logging.getLogger(__name__)

Pixel = Tuple[int, int, int, int]
TRANSPARENT: Pixel = (0, 0, 0, 0)


class TargetSurface:
    """Fixed-size RGBA scratch buffer the scaled image is drawn onto before sampling."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"surface must have a positive size, got {width}x{height}")
        self.width = width
        self.height = height
        self.buffer = Image.new("RGBA", (width, height), TRANSPARENT)
        self._pixels = self.buffer.load()

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def clear(self) -> None:
        self.buffer.paste(TRANSPARENT, (0, 0, self.width, self.height))
        self._pixels = self.buffer.load()

    def draw(self, image: Image.Image, placement: Placement) -> None:
        width = max(1, round(placement.width))
        height = max(1, round(placement.height))
        scaled = image.convert("RGBA").resize((width, height), Image.BILINEAR)
        # paste clips anything that falls outside the buffer
        self.buffer.paste(scaled, (round(placement.x), round(placement.y)))
        self._pixels = self.buffer.load()
        log.debug(
            "drew %dx%d image at (%.1f, %.1f) size %dx%d",
            image.width, image.height, placement.x, placement.y, width, height,
        )

    def draw_fitted(self, image: Image.Image) -> Placement:
        """Clear, place and draw `image` in one go."""
        try:
            placement = compute_placement(image.width, image.height, self.width, self.height)
        except ValueError as e:
            raise ImageDecodeFailed(str(e)) from e
        self.clear()
        self.draw(image, placement)
        return placement

    def pixel(self, x: int, y: int) -> Pixel:
        x = min(max(int(x), 0), self.width - 1)
        y = min(max(int(y), 0), self.height - 1)
        return self._pixels[x, y]
