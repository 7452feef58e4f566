from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

import pytest
from PIL import Image

from letter_image.logs import LOGGER_NAME

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers every fade delay."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    log = logging.getLogger(LOGGER_NAME)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def solid(size: Tuple[int, int], colour=RED) -> Image.Image:
    return Image.new("RGBA", size, colour)


def save_image(path: Path, size: Tuple[int, int], colour=RED, fmt: str = "PNG") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    img = solid(size, colour)
    if fmt == "JPEG":
        img = img.convert("RGB")
    img.save(path, fmt)
    return path


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """A base directory laid out like the site: images/image-<n>.jpg."""
    save_image(tmp_path / "images" / "image-1.jpg", (120, 90), BLUE, "JPEG")
    save_image(tmp_path / "images" / "image-3.jpg", (200, 100), RED, "JPEG")
    return tmp_path
