import logging
from typing import Optional, Sequence

import numpy as np
from PIL import Image

from overlay.api.raster import Raster

logging.basicConfig(level=logging.DEBUG)

RED = (1.0, 0.0, 0.0)
GREEN = (0.0, 1.0, 0.0)
BLUE = (0.0, 0.0, 1.0)
WHITE = (1.0, 1.0, 1.0)


def solid(
    color: Sequence[float] = WHITE,
    alpha: float = 1.0,
    size: tuple[int, int] = (4, 4),
    offset: tuple[int, int] = (0, 0),
    name: Optional[str] = None,
) -> Raster:
    """Uniform raster of the given (width, height)."""
    width, height = size
    return Raster(
        color=np.tile(np.asarray(color, dtype=np.float32), (height, width, 1)),
        alpha=np.full((height, width, 1), alpha, dtype=np.float32),
        offset=offset,
        name=name,
    )


def solid_pil(
    rgba: tuple[int, int, int, int] = (255, 255, 255, 255),
    size: tuple[int, int] = (4, 4),
) -> Image.Image:
    return Image.new("RGBA", size, rgba)


def save_asset(directory, name: str, rgba=(255, 255, 255, 255), size=(4, 4)) -> str:
    path = directory.join(name).strpath
    solid_pil(rgba, size).save(path)
    return path


class TaggingBlend(object):
    """Blend that records the fold order in the name of its result."""

    def __init__(self) -> None:
        self.calls: list[tuple[Optional[str], Optional[str]]] = []

    def blend(self, base: Raster, overlay: Raster) -> Raster:
        self.calls.append((base.name, overlay.name))
        return overlay.rename("(%s<%s)" % (base.name, overlay.name))


class LastWriterBlend(object):
    """Non-commutative blend: every pixel takes the overlay's color."""

    def blend(self, base: Raster, overlay: Raster) -> Raster:
        return Raster(color=overlay.color, alpha=base.alpha, name=overlay.name)
