"""
Raster image handle stored in each layer.
"""

import logging
from typing import Any, Optional

import numpy as np
from attrs import define, evolve, field

logger = logging.getLogger(__name__)


def _readonly(value: Any) -> np.ndarray:
    array = np.array(value, dtype=np.float32)
    array.setflags(write=False)
    return array


def _offset(value: Any) -> tuple[int, int]:
    left, top = value
    return (int(left), int(top))


@define(frozen=True, eq=False, repr=False)
class Raster:
    """
    Immutable RGBA raster in straight (non-premultiplied) alpha.

    Rasters are created by :py:class:`~overlay.api.resolver.Resolver` and by
    blend backends; the arrays are copied and flagged read-only, so a raster
    can be shared freely between layer stacks and threads.

    Example::

        import numpy as np
        from overlay.api.raster import Raster

        red = Raster(
            color=np.tile([1.0, 0.0, 0.0], (4, 4, 1)),
            alpha=np.ones((4, 4, 1)),
            name="red",
        )

    .. py:attribute:: color

        float32 array of shape ``(height, width, 3)`` in ``[0, 1]``.

    .. py:attribute:: alpha

        float32 array of shape ``(height, width, 1)`` in ``[0, 1]``.

    .. py:attribute:: offset

        ``(left, top)`` position on the shared canvas.

    .. py:attribute:: name

        Optional label, usually the asset name.
    """

    color: np.ndarray = field(converter=_readonly)
    alpha: np.ndarray = field(converter=_readonly)
    offset: tuple[int, int] = field(default=(0, 0), converter=_offset)
    name: Optional[str] = field(default=None)

    @color.validator
    def _validate_color(self, attribute: Any, value: np.ndarray) -> None:
        if value.ndim != 3 or value.shape[2] != 3:
            raise ValueError("Expected color of shape (h, w, 3), got %s" % (value.shape,))

    @alpha.validator
    def _validate_alpha(self, attribute: Any, value: np.ndarray) -> None:
        if value.ndim != 3 or value.shape[2] != 1:
            raise ValueError("Expected alpha of shape (h, w, 1), got %s" % (value.shape,))
        if value.shape[:2] != self.color.shape[:2]:
            raise ValueError(
                "Color and alpha sizes differ: %s vs %s"
                % (self.color.shape[:2], value.shape[:2])
            )

    @property
    def width(self) -> int:
        return self.color.shape[1]

    @property
    def height(self) -> int:
        return self.color.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @property
    def left(self) -> int:
        return self.offset[0]

    @property
    def top(self) -> int:
        return self.offset[1]

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple."""
        return (
            self.left,
            self.top,
            self.left + self.width,
            self.top + self.height,
        )

    def numpy(self) -> np.ndarray:
        """Return a writable ``(height, width, 4)`` RGBA float32 array."""
        return np.concatenate((self.color, self.alpha), axis=2)

    def rename(self, name: Optional[str]) -> "Raster":
        """Return the same pixels under a different name."""
        return evolve(self, name=name)

    def moved(self, left: int, top: int) -> "Raster":
        """Return the same pixels at a different offset."""
        return evolve(self, offset=(left, top))

    def __repr__(self) -> str:
        return "%s(%r size=%dx%d offset=%s)" % (
            self.__class__.__name__,
            self.name,
            self.width,
            self.height,
            self.offset,
        )
