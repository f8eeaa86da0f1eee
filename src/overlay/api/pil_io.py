"""
PIL IO module.
"""

import logging

import numpy as np
from PIL import Image

from overlay.api.raster import Raster

logger = logging.getLogger(__name__)

PIL_CHANNELS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}


def get_pil_channels(pil_mode: str) -> int:
    """
    Get the number of channels for supported PIL modes.

    :raises ValueError: If the mode is not supported.
    """
    if pil_mode not in PIL_CHANNELS:
        raise ValueError("Unsupported PIL mode: %s" % pil_mode)
    return PIL_CHANNELS[pil_mode]


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.round(255 * np.clip(values, 0.0, 1.0)).astype(np.uint8)


def convert_raster_to_pil(raster: Raster, mode: str = "RGBA") -> Image.Image:
    """
    Convert a raster to a PIL Image.

    Grayscale modes use ITU-R 601-2 luma, the same transform Pillow applies
    for ``convert("L")``. The raster offset is not represented in the output.

    :param raster: Raster to convert.
    :param mode: One of ``RGBA``, ``RGB``, ``LA`` or ``L``.
    :raises ValueError: If the mode is not supported.
    """
    channels = get_pil_channels(mode)
    color = raster.color
    if mode in ("L", "LA"):
        luma = np.array([0.299, 0.587, 0.114], dtype=np.float32)
        color = np.tensordot(color, luma, axes=([2], [0]))[:, :, np.newaxis]

    if mode.endswith("A"):
        color = np.concatenate((color, raster.alpha), axis=2)

    data = _to_uint8(color)
    assert data.shape[2] == channels
    if channels == 1:
        data = data[:, :, 0]
    logger.debug("Converting %r to %s" % (raster, mode))
    return Image.fromarray(data)
