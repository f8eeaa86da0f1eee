"""
Conversion of in-memory images to RGBA float arrays.
"""

import logging
from typing import Optional

import numpy as np
from PIL import Image

from overlay.api.raster import Raster

logger = logging.getLogger(__name__)

# Maximum values for supported integer dtypes.
_DTYPE_SCALE = {
    np.dtype(np.uint8): 255.0,
    np.dtype(np.uint16): 65535.0,
}


def get_image_data(image: Image.Image) -> np.ndarray:
    """Convert a PIL image to a ``(height, width, 4)`` float32 RGBA array.

    Non-RGBA modes are converted through Pillow first, which handles palette
    transparency and grayscale expansion.

    :raises ValueError: If the image is empty or cannot be converted.
    """
    if image.width == 0 or image.height == 0:
        raise ValueError("Empty image: %dx%d" % image.size)
    if image.mode != "RGBA":
        logger.debug("Converting %s image to RGBA" % image.mode)
        image = image.convert("RGBA")
    return np.asarray(image, dtype=np.float32) / 255.0


def get_array_data(array: np.ndarray) -> np.ndarray:
    """Normalize a NumPy image to a ``(height, width, 4)`` float32 RGBA array.

    Accepted shapes are ``(h, w)``, ``(h, w, 1)``, ``(h, w, 3)`` and
    ``(h, w, 4)``. Integer arrays are scaled by their dtype maximum, float
    arrays are taken to be in ``[0, 1]`` and clipped.

    :raises ValueError: On unsupported shape or dtype.
    """
    if array.ndim == 2:
        array = array[:, :, np.newaxis]
    if array.ndim != 3 or array.shape[2] not in (1, 3, 4):
        raise ValueError("Unsupported array shape: %s" % (array.shape,))
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise ValueError("Empty array: %s" % (array.shape,))

    if array.dtype in _DTYPE_SCALE:
        data = array.astype(np.float32) / _DTYPE_SCALE[array.dtype]
    elif np.issubdtype(array.dtype, np.floating):
        if not np.all(np.isfinite(array)):
            raise ValueError("Array contains non-finite values")
        data = np.clip(array.astype(np.float32), 0.0, 1.0)
    else:
        raise ValueError("Unsupported array dtype: %s" % array.dtype)

    channels = data.shape[2]
    if channels == 1:
        color = np.repeat(data, 3, axis=2)
        alpha = np.ones(data.shape, dtype=np.float32)
    elif channels == 3:
        color = data
        alpha = np.ones(data.shape[:2] + (1,), dtype=np.float32)
    else:
        color, alpha = data[:, :, :3], data[:, :, 3:]
    return np.concatenate((color, alpha), axis=2)


def to_raster(
    rgba: np.ndarray,
    offset: tuple[int, int] = (0, 0),
    name: Optional[str] = None,
) -> Raster:
    """Split an RGBA array into a :py:class:`~overlay.api.raster.Raster`."""
    return Raster(color=rgba[:, :, :3], alpha=rgba[:, :, 3:], offset=offset, name=name)
