"""
Source-over blending.

The compositing formula follows the W3C Compositing and Blending spec with
the ``normal`` separable blend function, which reduces to Porter-Duff
source-over::

    alpha_r = alpha_s + alpha_b * (1 - alpha_s)
    color_r = (alpha_s * C_s + alpha_b * (1 - alpha_s) * C_b) / alpha_r
"""

import logging

import numpy as np

from overlay.api.raster import Raster
from overlay.composite import utils

logger = logging.getLogger(__name__)


def normal(Cb, Cs):
    return Cs


def source_over(
    color_b: np.ndarray,
    alpha_b: np.ndarray,
    color_s: np.ndarray,
    alpha_s: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Composite a straight-alpha source over a straight-alpha backdrop.

    All arrays must share height and width. Pixels where both inputs are
    fully transparent come out with color 0.

    :return: Tuple of (color, alpha).
    """
    alpha = utils.union(alpha_b, alpha_s)
    color_s = (1.0 - alpha_b) * color_s + alpha_b * normal(color_b, color_s)
    color_t = alpha_s * color_s + (1.0 - alpha_s) * alpha_b * color_b
    color = utils.clip(utils.divide(color_t, alpha))
    return color, utils.clip(alpha)


class SourceOverBlend(object):
    """
    NumPy backend for the source-over blend capability.

    When the extents differ, the canvas is the union of both bounding boxes.
    Each raster is placed at its own offset over a transparent canvas, so the
    overlay only changes its own region and the base shows everywhere else.

    Instances hold no mutable state and can be shared between threads.
    """

    def blend(self, base: Raster, overlay: Raster) -> Raster:
        if base.bbox == overlay.bbox:
            viewport = base.bbox
            color_b, alpha_b = base.color, base.alpha
            color_s, alpha_s = overlay.color, overlay.alpha
        else:
            viewport = utils.bbox_union(base.bbox, overlay.bbox)
            logger.debug("Blending mismatched extents into %s" % (viewport,))
            color_b = utils.paste(viewport, base.bbox, base.color)
            alpha_b = utils.paste(viewport, base.bbox, base.alpha)
            color_s = utils.paste(viewport, overlay.bbox, overlay.color)
            alpha_s = utils.paste(viewport, overlay.bbox, overlay.alpha)

        color, alpha = source_over(color_b, alpha_b, color_s, alpha_s)
        return Raster(color=color, alpha=alpha, offset=(viewport[0], viewport[1]))

    __call__ = blend

    def __repr__(self) -> str:
        return "%s()" % self.__class__.__name__
