"""Composite implementation for flattening a layer stack."""

import logging
from typing import Callable, Optional, Union

from PIL import Image

from overlay.api import pil_io
from overlay.api.layer_stack import LayerStack
from overlay.api.protocols import BlendCapability
from overlay.api.raster import Raster
from overlay.composite.blend import SourceOverBlend

logger = logging.getLogger(__name__)

BlendFunc = Callable[[Raster, Raster], Raster]

# Stateless, so a single instance is shared by every call.
DEFAULT_BLEND = SourceOverBlend()


def _get_blend_func(blend: Union[BlendCapability, BlendFunc, None]) -> BlendFunc:
    if blend is None:
        return DEFAULT_BLEND.blend
    if isinstance(blend, BlendCapability):
        return blend.blend
    if callable(blend):
        return blend
    raise TypeError(
        f"Expected BlendCapability or callable, got {type(blend).__name__}"
    )


def composite(
    stack: LayerStack,
    blend: Union[BlendCapability, BlendFunc, None] = None,
) -> Optional[Raster]:
    """
    Flatten the layers of ``stack`` into a single raster.

    Layers are painted bottom to top: the result is
    ``blend(...blend(blend(layer0, layer1), layer2)..., layerN)``. The order
    is never changed because blending is not commutative.

    A stack with fewer than two layers has nothing to blend. Its only layer
    is returned unchanged, or None when it is empty.

    Args:
        stack: Layers to composite. The stack is not modified.
        blend: Blend backend, either an object with a
            ``blend(base, overlay)`` method or a plain callable. Defaults to
            :py:class:`~overlay.composite.blend.SourceOverBlend`.

    Returns:
        The flattened raster, or None for an empty stack.

    Examples:
        >>> from overlay import LayerStack
        >>> from overlay.composite import composite
        >>> stack = LayerStack({0: "Square", 1: "Triangle"})
        >>> raster = composite(stack)
    """
    blend_func = _get_blend_func(blend)
    if stack.count < 2:
        logger.debug("Degenerate composite of %d layer(s)" % stack.count)
        return stack.get(0)

    compositor = Compositor(blend_func)
    for raster in stack:
        compositor.apply(raster)
    return compositor.finish()


def composite_pil(
    stack: LayerStack,
    blend: Union[BlendCapability, BlendFunc, None] = None,
    mode: str = "RGBA",
) -> Optional[Image.Image]:
    """
    Flatten the layers of ``stack`` and return a PIL Image.

    Args:
        stack: Layers to composite.
        blend: Blend backend, see :py:func:`composite`.
        mode: Output mode, one of ``RGBA``, ``RGB``, ``LA`` or ``L``.

    Returns:
        PIL Image with the composited result, or None for an empty stack.
    """
    raster = composite(stack, blend)
    if raster is None:
        return None
    return pil_io.convert_raster_to_pil(raster, mode)


class Compositor(object):
    """Composite context.

    Example::

        compositor = Compositor(SourceOverBlend())
        for raster in stack:
            compositor.apply(raster)
        raster = compositor.finish()
    """

    def __init__(self, blend: Union[BlendCapability, BlendFunc, None] = None):
        self._blend = _get_blend_func(blend)
        self._working: Optional[Raster] = None
        self._applied = 0

    @property
    def applied(self) -> int:
        """Number of layers applied so far."""
        return self._applied

    def apply(self, raster: Raster) -> None:
        """Paint ``raster`` over the working image."""
        if self._working is None:
            logger.debug("Seeding with %r" % raster)
            self._working = raster
        else:
            logger.debug("Compositing %r as layer %d" % (raster, self._applied))
            self._working = self._blend(self._working, raster)
        self._applied += 1

    def finish(self) -> Optional[Raster]:
        return self._working
