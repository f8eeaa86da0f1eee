"""
overlay: stack images into ordered layers and flatten them into one image.

Basic usage::

    from overlay import LayerStack
    from overlay.composite import composite_pil

    # Build a stack from named assets, bottom layer first
    stack = LayerStack({0: "Square", 1: "Triangle"})
    stack.append("Polygon")

    # Flatten with source-over blending and save
    composite_pil(stack).save("output.png")

Architecture:

- :py:mod:`overlay.api`: Layer stack, rasters, and image resolution
- :py:mod:`overlay.composite`: Sequential source-over compositing
- :py:mod:`overlay.errors`: Errors raised for invalid layer content
"""

from overlay.api.layer_stack import LayerStack
from overlay.version import __version__

__all__ = ["LayerStack", "__version__"]
