"""
Composite module for flattening layer stacks.

Layers are reduced bottom to top by repeated pairwise source-over blending.
The blend itself is pluggable through
:py:class:`~overlay.api.protocols.BlendCapability`; the default backend is
:py:class:`~overlay.composite.blend.SourceOverBlend`, which works on NumPy
arrays.

Key modules:

- :py:mod:`overlay.composite.composite`: Main compositing functions
- :py:mod:`overlay.composite.blend`: Source-over blend implementation

Example usage::

    from overlay import LayerStack
    from overlay.composite import composite_pil

    stack = LayerStack({0: "Square", 1: "Triangle"})
    composite_pil(stack).save("output.png")
"""

from overlay.composite.blend import SourceOverBlend
from overlay.composite.composite import Compositor, composite, composite_pil

__all__ = [
    "Compositor",
    "SourceOverBlend",
    "composite",
    "composite_pil",
]
